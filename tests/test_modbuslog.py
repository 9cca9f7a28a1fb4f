from modscan_core.modbuslog import DEFAULT_ROW_LIMIT, MessageLog


def test_default_limit_is_thirty():
    assert MessageLog().row_limit == 30
    assert DEFAULT_ROW_LIMIT == 30


def test_append_keeps_order():
    log = MessageLog()
    for i in range(3):
        log.append(i)
    assert list(log) == [0, 1, 2]


def test_none_is_ignored():
    log = MessageLog()
    log.append(None)
    assert len(log) == 0


def test_oldest_dropped_beyond_limit():
    log = MessageLog(row_limit=5)
    for i in range(12):
        log.append(i)
    assert len(log) == 5
    assert list(log) == list(range(7, 12))


def test_row_limit_minimum_one():
    log = MessageLog()
    log.set_row_limit(0)
    assert log.row_limit == 1
    log.append("a")
    log.append("b")
    assert list(log) == ["b"]


def test_lowering_limit_applies_on_next_append():
    log = MessageLog(row_limit=10)
    for i in range(6):
        log.append(i)
    log.set_row_limit(3)
    assert len(log) == 6
    log.append(6)
    assert list(log) == [4, 5, 6]


def test_rows_inserted_signal_reports_row():
    log = MessageLog(row_limit=2)
    rows = []
    log.rows_inserted.connect(rows.append)
    for i in range(4):
        log.append(i)
    assert rows == [0, 1, 1, 1]


def test_clear_empties_and_signals():
    log = MessageLog()
    fired = []
    log.reset.connect(lambda: fired.append(True))
    log.append("x")
    log.clear()
    assert len(log) == 0
    assert fired == [True]


def test_item_at():
    log = MessageLog()
    log.append("first")
    log.append("second")
    assert log.item_at(1) == "second"
    assert log[0] == "first"
    assert log.item_at(2) is None
    assert log.item_at(-1) is None
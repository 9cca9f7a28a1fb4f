import pytest

from modscan_core.numeric import NumericEditor, NumericInputMode


def test_default_editor_holds_zero():
    editor = NumericEditor()
    assert editor.value == 0
    assert editor.text == "0"
    assert editor.input_mode is NumericInputMode.INT32


def test_set_value_updates_text_and_emits_once():
    editor = NumericEditor()
    seen = []
    editor.value_changed.connect(seen.append)
    editor.set_value(42)
    assert editor.value == 42
    assert editor.text == str(42)
    assert seen == [42]


def test_set_same_value_does_not_emit():
    editor = NumericEditor()
    editor.set_value(7)
    seen = []
    editor.value_changed.connect(seen.append)
    editor.set_value(7)
    assert seen == []


def test_value_is_clamped_to_range():
    editor = NumericEditor()
    editor.set_input_range(0, 100)
    editor.set_value(500)
    assert editor.value == 100
    editor.set_value(-20)
    assert editor.value == 0


def test_range_changed_is_emitted():
    editor = NumericEditor()
    seen = []
    editor.range_changed.connect(lambda lo, hi: seen.append((lo, hi)))
    editor.set_input_range(0, 10)
    assert seen == [(0, 10)]
    assert editor.range == (0, 10)


def test_padding_zeroes():
    editor = NumericEditor()
    editor.set_input_range(0, 999)
    editor.set_padding_zeroes(True)
    editor.set_value(7)
    assert editor.text == "007"
    assert editor.value == 7


def test_hex_mode_prefix_depends_on_focus():
    editor = NumericEditor(NumericInputMode.HEX)
    editor.set_value(255)
    assert editor.text == "0xFF"
    editor.focus_in()
    assert editor.text == "FF"
    assert editor.value == 255
    editor.focus_out()
    assert editor.text == "0xFF"


def test_hex_mode_negative_is_clamped_to_default_upper_bound():
    editor = NumericEditor(NumericInputMode.HEX)
    editor.set_value(-1)
    assert editor.value == 2**31 - 1


def test_uint32_wraps_negative_to_max():
    editor = NumericEditor(NumericInputMode.UINT32)
    editor.set_value(-1)
    assert editor.value == 2**32 - 1
    assert editor.text == str(2**32 - 1)


def test_set_text_parses_value():
    editor = NumericEditor()
    editor.set_text("123")
    assert editor.value == 123
    assert editor.text == "123"


def test_set_text_invalid_restores_previous_value():
    editor = NumericEditor()
    editor.set_value(5)
    editor.set_text("abc")
    assert editor.value == 5
    assert editor.text == "5"


def test_set_text_out_of_type_range_keeps_value():
    editor = NumericEditor()
    editor.set_text("99999999999")
    assert editor.value == 0
    assert editor.text == "0"


def test_type_text_updates_value_but_not_text():
    editor = NumericEditor()
    editor.set_input_range(0, 10)
    editor.type_text("50")
    assert editor.value == 10
    assert editor.text == "50"
    editor.editing_finished()
    assert editor.text == "10"
    assert editor.value == 10


def test_type_text_invalid_leaves_value():
    editor = NumericEditor()
    editor.set_value(3)
    editor.type_text("x")
    assert editor.value == 3
    assert editor.text == "x"


def test_text_is_truncated_to_max_length():
    editor = NumericEditor()
    editor.set_input_range(0, 99)
    editor.set_text("12345")
    assert len(editor.text) <= editor.max_length
    assert editor.value == 99


def test_mode_switch_keeps_existing_range():
    editor = NumericEditor()
    editor.set_input_range(0, 50)
    editor.set_input_mode(NumericInputMode.UINT32)
    assert editor.range == (0, 50)
    editor.set_value(1000)
    assert editor.value == 50


def test_float_mode_round_trip():
    editor = NumericEditor(NumericInputMode.FLOAT)
    editor.set_value(1.5)
    assert editor.value == 1.5
    assert editor.text == "1.5"
    editor.set_text("2.25")
    assert editor.value == 2.25


def test_double_mode_text_parses_back():
    editor = NumericEditor(NumericInputMode.DOUBLE)
    editor.set_value(1234567.0)
    assert editor.value == 1234567.0
    assert float(editor.text) == pytest.approx(1234567.0, rel=1e-5)


def test_int64_large_values():
    editor = NumericEditor(NumericInputMode.INT64)
    editor.set_value(2**40)
    assert editor.value == 2**40
    assert editor.text == str(2**40)


def test_uint64_accepts_maximum_text():
    editor = NumericEditor(NumericInputMode.UINT64)
    editor.set_text(str(2**64 - 1))
    assert editor.value == 2**64 - 1
    assert editor.text == str(2**64 - 1)
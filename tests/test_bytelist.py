import pytest

from modscan_core.bytelist import ByteInputMode, ByteListEditor, split_by_separator


@pytest.mark.parametrize("text", ["0102", "A0B1C2", "ff00ff00"])
def test_split_by_separator_pairs_even_text(text):
    result = split_by_separator(text, " ")
    parts = result.split(" ")
    assert all(len(p) == 2 for p in parts)
    assert "".join(parts) == text


def test_split_by_separator_drops_trailing_char():
    assert split_by_separator("01234", "-") == "01-23"


def test_split_by_separator_short():
    assert split_by_separator("1", " ") == ""


@pytest.mark.parametrize("mode", list(ByteInputMode))
def test_set_value_round_trips_through_text(mode):
    data = bytes([1, 2, 99, 10])
    editor = ByteListEditor(mode)
    editor.set_value(data)
    assert editor.value == data
    other = ByteListEditor(mode)
    other.set_text(editor.text)
    assert other.value == data


def test_value_changed_emitted_once():
    editor = ByteListEditor()
    seen = []
    editor.value_changed.connect(seen.append)
    editor.set_value(b"\x05\x06")
    editor.set_value(b"\x05\x06")
    assert seen == [b"\x05\x06"]


def test_hex_insert_without_separator():
    editor = ByteListEditor(ByteInputMode.HEX)
    assert editor.insert("0x0A0B")
    assert editor.value == bytes([0x0A, 0x0B])


def test_insert_rejects_invalid_text():
    editor = ByteListEditor(ByteInputMode.DEC)
    editor.set_value(b"\x07")
    assert not editor.insert("zz")
    assert editor.value == b"\x07"


def test_accepts_depends_on_mode():
    dec = ByteListEditor(ByteInputMode.DEC)
    hexed = ByteListEditor(ByteInputMode.HEX)
    assert not dec.accepts("1a")
    assert hexed.accepts("1a")
    assert dec.accepts("12 34")


def test_can_insert_strips_prefix():
    editor = ByteListEditor(ByteInputMode.HEX)
    assert editor.can_insert("0xFF")
    assert not editor.can_insert("0xZZ")


def test_invalid_text_clears_value():
    editor = ByteListEditor()
    editor.set_value(b"\x01")
    editor.set_text("zz")
    assert editor.value == b""
    assert editor.is_empty


def test_mode_switch_keeps_value():
    editor = ByteListEditor(ByteInputMode.DEC)
    editor.set_value(bytes([10, 20, 30]))
    editor.set_input_mode(ByteInputMode.HEX)
    assert editor.input_mode is ByteInputMode.HEX
    assert editor.value == bytes([10, 20, 30])
    again = ByteListEditor(ByteInputMode.HEX)
    again.set_text(editor.text)
    assert again.value == bytes([10, 20, 30])


def test_focus_out_normalises_text():
    editor = ByteListEditor(ByteInputMode.DEC)
    editor.set_text("  3   4")
    reference = ByteListEditor(ByteInputMode.DEC)
    reference.set_value(editor.value)
    editor.focus_out()
    assert editor.text == reference.text
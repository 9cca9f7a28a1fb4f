import pytest

from modscan_core.functioncode import (
    INVALID_FUNCTION_CODE,
    FunctionCodeInputMode,
    FunctionCodeSelector,
)

ITEMS = [(3, "Read Holding Registers"), (4, "Read Input Registers"), (6, "Write Single Register")]


def test_format_code_decimal_pads():
    selector = FunctionCodeSelector()
    assert selector.format_code(3) == "03"


def test_format_code_hex_prefix():
    selector = FunctionCodeSelector(editable=True)
    selector.set_input_mode(FunctionCodeInputMode.HEX)
    assert selector.format_code(255) == "0xFF"


def test_first_item_becomes_current():
    selector = FunctionCodeSelector()
    seen = []
    selector.function_code_changed.connect(seen.append)
    selector.add_items(ITEMS)
    assert selector.current_index == 0
    assert selector.current_function_code == 3
    assert seen == [3]
    assert len(selector) == len(ITEMS)


@pytest.mark.parametrize("editable", [False, True])
def test_set_known_function_code(editable):
    selector = FunctionCodeSelector(editable=editable)
    selector.add_items(ITEMS)
    selector.set_current_function_code(6)
    assert selector.current_index == 2
    assert selector.current_function_code == 6
    assert selector.current_text == selector.items[2]


def test_unknown_code_shown_as_text_when_editable():
    selector = FunctionCodeSelector(editable=True)
    selector.add_items(ITEMS)
    selector.set_current_function_code(99)
    assert selector.current_text == selector.format_code(99)
    assert selector.current_function_code == 99


def test_unparsable_text_is_invalid():
    selector = FunctionCodeSelector(editable=True)
    selector.add_items(ITEMS)
    selector.set_current_text("abc")
    assert selector.current_function_code == INVALID_FUNCTION_CODE


def test_typed_text_parsed_in_hex():
    selector = FunctionCodeSelector(editable=True)
    selector.set_input_mode(FunctionCodeInputMode.HEX)
    selector.set_current_text("0x10")
    assert selector.current_function_code == 0x10


def test_hex_mode_relabels_items():
    selector = FunctionCodeSelector(editable=True)
    selector.add_items(ITEMS)
    selector.set_input_mode(FunctionCodeInputMode.HEX)
    assert all(text.startswith("0x") for text in selector.items)
    assert selector.current_text == selector.items[0]
    assert selector.current_function_code == 3


def test_non_editable_ignores_mode_relabel():
    selector = FunctionCodeSelector()
    selector.add_items(ITEMS)
    before = selector.items
    selector.set_input_mode(FunctionCodeInputMode.HEX)
    assert selector.items == before
    assert selector.input_mode is FunctionCodeInputMode.HEX


def test_focus_cycle_in_hex():
    selector = FunctionCodeSelector(editable=True)
    selector.add_items(ITEMS)
    selector.set_input_mode(FunctionCodeInputMode.HEX)
    selector.focus_in()
    assert selector.has_focus
    assert selector.current_text == selector.format_code(3)
    assert not selector.current_text.startswith("0x")
    assert selector.current_function_code == 3
    selector.focus_out()
    assert selector.current_text == selector.items[0]


def test_set_current_index_out_of_range():
    selector = FunctionCodeSelector()
    selector.add_items(ITEMS)
    with pytest.raises(IndexError):
        selector.set_current_index(len(ITEMS))
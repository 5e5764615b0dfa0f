import pytest

from iconjson.collection import IconRecord, normalize_icon
from iconjson.errors import InvalidIconSet


def test_defaults_are_filled():
    icon = normalize_icon({"body": "<path />"})
    assert icon.as_json() == {
        "body": "<path />",
        "left": 0,
        "top": 0,
        "width": 16,
        "height": 16,
        "inlineHeight": 16,
        "inlineTop": 0,
        "rotate": 0,
        "hFlip": False,
        "vFlip": False,
        "verticalAlign": -0.125,
    }


def test_inline_values_follow_top_and_height():
    icon = normalize_icon({"body": "", "top": -2, "height": 20})
    assert icon.inline_top == -2
    assert icon.inline_height == 20

    icon = normalize_icon({"body": "", "top": -2, "height": 20, "inlineTop": -4, "inlineHeight": 28})
    assert icon.inline_top == -4
    assert icon.inline_height == 28


def test_vertical_align_depends_on_height_grid():
    # multiple of 7 but not of 8
    assert normalize_icon({"body": "", "height": 14}).vertical_align == -0.143
    assert normalize_icon({"body": "", "height": 1792}).vertical_align == -0.125
    assert normalize_icon({"body": "", "height": 24}).vertical_align == -0.125
    assert normalize_icon({"body": "", "height": 14, "verticalAlign": 0}).vertical_align == 0


def test_input_is_not_modified():
    data = {"body": "<g />", "width": 24}
    icon = normalize_icon(data)
    assert data == {"body": "<g />", "width": 24}
    assert icon.width == 24
    assert icon.height == 16


def test_accepts_records_and_keeps_extra_keys():
    record = IconRecord.model_validate({"body": "<g />", "hFlip": True, "hidden": True})
    icon = normalize_icon(record)
    assert icon.h_flip is True
    assert icon.as_json()["hidden"] is True


def test_none_values_count_as_missing():
    icon = normalize_icon({"body": "", "width": None, "rotate": None})
    assert icon.width == 16
    assert icon.rotate == 0


def test_wrong_types_are_rejected():
    with pytest.raises(InvalidIconSet):
        normalize_icon({"body": "<g />", "height": "tall"})
    with pytest.raises(InvalidIconSet):
        normalize_icon({"body": 5})


def test_numeric_strings_are_converted():
    icon = normalize_icon({"body": "", "height": "14"})
    assert icon.height == 14
    assert icon.vertical_align == -0.143

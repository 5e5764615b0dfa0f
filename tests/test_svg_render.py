import pytest

from iconjson.collection import normalize_icon
from iconjson.errors import InvalidIconSet
from iconjson.svg import RenderOptions, build_svg, render_icon

OPEN = '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"'


@pytest.fixture()
def square():
    return normalize_icon({"body": "<body />", "width": 24, "height": 24})


@pytest.fixture()
def tall():
    return normalize_icon(
        {
            "body": '<path d="whatever" fill="currentColor" />',
            "width": 20,
            "height": 24,
            "inlineHeight": 28,
            "inlineTop": -2,
        }
    )


@pytest.fixture()
def plain():
    return normalize_icon({"body": "<body />", "width": 20, "height": 24})


def test_default_and_custom_dimensions(square):
    assert build_svg(square, {}) == (
        OPEN + ' width="1em" height="1em" preserveAspectRatio="xMidYMid meet" viewBox="0 0 24 24"><body /></svg>'
    )
    assert build_svg(square, {"width": 48}) == (
        OPEN + ' width="48" height="48" preserveAspectRatio="xMidYMid meet" viewBox="0 0 24 24"><body /></svg>'
    )
    assert build_svg(square, {"height": 32}) == (
        OPEN + ' width="32" height="32" preserveAspectRatio="xMidYMid meet" viewBox="0 0 24 24"><body /></svg>'
    )


def test_colors_and_inline(tall):
    assert build_svg(tall, {}) == (
        OPEN + ' width="0.84em" height="1em" preserveAspectRatio="xMidYMid meet" viewBox="0 0 20 24">'
        '<path d="whatever" fill="currentColor" /></svg>'
    )
    assert build_svg(tall, {"width": "48", "color": "red"}) == (
        OPEN + ' width="48" height="57.6" preserveAspectRatio="xMidYMid meet" viewBox="0 0 20 24">'
        '<path d="whatever" fill="red" /></svg>'
    )
    assert build_svg(tall, {"height": "100%", "inline": "true"}) == (
        OPEN + ' width="71.43%" height="100%" preserveAspectRatio="xMidYMid meet" viewBox="0 -2 20 28"'
        ' style="vertical-align: -0.125em;"><path d="whatever" fill="currentColor" /></svg>'
    )


@pytest.mark.parametrize(
    "align,expected",
    [
        ("top", "xMidYMin meet"),
        ("left,bottom", "xMinYMax meet"),
        ("right,middle,crop", "xMaxYMid slice"),
        ("Right Crop meet", "xMaxYMid meet"),
    ],
)
def test_alignment(tall, align, expected):
    assert build_svg(tall, {"align": align, "width": "50", "height": "50"}) == (
        OPEN + f' width="50" height="50" preserveAspectRatio="{expected}" viewBox="0 0 20 24">'
        '<path d="whatever" fill="currentColor" /></svg>'
    )


@pytest.mark.parametrize(
    "rotate,width,view_box,transform",
    [
        (1, "1.2em", "0 0 24 20", "rotate(90 12 12)"),
        ("180deg", "0.84em", "0 0 20 24", "rotate(180 10 12)"),
        ("3", "1.2em", "0 0 24 20", "rotate(-90 10 10)"),
        ("75%", "1.2em", "0 0 24 20", "rotate(-90 10 10)"),
        (-1, "1.2em", "0 0 24 20", "rotate(-90 10 10)"),
    ],
)
def test_rotation(plain, rotate, width, view_box, transform):
    # "id" is not a render option and is only written with add_extra
    assert build_svg(plain, {"rotate": rotate, "id": "test-id"}) == (
        OPEN + f' width="{width}" height="1em" preserveAspectRatio="xMidYMid meet" viewBox="{view_box}">'
        f'<g transform="{transform}"><body /></g></svg>'
    )


def test_flips(plain):
    assert build_svg(plain, {"flip": "Horizontal", "id": "test-id"}, add_extra=True) == (
        OPEN + ' id="test-id" width="0.84em" height="1em" preserveAspectRatio="xMidYMid meet" viewBox="0 0 20 24">'
        '<g transform="translate(20 0) scale(-1 1)"><body /></g></svg>'
    )
    assert build_svg(plain, {"flip": "ignored, Vertical space-works-as-comma"}) == (
        OPEN + ' width="0.84em" height="1em" preserveAspectRatio="xMidYMid meet" viewBox="0 0 20 24">'
        '<g transform="translate(0 24) scale(1 -1)"><body /></g></svg>'
    )


def test_both_flips_become_half_turn(plain):
    result = render_icon(plain, {"hFlip": True, "vFlip": "true"})
    assert result.body == '<g transform="rotate(180 10 12)"><body /></g>'

    # flips toggle the icon's own flip
    flipped = normalize_icon({"body": "<body />", "width": 20, "height": 24, "hFlip": True})
    assert render_icon(flipped, {"flip": "horizontal"}).body == "<body />"


def test_auto_and_suppressed_dimensions(tall):
    result = render_icon(tall, {"width": "auto", "height": "auto"})
    assert result.attributes["width"] == "20"
    assert result.attributes["height"] == "24"

    result = render_icon(tall, {"width": False, "height": 48})
    assert "width" not in result.attributes
    assert result.attributes["height"] == "48"

    # empty values count as unset
    assert render_icon(tall, {"width": "", "height": 0}).attributes["height"] == "1em"


def test_unusable_options_are_ignored(plain):
    result = render_icon(plain, {"rotate": "sideways", "flip": 5, "align": ["left"], "color": None})
    assert result.body == "<body />"
    assert result.attributes["preserveAspectRatio"] == "xMidYMid meet"


def test_box_rect(square):
    result = render_icon(square, RenderOptions(box=True))
    assert result.body == '<body /><rect x="0" y="0" width="24" height="24" fill="rgba(0, 0, 0, 0)" />'


def test_render_accepts_raw_data():
    result = render_icon({"body": "<g />", "width": 14, "height": 14}, {"inline": True})
    assert result.style == {"vertical-align": "-0.143em"}
    assert result.attributes["viewBox"] == "0 0 14 14"


def test_extra_attributes_are_escaped(square):
    svg = build_svg(
        square,
        {"class": 'a"b', "data-x": 1.5, "aria-hidden": True, "style": "color: red;", "inline": True},
        add_extra=True,
    )
    assert ' class="a&quot;b" data-x="1.5" aria-hidden="true" width=' in svg
    assert 'style="vertical-align: -0.125em;color: red;"' in svg


def test_ids_are_replaced(ids):
    icon = normalize_icon(
        {
            "body": '<defs><mask id="m"><path id="p" /></mask></defs><use xlink:href="#p" mask="url(#m)" />',
            "width": 24,
            "height": 24,
        }
    )
    result = render_icon(icon, ids=ids)
    assert result.body == (
        '<defs><mask id="test-id-0"><path id="test-id-1" /></mask></defs>'
        '<use xlink:href="#test-id-1" mask="url(#test-id-0)" />'
    )
    # every render gets fresh ids
    assert 'id="test-id-2"' in render_icon(icon, ids=ids).body


def test_invalid_icon_data_is_rejected():
    with pytest.raises(InvalidIconSet):
        render_icon({"body": "<g />", "height": "tall"})

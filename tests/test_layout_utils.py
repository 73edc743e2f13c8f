import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_resume_parser.layout_utils import GroupingConfig, body_font_size, group_text_items_into_lines
from pdf_resume_parser.types import Line, TextItem


def _make_item(text, x, y, size=10.0, bold=False, eol=False, page=0, width=None, font="Helvetica"):
    return TextItem(
        text=text,
        x=x,
        y=y,
        width=len(text) * size * 0.5 if width is None else width,
        height=size,
        font_name=font,
        font_size=size,
        bold=bold,
        has_eol=eol,
        page=page,
    )


def test_items_on_same_row_form_one_line_sorted_by_x():
    left = _make_item("Acme Corp", 72, 100, bold=True, font="Helvetica-Bold")
    right = _make_item("2022 - Present", 400, 101)

    forward = group_text_items_into_lines([left, right])
    backward = group_text_items_into_lines([right, left])

    assert len(forward) == 1
    assert [item.text for item in forward[0].items] == ["Acme Corp", "2022 - Present"]
    assert forward == backward


def test_vertical_gap_beyond_tolerance_starts_new_line():
    items = [_make_item("Jane Doe", 72, 100), _make_item("jane@example.com", 72, 104)]

    lines = group_text_items_into_lines(items)

    # 4pt apart exceeds a third of the 10pt font size
    assert [line.text for line in lines] == ["Jane Doe", "jane@example.com"]


def test_has_eol_forces_line_break():
    items = [_make_item("Acme Corp", 72, 100, eol=True), _make_item("Remote", 300, 100)]

    lines = group_text_items_into_lines(items)

    assert [line.text for line in lines] == ["Acme Corp", "Remote"]


def test_lines_never_span_pages():
    items = [_make_item("Footer text", 72, 700, page=0), _make_item("Header text", 300, 700, page=1)]

    lines = group_text_items_into_lines(items)

    assert len(lines) == 2
    assert lines[1].page == 1


def test_zero_size_items_are_kept():
    bullet = TextItem(text="•", x=60, y=105, width=0, height=0, font_size=10)
    body = _make_item("Built X", 72, 100)

    lines = group_text_items_into_lines([bullet, body])

    assert len(lines) == 1
    assert lines[0].items[0].text == "•"


def test_single_item_becomes_line():
    lines = group_text_items_into_lines([_make_item("Alone", 72, 100)])

    assert len(lines) == 1
    assert lines[0].text == "Alone"


def test_adjacent_runs_with_same_font_are_merged():
    soft = _make_item("Soft", 72, 100, width=20)
    ware = _make_item("ware", 92, 100, width=20)
    tail = _make_item("Engineer", 115, 100, width=40)

    lines = group_text_items_into_lines([soft, ware, tail])

    assert len(lines[0].items) == 1
    assert lines[0].items[0].text == "Software Engineer"
    assert lines[0].items[0].width == 83


def test_merging_can_be_disabled():
    items = [_make_item("Soft", 72, 100, width=20), _make_item("ware", 92, 100, width=20)]

    lines = group_text_items_into_lines(items, GroupingConfig(merge_gap_ratio=None))

    assert [item.text for item in lines[0].items] == ["Soft", "ware"]


def test_line_derived_geometry():
    line = Line(
        items=(
            _make_item("MIT", 72, 100, size=12, bold=True),
            _make_item("Cambridge, Massachusetts", 200, 101, size=10),
        )
    )

    assert line.x0 == 72
    assert line.y0 == 100
    assert line.y1 == 112
    assert line.dominant_font_size == 10
    assert line.starts_bold
    assert not line.is_bold
    assert line.text == "MIT Cambridge, Massachusetts"


def test_body_font_size_is_median_of_dominant_sizes():
    lines = [
        Line(items=(_make_item("Jane Doe", 72, 10, size=20),)),
        Line(items=(_make_item("EDUCATION", 72, 40, size=14),)),
        Line(items=(_make_item("MIT", 72, 60),)),
        Line(items=(_make_item("B.S.", 72, 80),)),
        Line(items=(_make_item("Built X", 72, 100),)),
    ]

    assert body_font_size(lines) == 10
    assert body_font_size([]) == 0.0

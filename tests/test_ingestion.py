import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_resume_parser import ingestion
from pdf_resume_parser.ingestion import DecodeError, IngestionConfig, extract_text_items, is_bold_font


def test_text_runs_carry_font_and_position(jane_doe_pdf):
    items = extract_text_items(jane_doe_pdf)

    texts = [item.text for item in items]
    assert texts[:3] == ["Jane Doe", "jane@example.com", "555-123-4567"]
    assert "B.S. Computer Science" in texts

    name = items[0]
    assert name.bold
    assert name.font_size == pytest.approx(20, abs=0.5)
    assert name.page == 0
    assert name.x == pytest.approx(72, abs=0.5)

    email, phone = items[1], items[2]
    assert not email.bold
    assert email.y > name.y
    assert phone.x > email.x


def test_line_ends_are_flagged(jane_doe_pdf):
    items = extract_text_items(jane_doe_pdf)
    by_text = {item.text: item for item in items}

    assert by_text["Jane Doe"].has_eol
    assert not by_text["jane@example.com"].has_eol
    assert by_text["555-123-4567"].has_eol
    assert items[-1].has_eol


def test_source_types_are_equivalent(jane_doe_pdf, tmp_path):
    path = tmp_path / "resume.pdf"
    path.write_bytes(jane_doe_pdf)

    from_bytes = extract_text_items(jane_doe_pdf)

    assert extract_text_items(path) == from_bytes
    assert extract_text_items(str(path)) == from_bytes
    with path.open("rb") as handle:
        assert extract_text_items(handle) == from_bytes


def test_max_pages_limits_extraction(make_pdf):
    pdf = make_pdf([[(72, 700, 10, False, "First page")], [(72, 700, 10, False, "Second page")]])

    assert [item.page for item in extract_text_items(pdf)] == [0, 1]
    assert [item.text for item in extract_text_items(pdf, IngestionConfig(max_pages=1))] == ["First page"]


def test_garbage_bytes_raise_decode_error():
    with pytest.raises(DecodeError):
        extract_text_items(b"this is not a pdf")


def test_pdf_without_text_raises_decode_error(make_pdf):
    with pytest.raises(DecodeError, match="no extractable text"):
        extract_text_items(make_pdf([[]]))


def test_missing_file_raises_decode_error(tmp_path):
    with pytest.raises(DecodeError):
        extract_text_items(tmp_path / "missing.pdf")


def test_is_bold_font():
    assert is_bold_font("ABCDEF+Arial-BoldMT")
    assert is_bold_font("Helvetica-Bold")
    assert is_bold_font("Lato-Black")
    assert not is_bold_font("Helvetica")
    assert not is_bold_font("")


def test_programming_errors_are_not_reported_as_decode_errors(jane_doe_pdf, monkeypatch):
    def broken(page, page_index, config):
        raise KeyError("x0")

    monkeypatch.setattr(ingestion, "_page_text_items", broken)

    with pytest.raises(KeyError):
        extract_text_items(jane_doe_pdf)

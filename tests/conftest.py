from typing import List, Sequence, Tuple

import pytest

# (x, baseline y, font size, bold, text) in PDF user space (origin bottom-left)
Run = Tuple[float, float, float, bool, str]

PAGE_HEIGHT = 792


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[Run]]) -> bytes:
    """Write a small uncompressed PDF using the standard Helvetica fonts."""

    page_count = len(pages)
    font_regular = 3 + 2 * page_count
    font_bold = font_regular + 1
    kids = " ".join(f"{3 + 2 * index} 0 R" for index in range(page_count))

    objects: List[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode("latin-1"),
    ]
    for index, runs in enumerate(pages):
        content_id = 4 + 2 * index
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 {PAGE_HEIGHT}] "
                f"/Resources << /Font << /F1 {font_regular} 0 R /F2 {font_bold} 0 R >> >> "
                f"/Contents {content_id} 0 R >>"
            ).encode("latin-1")
        )
        commands = [
            f"BT /{'F2' if bold else 'F1'} {size} Tf {x} {y} Td ({_escape(text)}) Tj ET"
            for x, y, size, bold, text in runs
        ]
        stream = "\n".join(commands).encode("latin-1")
        objects.append(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold >>")

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(output)
    output += b"xref\n0 %d\n" % (len(objects) + 1)
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += b"%010d 00000 n \n" % offset
    output += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset)
    return bytes(output)


JANE_DOE_RUNS: List[Run] = [
    (72, 740, 20, True, "Jane Doe"),
    (72, 715, 10, False, "jane@example.com"),
    (300, 715, 10, False, "555-123-4567"),
    (72, 690, 14, True, "EDUCATION"),
    (72, 670, 10, True, "MIT"),
    (400, 670, 10, False, "2018 - 2022"),
    (72, 655, 10, False, "B.S. Computer Science"),
    (72, 630, 14, True, "WORK EXPERIENCE"),
    (72, 610, 10, True, "Acme Corp"),
    (400, 610, 10, False, "2022 - Present"),
    (72, 595, 10, False, "Software Engineer"),
    (72, 580, 10, False, "- Built X"),
    (300, 580, 10, False, "- Shipped Y"),
]


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def jane_doe_pdf() -> bytes:
    return build_pdf([JANE_DOE_RUNS])

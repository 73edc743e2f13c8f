"""Common data structures used across the resume parsing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class TextItem:
    """One positioned run of text as emitted by the PDF text layer.

    Coordinates are in PDF points with a top-left origin (``y`` grows
    downwards), as reported by pdfplumber.
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    font_name: str = ""
    font_size: float = 0.0
    bold: bool = False
    has_eol: bool = False
    page: int = 0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class Line:
    """Text items sharing one visual row, sorted left to right."""

    items: Tuple[TextItem, ...]

    @property
    def text(self) -> str:
        return " ".join(" ".join(item.text.split()) for item in self.items if item.text.strip())

    @property
    def x0(self) -> float:
        return min(item.x for item in self.items)

    @property
    def x1(self) -> float:
        return max(item.right for item in self.items)

    @property
    def y0(self) -> float:
        return min(item.y for item in self.items)

    @property
    def y1(self) -> float:
        return max(item.y + item.height for item in self.items)

    @property
    def page(self) -> int:
        return self.items[0].page

    @property
    def dominant_item(self) -> TextItem:
        # max() keeps the first item on ties
        return max(self.items, key=lambda item: len(item.text.strip()))

    @property
    def dominant_font_size(self) -> float:
        return self.dominant_item.font_size

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def is_bold(self) -> bool:
        return all(item.bold for item in self.items)

    @property
    def starts_bold(self) -> bool:
        return self.items[0].bold


class SectionKind(str, Enum):
    """Closed set of section labels produced by the segmenter."""

    PROFILE = "profile"
    OBJECTIVE = "objective"
    WORK_EXPERIENCE = "work_experience"
    EDUCATION = "education"
    PROJECT = "project"
    SKILL = "skill"
    CUSTOM = "custom"


@dataclass
class Section:
    """Labelled, contiguous group of lines.

    Every section except the profile starts with its header line.
    """

    kind: SectionKind
    lines: List[Line] = field(default_factory=list)
    title: str = ""

    @property
    def header_line(self) -> Optional[Line]:
        if self.kind is SectionKind.PROFILE or not self.lines:
            return None
        return self.lines[0]

    @property
    def body_lines(self) -> List[Line]:
        if self.kind is SectionKind.PROFILE:
            return list(self.lines)
        return list(self.lines[1:])


@dataclass
class Subsection:
    """One entry (job, degree, project) inside a multi-entry section."""

    lines: List[Line] = field(default_factory=list)


def iter_section_lines(sections: Sequence[Section]) -> List[Line]:
    """Flatten sections back into the line sequence they partition."""

    lines: List[Line] = []
    for section in sections:
        lines.extend(section.lines)
    return lines

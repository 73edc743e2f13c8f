"""Segment resume lines into labelled sections."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .layout_utils import body_font_size
from .types import Line, Section, SectionKind

LOGGER = logging.getLogger(__name__)

SECTION_KEYWORDS: Dict[SectionKind, Tuple[str, ...]] = {
    SectionKind.WORK_EXPERIENCE: ("experience", "employment", "work history"),
    SectionKind.PROJECT: ("project",),
    SectionKind.SKILL: ("skill", "technologies", "technical"),
    SectionKind.EDUCATION: ("education", "academic"),
    SectionKind.OBJECTIVE: ("summary", "objective", "profile", "about"),
}
SECTION_PRIORITY: Tuple[SectionKind, ...] = (
    SectionKind.WORK_EXPERIENCE,
    SectionKind.PROJECT,
    SectionKind.SKILL,
    SectionKind.EDUCATION,
    SectionKind.OBJECTIVE,
)


@dataclass
class SectioningConfig:
    """Header detection and classification settings."""

    keywords: Dict[SectionKind, Tuple[str, ...]] = field(default_factory=lambda: dict(SECTION_KEYWORDS))
    priority: Tuple[SectionKind, ...] = SECTION_PRIORITY
    max_header_words: int = 4
    profile_guard_lines: int = 2
    custom_requires_uppercase: bool = True
    # mixed-case headers longer than this are entry lines, e.g. "Senior Project Manager";
    # None accepts any header candidate
    keyword_title_max_words: Optional[int] = 2


def _single_run(line: Line) -> bool:
    first = line.items[0]
    return all(
        item.bold == first.bold and item.font_name == first.font_name and abs(item.font_size - first.font_size) < 0.01
        for item in line.items
    )


def _header_words(text: str) -> List[str]:
    return [word for word in text.split() if word != "&"]


def is_header_candidate(line: Line, index: int, body_size: float, config: SectioningConfig) -> bool:
    """Short, single-run line set in bold or in a larger font than the body."""

    if index < config.profile_guard_lines or not line.items:
        return False
    text = line.text
    if not re.search(r"[A-Za-z]", text):
        return False
    if not _single_run(line):
        return False
    if len(_header_words(text)) > config.max_header_words:
        return False
    return line.is_bold or line.dominant_font_size > body_size


def _normalize_header(text: str) -> str:
    return " ".join(text.strip().rstrip(":").lower().split())


def classify_header(text: str, config: Optional[SectioningConfig] = None) -> Optional[SectionKind]:
    """Map header text to a section kind, following the configured priority."""

    if config is None:
        config = SectioningConfig()
    normalized = _normalize_header(text)
    for kind in config.priority:
        for keyword in config.keywords.get(kind, ()):
            if re.search(rf"\b{re.escape(keyword.lower())}", normalized):
                return kind
    return None


def _is_uppercase_title(text: str) -> bool:
    letters = [char for char in text if char.isalpha()]
    return bool(letters) and all(char.isupper() for char in letters)


def has_section_title_shape(title: str, config: SectioningConfig) -> bool:
    """All upper-case, or a short capitalised phrase such as "Work Experience"."""

    if _is_uppercase_title(title) or config.keyword_title_max_words is None:
        return True
    words = _header_words(title)
    return bool(words) and len(words) <= config.keyword_title_max_words and title[:1].isupper()


def group_lines_into_sections(
    lines: Sequence[Line],
    config: Optional[SectioningConfig] = None,
) -> List[Section]:
    """Partition *lines* into contiguous sections.

    Lines before the first detected header belong to the profile section.
    """

    if config is None:
        config = SectioningConfig()

    body_size = body_font_size(lines)
    sections: List[Section] = [Section(kind=SectionKind.PROFILE)]
    for index, line in enumerate(lines):
        title = line.text.strip().rstrip(":").strip()
        if is_header_candidate(line, index, body_size, config) and has_section_title_shape(title, config):
            kind = classify_header(title, config)
            if kind is None and (_is_uppercase_title(title) or not config.custom_requires_uppercase):
                kind = SectionKind.CUSTOM
            if kind is not None:
                LOGGER.debug("Line %s opens %s section %r", index, kind.value, title)
                sections.append(Section(kind=kind, lines=[line], title=title))
                continue
        sections[-1].lines.append(line)

    if not sections[0].lines:
        sections.pop(0)
    LOGGER.debug("Segmented %s lines into %s sections", len(lines), len(sections))
    return sections


__all__ = [
    "SECTION_KEYWORDS",
    "SECTION_PRIORITY",
    "SectioningConfig",
    "classify_header",
    "group_lines_into_sections",
    "has_section_title_shape",
    "is_header_candidate",
]

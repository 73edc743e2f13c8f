"""Feature-scoring extraction of resume fields from segmented sections."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .features import (
    DEFAULT_PATTERNS,
    Candidate,
    FeatureRule,
    build_context,
    compile_patterns,
    residual_fragments,
    select_best,
    split_inline_bullets,
    strip_bullet,
)
from .layout_utils import body_font_size
from .schema import ResumeEducation, ResumeProfile, ResumeProject, ResumeWorkExperience
from .types import Line, Section, SectionKind, Subsection, iter_section_lines

LOGGER = logging.getLogger(__name__)

R = FeatureRule

DEFAULT_FIELD_RULES: Dict[str, Tuple[FeatureRule, ...]] = {
    "email": (R("email", 4.0, extract=True),),
    "phone": (R("phone", 4.0, extract=True),),
    "url": (R("url", 4.0, extract=True),),
    "location": (R("location", 4.0, extract=True),),
    "name": (
        R("name", 2.0),
        R("first_line", 2.0),
        R("font_rank", 2.0),
        R("bold", 1.0),
        R("at_sign", -4.0),
        R("digit", -4.0),
        R("bullet", -4.0),
        R("many_words", -2.0),
    ),
    "summary": (R("long_text", 3.0),),
    # bare years count only on an entry's first two lines, never in bullets
    "date": (
        R("date_range", 4.0, extract=True),
        R("date", 2.0, extract=True),
        R("first_line", 1.0),
        R("second_line", 1.0),
        R("bullet", -4.0),
    ),
    "job_title": (
        R("job_title", 2.0),
        R("first_line", 2.0),
        R("second_line", 1.0),
        R("bullet", -4.0),
        R("many_words", -2.0),
    ),
    "company": (
        R("bold", 1.5),
        R("first_line", 2.0),
        R("second_line", 1.0),
        R("bullet", -4.0),
        R("many_words", -2.0),
    ),
    "school": (
        R("school", 2.0),
        R("bold", 1.5),
        R("first_line", 2.0),
        R("second_line", 1.0),
        R("degree", -2.0),
        R("bullet", -4.0),
        R("many_words", -2.0),
    ),
    "degree": (R("degree", 2.0), R("bullet", -4.0)),
    "gpa": (R("gpa", 2.0, extract=True), R("gpa_keyword", 2.0)),
    "project": (
        R("bold", 1.5),
        R("first_line", 2.0),
        R("second_line", 1.0),
        R("bullet", -4.0),
        R("many_words", -2.0),
    ),
}

# Resolution order matters: a selected candidate is no longer available to later fields.
DEFAULT_SECTION_FIELDS: Dict[SectionKind, Tuple[str, ...]] = {
    SectionKind.PROFILE: ("email", "phone", "url", "location", "name", "summary"),
    SectionKind.WORK_EXPERIENCE: ("date", "job_title", "company"),
    SectionKind.EDUCATION: ("date", "gpa", "degree", "school"),
    SectionKind.PROJECT: ("date", "project"),
}

MULTI_ENTRY_KINDS = (SectionKind.WORK_EXPERIENCE, SectionKind.EDUCATION, SectionKind.PROJECT)
PROFILE_FIELDS = frozenset(ResumeProfile.__dataclass_fields__)


@dataclass
class ExtractionConfig:
    """Rule tables, regex patterns and thresholds for field extraction."""

    patterns: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PATTERNS))
    field_rules: Dict[str, Tuple[FeatureRule, ...]] = field(default_factory=lambda: dict(DEFAULT_FIELD_RULES))
    section_fields: Dict[SectionKind, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SECTION_FIELDS)
    )
    min_score: float = 1.0
    min_scores: Dict[str, float] = field(default_factory=lambda: {"date": 3.0, "gpa": 3.0, "summary": 3.0})
    max_field_words: int = 6
    summary_min_words: int = 8

    def threshold(self, field_name: str) -> float:
        return self.min_scores.get(field_name, self.min_score)


@dataclass
class SectionExtraction:
    """Fields extracted from one section, ready for assembly."""

    kind: SectionKind
    title: str = ""
    profile: Optional[ResumeProfile] = None
    entries: List[Any] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)


def _is_sub_header(line: Line, body_size: float) -> bool:
    return line.starts_bold or line.dominant_font_size > body_size


def split_subsections(lines: Sequence[Line], body_size: float) -> List[Subsection]:
    """Split a section body into one subsection per entry.

    An entry starts at the first line and at every bold or larger-font line;
    consecutive heading lines stay in the same entry.
    """

    subsections: List[Subsection] = []
    previous_was_header = False
    for line in lines:
        is_header = _is_sub_header(line, body_size)
        if not subsections or (is_header and not previous_was_header):
            subsections.append(Subsection())
        subsections[-1].lines.append(line)
        previous_was_header = is_header
    return subsections


def build_candidates(lines: Sequence[Line]) -> List[Candidate]:
    return [
        Candidate(text=item.text.strip(), item=item, line_index=index)
        for index, line in enumerate(lines)
        for item in line.items
        if item.text.strip()
    ]


def resolve_fields(
    lines: Sequence[Line],
    fields: Sequence[str],
    config: ExtractionConfig,
    patterns: Dict[str, re.Pattern[str]],
) -> Tuple[Dict[str, str], List[Candidate]]:
    """Score candidates for each field in turn.

    Returns the field values and the candidates nobody claimed, in order.
    """

    candidates = build_candidates(lines)
    context = build_context(candidates, patterns, config.max_field_words, config.summary_min_words)
    values: Dict[str, str] = {}
    for field_name in fields:
        rules = config.field_rules.get(field_name, ())
        selection = select_best(candidates, rules, context, config.threshold(field_name))
        if selection is None:
            values[field_name] = ""
            continue
        values[field_name] = selection.value
        candidates[selection.index : selection.index + 1] = residual_fragments(selection)
    return values, candidates


def build_descriptions(candidates: Sequence[Candidate], bullet_pattern: re.Pattern[str]) -> List[str]:
    """Turn leftover candidates into description strings.

    Bullet markers start a new description. In a bulleted block, text without
    a marker continues the previous bullet; otherwise each line stands alone.
    """

    pieces: List[Tuple[int, bool, str]] = []
    for candidate in candidates:
        for piece in split_inline_bullets(candidate.text):
            text, is_bullet = strip_bullet(piece, bullet_pattern)
            if text:
                pieces.append((candidate.line_index, is_bullet, text))

    bulleted = any(is_bullet for _, is_bullet, _ in pieces)
    descriptions: List[str] = []
    previous_line: Optional[int] = None
    for line_index, is_bullet, text in pieces:
        new_line = line_index != previous_line
        previous_line = line_index
        if not descriptions or is_bullet or (new_line and not bulleted):
            descriptions.append(text)
        else:
            descriptions[-1] = f"{descriptions[-1]} {text}"
    return descriptions


def line_descriptions(lines: Sequence[Line], bullet_pattern: re.Pattern[str]) -> List[str]:
    return build_descriptions(build_candidates(lines), bullet_pattern)


def extract_profile(section: Section, config: ExtractionConfig, patterns: Dict[str, re.Pattern[str]]) -> ResumeProfile:
    fields = config.section_fields.get(SectionKind.PROFILE, ())
    values, _ = resolve_fields(section.body_lines, fields, config, patterns)
    return ResumeProfile(**{name: value for name, value in values.items() if name in PROFILE_FIELDS})


def _extract_entries(
    section: Section,
    body_size: float,
    config: ExtractionConfig,
    patterns: Dict[str, re.Pattern[str]],
) -> List[Any]:
    fields = config.section_fields.get(section.kind, ())
    entries: List[Any] = []
    for subsection in split_subsections(section.body_lines, body_size):
        values, leftovers = resolve_fields(subsection.lines, fields, config, patterns)
        descriptions = build_descriptions(leftovers, patterns["bullet"])
        if not any(values.values()) and not descriptions:
            continue
        if section.kind is SectionKind.WORK_EXPERIENCE:
            entry: Any = ResumeWorkExperience(
                company=values.get("company", ""),
                job_title=values.get("job_title", ""),
                date=values.get("date", ""),
                descriptions=descriptions,
            )
        elif section.kind is SectionKind.EDUCATION:
            entry = ResumeEducation(
                school=values.get("school", ""),
                degree=values.get("degree", ""),
                date=values.get("date", ""),
                gpa=values.get("gpa", ""),
                descriptions=descriptions,
            )
        else:
            entry = ResumeProject(
                project=values.get("project", ""),
                date=values.get("date", ""),
                descriptions=descriptions,
            )
        entries.append(entry)
    LOGGER.debug("Extracted %s %s entries", len(entries), section.kind.value)
    return entries


def extract_section(
    section: Section,
    body_size: float,
    config: Optional[ExtractionConfig] = None,
) -> SectionExtraction:
    """Extract typed fields from a single section."""

    if config is None:
        config = ExtractionConfig()
    patterns = compile_patterns(config.patterns)
    result = SectionExtraction(kind=section.kind, title=section.title)
    if section.kind is SectionKind.PROFILE:
        result.profile = extract_profile(section, config, patterns)
    elif section.kind in MULTI_ENTRY_KINDS:
        result.entries = _extract_entries(section, body_size, config, patterns)
    elif section.kind in (SectionKind.SKILL, SectionKind.OBJECTIVE):
        result.descriptions = [line.text for line in section.body_lines if line.text]
    else:
        result.descriptions = line_descriptions(section.body_lines, patterns["bullet"])
    return result


def extract_sections(
    sections: Sequence[Section],
    config: Optional[ExtractionConfig] = None,
) -> List[SectionExtraction]:
    """Run extraction over every section, preserving document order."""

    if config is None:
        config = ExtractionConfig()
    body_size = body_font_size(iter_section_lines(sections))
    return [extract_section(section, body_size, config) for section in sections]


__all__ = [
    "DEFAULT_FIELD_RULES",
    "DEFAULT_SECTION_FIELDS",
    "ExtractionConfig",
    "SectionExtraction",
    "build_candidates",
    "build_descriptions",
    "extract_section",
    "extract_sections",
    "resolve_fields",
    "split_subsections",
]

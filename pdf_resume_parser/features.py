"""Regex tables and feature scoring shared by the extraction engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .types import TextItem

MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
SEASON = r"(?:Spring|Summer|Fall|Autumn|Winter)"
YEAR = r"(?:19|20)\d{2}"
DATE_POINT = rf"(?:(?:{MONTH}|{SEASON})\s+{YEAR}|\d{{1,2}}/{YEAR}|{YEAR})"
PRESENT = r"(?:Present|Current)"

DEFAULT_PATTERNS: Dict[str, str] = {
    "email": r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}",
    "phone": r"(?<!\d)(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)",
    "url": r"https?://\S+|(?:www\.)?[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[a-z]{2,}/\S*",
    "location": r"\b[A-Z][A-Za-z.\s]+,\s*[A-Z]{2}\b",
    "date_range": rf"(?i)\b{DATE_POINT}\s*(?:-|–|—|to)\s*(?:{DATE_POINT}|{PRESENT})\b",
    "date": rf"(?i)\b(?:{DATE_POINT}|{PRESENT})\b",
    "gpa": (
        r"(?i)(?:\b(?:GPA|grade point average)\s*[:=-]?\s*)?"
        r"(?<![\d.])(?P<value>[0-4]\.\d{1,2})(?![\d.])(?:\s*/\s*[0-4](?:\.\d{1,2})?)?"
    ),
    "gpa_keyword": r"(?i)\b(?:GPA|grade point)\b",
    "degree": (
        r"\b(?:Associate|Bachelor|Master|Doctor|Doctorate|Diploma|MBA|BSc|MSc|BEng|MEng|BS|BA|MS|B\.?Tech|M\.?Tech)\b"
        r"|\b(?:Ph\.?\s?D|B\.\s?S|B\.\s?A|M\.\s?S|M\.\s?A|B\.\s?E|B\.\s?Sc|M\.\s?Sc)\b"
    ),
    "school": r"(?i)\b(?:university|college|institute|school|academy|polytechnic|conservatory)\b",
    "job_title": (
        r"(?i)\b(?:engineer|developer|manager|analyst|intern|scientist|designer|consultant|director|lead"
        r"|architect|specialist|administrator|assistant|associate|coordinator|officer|researcher|technician"
        r"|programmer|president|founder|head|teacher|tutor|instructor|accountant|advisor|representative"
        r"|executive|supervisor|agent|editor|writer|owner|volunteer|fellow)s?\b"
    ),
    "name": r"^[A-Za-z][A-Za-z.'’\- ]*$",
    "bullet": r"^\s*(?:[•●◦▪▫■□‣⁃∙·➢➤►▶✓✔]\s*|[-–—*]\s+)",
    "digit": r"\d",
    "at_sign": r"@",
}

INLINE_BULLET_RE = re.compile(r"(?=[•●◦▪▫■□‣⁃∙➢➤►▶])")
SEPARATOR_CHARS = " \t|,;:·•–—-/"

BUILTIN_FEATURES = ("first_line", "second_line", "bold", "font_rank", "many_words", "long_text")


@dataclass(frozen=True)
class FeatureRule:
    """One row of a field's scoring table.

    ``feature`` names either a pattern (scores 1 on a regex hit) or one of
    :data:`BUILTIN_FEATURES`. With ``extract`` set, the regex match rather than
    the whole candidate becomes the field value.
    """

    feature: str
    weight: float
    extract: bool = False


@dataclass(frozen=True)
class Candidate:
    """A text run, or a leftover fragment of one, competing for a field."""

    text: str
    item: TextItem
    line_index: int

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass
class ScoringContext:
    patterns: Dict[str, re.Pattern[str]]
    font_sizes: List[float] = field(default_factory=list)
    max_field_words: int = 6
    summary_min_words: int = 8

    def font_rank(self, size: float) -> float:
        if len(self.font_sizes) < 2:
            return 0.0
        smaller = sum(1 for known in self.font_sizes if known < size - 0.01)
        return smaller / (len(self.font_sizes) - 1)


@dataclass(frozen=True)
class Selection:
    index: int
    candidate: Candidate
    score: float
    value: str
    match: Optional[re.Match[str]] = None


def compile_patterns(patterns: Dict[str, str]) -> Dict[str, re.Pattern[str]]:
    return {name: re.compile(pattern) for name, pattern in patterns.items()}


def build_context(
    candidates: Sequence[Candidate],
    patterns: Dict[str, re.Pattern[str]],
    max_field_words: int = 6,
    summary_min_words: int = 8,
) -> ScoringContext:
    sizes = sorted({round(candidate.item.font_size, 2) for candidate in candidates})
    return ScoringContext(
        patterns=patterns,
        font_sizes=sizes,
        max_field_words=max_field_words,
        summary_min_words=summary_min_words,
    )


def _builtin_feature(name: str, candidate: Candidate, context: ScoringContext) -> float:
    if name == "first_line":
        return 1.0 if candidate.line_index == 0 else 0.0
    if name == "second_line":
        return 1.0 if candidate.line_index == 1 else 0.0
    if name == "bold":
        return 1.0 if candidate.item.bold else 0.0
    if name == "font_rank":
        return context.font_rank(candidate.item.font_size)
    if name == "many_words":
        return 1.0 if candidate.word_count > context.max_field_words else 0.0
    if name == "long_text":
        return 1.0 if candidate.word_count >= context.summary_min_words else 0.0
    raise ValueError(f"Unknown feature: {name}")


def score_candidate(
    candidate: Candidate,
    rules: Sequence[FeatureRule],
    context: ScoringContext,
) -> Tuple[float, Optional[re.Match[str]]]:
    """Return the weighted score and, for extracting rules, the regex match."""

    score = 0.0
    extracted: Optional[re.Match[str]] = None
    extracted_weight = 0.0
    for rule in rules:
        pattern = context.patterns.get(rule.feature)
        if pattern is None:
            score += rule.weight * _builtin_feature(rule.feature, candidate, context)
            continue
        match = pattern.search(candidate.text)
        if not match:
            continue
        score += rule.weight
        if rule.extract and (extracted is None or rule.weight > extracted_weight):
            extracted = match
            extracted_weight = rule.weight
    return score, extracted


def _match_value(candidate: Candidate, match: Optional[re.Match[str]]) -> str:
    if match is None:
        return candidate.text.strip()
    if "value" in match.re.groupindex and match.group("value"):
        return match.group("value").strip()
    return match.group(0).strip()


def select_best(
    candidates: Sequence[Candidate],
    rules: Sequence[FeatureRule],
    context: ScoringContext,
    min_score: float,
) -> Optional[Selection]:
    """Pick the highest-scoring candidate; ties go to the earliest one."""

    best: Optional[Selection] = None
    for index, candidate in enumerate(candidates):
        score, match = score_candidate(candidate, rules, context)
        if best is not None and score <= best.score:
            continue
        best = Selection(index=index, candidate=candidate, score=score, value=_match_value(candidate, match), match=match)
    if best is None or best.score < min_score or not best.value:
        return None
    return best


def residual_fragments(selection: Selection) -> List[Candidate]:
    """Text left on either side of an extracted match, as new candidates."""

    if selection.match is None:
        return []
    candidate = selection.candidate
    start, end = selection.match.span()
    fragments: List[Candidate] = []
    for piece in (candidate.text[:start], candidate.text[end:]):
        piece = piece.strip(SEPARATOR_CHARS)
        if re.search(r"\w", piece):
            fragments.append(Candidate(text=piece, item=candidate.item, line_index=candidate.line_index))
    return fragments


def strip_bullet(text: str, pattern: re.Pattern[str]) -> Tuple[str, bool]:
    """Remove a leading bullet marker; report whether one was present."""

    match = pattern.match(text)
    if not match:
        return text.strip(), False
    return text[match.end() :].strip(), True


def split_inline_bullets(text: str) -> List[str]:
    """Split ``"• one • two"`` style runs into one piece per bullet."""

    return [piece for piece in INLINE_BULLET_RE.split(text) if piece.strip()]


__all__ = [
    "BUILTIN_FEATURES",
    "DEFAULT_PATTERNS",
    "Candidate",
    "FeatureRule",
    "ScoringContext",
    "Selection",
    "build_context",
    "compile_patterns",
    "residual_fragments",
    "score_candidate",
    "select_best",
    "split_inline_bullets",
    "strip_bullet",
]

"""End-to-end resume parsing pipeline."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from . import ingestion, layout_utils, postprocessing, sections
from .schema import FeaturedSkill, Resume, ResumeCustom
from .types import Line, Section, SectionKind, TextItem

LOGGER = logging.getLogger(__name__)

FeaturedSkillInput = Union[FeaturedSkill, Mapping[str, Any], Tuple[str, int]]


def _coerce_featured_skill(value: FeaturedSkillInput) -> FeaturedSkill:
    if isinstance(value, FeaturedSkill):
        return value
    if isinstance(value, Mapping):
        return FeaturedSkill(skill=str(value.get("skill", "")), rating=int(value.get("rating", 0)))
    skill, rating = value
    return FeaturedSkill(skill=str(skill), rating=int(rating))


def assemble_resume(
    extractions: Sequence[postprocessing.SectionExtraction],
    featured_skills: Optional[Iterable[FeaturedSkillInput]] = None,
) -> Resume:
    """Collect per-section extraction results into a :class:`Resume`.

    Entries keep document order. The first objective section, when present,
    supplies the profile summary.
    """

    resume = Resume()
    summaries: List[str] = []
    for extraction in extractions:
        kind = extraction.kind
        if kind is SectionKind.PROFILE and extraction.profile is not None:
            resume.profile = extraction.profile
        elif kind is SectionKind.OBJECTIVE:
            summary = " ".join(extraction.descriptions).strip()
            if summary:
                summaries.append(summary)
        elif kind is SectionKind.WORK_EXPERIENCE:
            resume.work_experiences.extend(extraction.entries)
        elif kind is SectionKind.EDUCATION:
            resume.educations.extend(extraction.entries)
        elif kind is SectionKind.PROJECT:
            resume.projects.extend(extraction.entries)
        elif kind is SectionKind.SKILL:
            resume.skills.descriptions.extend(extraction.descriptions)
        elif kind is SectionKind.CUSTOM:
            resume.custom.append(ResumeCustom(name=extraction.title, descriptions=extraction.descriptions))

    if summaries:
        resume.profile.summary = summaries[0]
    if featured_skills:
        resume.skills.featured_skills = [_coerce_featured_skill(value) for value in featured_skills]
    return resume


class ResumeParser:
    """High-level orchestrator for the resume parsing pipeline."""

    def __init__(
        self,
        ingestion_config: Optional[ingestion.IngestionConfig] = None,
        grouping_config: Optional[layout_utils.GroupingConfig] = None,
        sectioning_config: Optional[sections.SectioningConfig] = None,
        extraction_config: Optional[postprocessing.ExtractionConfig] = None,
    ) -> None:
        self.ingestion_config = ingestion_config or ingestion.IngestionConfig()
        self.grouping_config = grouping_config or layout_utils.GroupingConfig()
        self.sectioning_config = sectioning_config or sections.SectioningConfig()
        self.extraction_config = extraction_config or postprocessing.ExtractionConfig()

    def load_document(self, source: ingestion.PdfSource) -> List[TextItem]:
        LOGGER.info("Reading PDF text layer")
        try:
            items = ingestion.extract_text_items(source, self.ingestion_config)
        except ingestion.DecodeError as error:
            LOGGER.error("Resume could not be decoded: %s", error)
            raise
        LOGGER.debug("Loaded %s text runs", len(items))
        return items

    def group_lines(self, items: Sequence[TextItem]) -> List[Line]:
        lines = layout_utils.group_text_items_into_lines(items, self.grouping_config)
        LOGGER.debug("Grouped %s lines", len(lines))
        return lines

    def segment(self, lines: Sequence[Line]) -> List[Section]:
        found = sections.group_lines_into_sections(lines, self.sectioning_config)
        LOGGER.debug("Detected sections: %s", ", ".join(section.kind.value for section in found))
        return found

    def extract(self, found: Sequence[Section]) -> List[postprocessing.SectionExtraction]:
        LOGGER.info("Extracting fields from %s sections", len(found))
        return postprocessing.extract_sections(found, self.extraction_config)

    def parse_text_items(
        self,
        items: Sequence[TextItem],
        featured_skills: Optional[Iterable[FeaturedSkillInput]] = None,
    ) -> Resume:
        """Run every stage after ingestion on already-extracted text runs."""

        lines = self.group_lines(items)
        found = self.segment(lines)
        return assemble_resume(self.extract(found), featured_skills)

    def parse(
        self,
        source: ingestion.PdfSource,
        featured_skills: Optional[Iterable[FeaturedSkillInput]] = None,
    ) -> Resume:
        items = self.load_document(source)
        return self.parse_text_items(items, featured_skills)


def parse_resume(
    source: ingestion.PdfSource,
    featured_skills: Optional[Iterable[FeaturedSkillInput]] = None,
) -> Resume:
    """Parse a single-column PDF resume into a :class:`Resume`.

    Raises:
        DecodeError: If the PDF cannot be read or has no text layer.
    """

    parser = ResumeParser()
    return parser.parse(source, featured_skills)

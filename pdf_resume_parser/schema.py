"""Output schema definitions for the resume parsing pipeline."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _clean_strings(values: Optional[List[str]]) -> List[str]:
    return [item.strip() for item in values or [] if item and item.strip()]


@dataclass
class ResumeProfile:
    """Contact details and summary from the top of a resume."""

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    url: str = ""
    summary: str = ""


@dataclass
class ResumeWorkExperience:
    """Professional experience item."""

    company: str = ""
    job_title: str = ""
    date: str = ""
    descriptions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.descriptions = _clean_strings(self.descriptions)


@dataclass
class ResumeEducation:
    """Education entry with school and degree information."""

    school: str = ""
    degree: str = ""
    date: str = ""
    gpa: str = ""
    descriptions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.descriptions = _clean_strings(self.descriptions)


@dataclass
class ResumeProject:
    """Project entry."""

    project: str = ""
    date: str = ""
    descriptions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.descriptions = _clean_strings(self.descriptions)


@dataclass
class FeaturedSkill:
    """Caller-curated skill with a rating; never derived from PDF text."""

    skill: str = ""
    rating: int = 0


@dataclass
class ResumeSkills:
    featured_skills: List[FeaturedSkill] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.featured_skills = [
            item if isinstance(item, FeaturedSkill) else FeaturedSkill(**item) for item in self.featured_skills
        ]
        self.descriptions = _clean_strings(self.descriptions)


@dataclass
class ResumeCustom:
    """Catch-all section for headers outside the known section kinds."""

    name: str = ""
    descriptions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.descriptions = _clean_strings(self.descriptions)


@dataclass
class Resume:
    """Top-level structured resume representation."""

    profile: ResumeProfile = field(default_factory=ResumeProfile)
    work_experiences: List[ResumeWorkExperience] = field(default_factory=list)
    educations: List[ResumeEducation] = field(default_factory=list)
    projects: List[ResumeProject] = field(default_factory=list)
    skills: ResumeSkills = field(default_factory=ResumeSkills)
    custom: List[ResumeCustom] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.profile, ResumeProfile):
            self.profile = ResumeProfile(**(self.profile or {}))
        self.work_experiences = [
            item if isinstance(item, ResumeWorkExperience) else ResumeWorkExperience(**item)
            for item in self.work_experiences
        ]
        self.educations = [item if isinstance(item, ResumeEducation) else ResumeEducation(**item) for item in self.educations]
        self.projects = [item if isinstance(item, ResumeProject) else ResumeProject(**item) for item in self.projects]
        if not isinstance(self.skills, ResumeSkills):
            self.skills = ResumeSkills(**(self.skills or {}))
        self.custom = [item if isinstance(item, ResumeCustom) else ResumeCustom(**item) for item in self.custom]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": asdict(self.profile),
            "work_experiences": [asdict(item) for item in self.work_experiences],
            "educations": [asdict(item) for item in self.educations],
            "projects": [asdict(item) for item in self.projects],
            "skills": asdict(self.skills),
            "custom": [asdict(item) for item in self.custom],
        }

    def json(self, indent: int = 2, ensure_ascii: bool = False) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=ensure_ascii)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Resume":
        payload = dict(payload)
        return cls(
            profile=payload.get("profile", {}),
            work_experiences=payload.get("work_experiences", []),
            educations=payload.get("educations", []),
            projects=payload.get("projects", []),
            skills=payload.get("skills", {}),
            custom=payload.get("custom", []),
        )


__all__ = [
    "ResumeProfile",
    "ResumeWorkExperience",
    "ResumeEducation",
    "ResumeProject",
    "FeaturedSkill",
    "ResumeSkills",
    "ResumeCustom",
    "Resume",
]

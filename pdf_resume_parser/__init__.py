"""Top-level package for the PDF resume parsing pipeline."""

from .ingestion import DecodeError
from .pipeline import ResumeParser, parse_resume
from .schema import Resume

__all__ = ["parse_resume", "ResumeParser", "Resume", "DecodeError"]

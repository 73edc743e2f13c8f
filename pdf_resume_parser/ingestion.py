"""Document ingestion utilities for the resume parsing pipeline.

Wraps pdfplumber and normalizes its word stream into :class:`TextItem` runs,
ordered by page and then by content-stream order.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Tuple, Union
from urllib import request

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import MalformedPDFException, PdfminerException

from .types import TextItem

LOGGER = logging.getLogger(__name__)

PdfSource = Union[bytes, bytearray, str, Path, BinaryIO]

# pdfplumber wraps parser failures; a missing or unreadable file surfaces as OSError
READ_ERRORS = (PdfminerException, MalformedPDFException, PSException, OSError)

BOLD_MARKERS = ("bold", "black", "heavy", "semibold", "demi")


class DecodeError(ValueError):
    """Raised when a document is not a readable PDF or has no text layer."""


@dataclass
class IngestionConfig:
    """Configuration options for ingestion."""

    max_pages: Optional[int] = None
    x_tolerance: float = 3.0
    y_tolerance: float = 3.0
    bold_markers: Tuple[str, ...] = BOLD_MARKERS
    timeout: float = 30.0


def is_bold_font(font_name: str, markers: Sequence[str] = BOLD_MARKERS) -> bool:
    """Return True when *font_name* names a bold face, e.g. ``ABCDEF+Arial-BoldMT``."""

    lowered = (font_name or "").lower()
    return any(marker in lowered for marker in markers)


def _fetch_url(url: str, timeout: float) -> bytes:
    req = request.Request(url, headers={"Accept": "application/pdf"}, method="GET")
    try:
        with request.urlopen(req, timeout=timeout) as response:
            return response.read()
    except OSError as error:
        raise DecodeError(f"Unable to fetch {url}: {error}") from error


def _open_stream(source: PdfSource, config: IngestionConfig) -> Union[str, BinaryIO]:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    if isinstance(source, Path):
        return str(source)
    if isinstance(source, str):
        if source.startswith(("http://", "https://")):
            LOGGER.info("Fetching PDF from %s", source)
            return io.BytesIO(_fetch_url(source, config.timeout))
        return str(Path(source).expanduser())
    if hasattr(source, "read"):
        return source
    raise DecodeError(f"Unsupported PDF source: {type(source).__name__}")


def _mark_line_ends(words: List[Dict[str, Any]]) -> List[bool]:
    """Flag each word that is the last run on its text row."""

    flags: List[bool] = []
    for index, word in enumerate(words):
        if index + 1 == len(words):
            flags.append(True)
            continue
        following = words[index + 1]
        height = max(word["bottom"] - word["top"], following["bottom"] - following["top"])
        center = (word["top"] + word["bottom"]) / 2.0
        following_center = (following["top"] + following["bottom"]) / 2.0
        flags.append(abs(following_center - center) > height / 2.0)
    return flags


def _page_text_items(page: Any, page_index: int, config: IngestionConfig) -> List[TextItem]:
    words = page.extract_words(
        x_tolerance=config.x_tolerance,
        y_tolerance=config.y_tolerance,
        keep_blank_chars=True,
        use_text_flow=True,
        extra_attrs=["fontname", "size"],
    )
    words = [word for word in words if word.get("text", "").strip()]
    items: List[TextItem] = []
    for word, has_eol in zip(words, _mark_line_ends(words)):
        font_name = str(word.get("fontname", ""))
        items.append(
            TextItem(
                text=" ".join(word["text"].split()),
                x=float(word["x0"]),
                y=float(word["top"]),
                width=float(word["x1"]) - float(word["x0"]),
                height=float(word["bottom"]) - float(word["top"]),
                font_name=font_name,
                font_size=float(word.get("size", 0.0)),
                bold=is_bold_font(font_name, config.bold_markers),
                has_eol=has_eol,
                page=page_index,
            )
        )
    return items


def extract_text_items(source: PdfSource, config: Optional[IngestionConfig] = None) -> List[TextItem]:
    """Read *source* and return its text runs in extraction order.

    Raises:
        DecodeError: If the source cannot be opened as a PDF or carries no
            extractable text (e.g. a scanned image).
    """

    if config is None:
        config = IngestionConfig()

    stream = _open_stream(source, config)
    items: List[TextItem] = []
    try:
        with pdfplumber.open(stream) as pdf:
            for page_index, page in enumerate(pdf.pages):
                if config.max_pages and page_index >= config.max_pages:
                    break
                page_items = _page_text_items(page, page_index, config)
                LOGGER.debug("Extracted %s text runs from page %s", len(page_items), page_index + 1)
                items.extend(page_items)
    except READ_ERRORS as error:
        raise DecodeError(f"Unable to read PDF: {error}") from error

    if not items:
        raise DecodeError("PDF has no extractable text layer")
    return items


__all__ = ["DecodeError", "IngestionConfig", "PdfSource", "extract_text_items", "is_bold_font"]

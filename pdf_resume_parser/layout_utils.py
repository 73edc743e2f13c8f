"""Layout heuristics that cluster text runs into visual lines."""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence

from .types import Line, TextItem

LOGGER = logging.getLogger(__name__)


@dataclass
class GroupingConfig:
    """Tunables for line grouping.

    Attributes:
        tolerance_ratio: Fraction of the line's dominant font size within which
            vertical centres are considered the same row.
        merge_gap_ratio: Adjacent runs with the same font whose gap is at most
            this many average character widths are merged. ``None`` disables
            merging.
        space_gap_ratio: Merged runs further apart than this many character
            widths are joined with a space.
    """

    tolerance_ratio: float = 1.0 / 3.0
    merge_gap_ratio: Optional[float] = 1.0
    space_gap_ratio: float = 0.1


def _average_char_width(item: TextItem) -> float:
    length = len(item.text)
    return item.width / length if length else 0.0


def _same_font(left: TextItem, right: TextItem) -> bool:
    return (
        left.font_name == right.font_name
        and left.bold == right.bold
        and abs(left.font_size - right.font_size) < 0.01
    )


def merge_adjacent_items(items: Sequence[TextItem], config: GroupingConfig) -> List[TextItem]:
    """Merge x-sorted runs that the PDF producer split within one phrase."""

    if config.merge_gap_ratio is None:
        return list(items)
    merged: List[TextItem] = []
    for item in items:
        if merged:
            previous = merged[-1]
            char_width = _average_char_width(previous)
            gap = item.x - previous.right
            if char_width and _same_font(previous, item) and gap <= config.merge_gap_ratio * char_width:
                separator = " " if gap > config.space_gap_ratio * char_width else ""
                right = max(previous.right, item.right)
                merged[-1] = replace(
                    previous,
                    text=f"{previous.text}{separator}{item.text}",
                    width=right - previous.x,
                    y=min(previous.y, item.y),
                    height=max(previous.y + previous.height, item.y + item.height) - min(previous.y, item.y),
                    has_eol=previous.has_eol or item.has_eol,
                )
                continue
        merged.append(item)
    return merged


def _close_line(buffer: List[TextItem], config: GroupingConfig) -> Line:
    ordered = sorted(buffer, key=lambda item: item.x)
    return Line(items=tuple(merge_adjacent_items(ordered, config)))


def group_text_items_into_lines(
    items: Iterable[TextItem],
    config: Optional[GroupingConfig] = None,
) -> List[Line]:
    """Cluster text runs into lines by vertical-centre proximity.

    A run flagged ``has_eol`` always closes the line it was appended to.
    """

    if config is None:
        config = GroupingConfig()

    lines: List[Line] = []
    buffer: List[TextItem] = []
    for item in items:
        if buffer:
            reference = buffer[0]
            dominant_size = Line(items=tuple(buffer)).dominant_font_size
            tolerance = config.tolerance_ratio * dominant_size
            same_row = item.page == reference.page and abs(item.center_y - reference.center_y) < tolerance
            if not same_row:
                lines.append(_close_line(buffer, config))
                buffer = []
        buffer.append(item)
        if item.has_eol:
            lines.append(_close_line(buffer, config))
            buffer = []
    if buffer:
        lines.append(_close_line(buffer, config))

    LOGGER.debug("Grouped text runs into %s lines", len(lines))
    return lines


def body_font_size(lines: Sequence[Line]) -> float:
    """Median of the lines' dominant font sizes, the typical body text size."""

    if not lines:
        return 0.0
    return float(statistics.median(line.dominant_font_size for line in lines))


__all__ = ["GroupingConfig", "body_font_size", "group_text_items_into_lines", "merge_adjacent_items"]

import logging
from typing import Iterable, List

from langcoach.models.feedback import Correction, TextSegment

log = logging.getLogger("highlight")


def segment(text: str, corrections: Iterable[Correction]) -> List[TextSegment]:
    """
    Split `text` into plain and flagged segments for inline highlighting.

    Corrections are taken in ascending start order; equal starts keep the
    order they were given in. A correction that overlaps one already placed,
    or falls outside the text, is skipped, so the segment texts always
    concatenate back to `text`.
    """
    ordered = sorted(corrections or [], key=lambda c: c.start_index)
    if not ordered:
        return [TextSegment(text=text, start_offset=0)]

    segments: List[TextSegment] = []
    cursor = 0
    for c in ordered:
        if c.start_index < cursor or c.end_index > len(text) or c.start_index >= c.end_index:
            log.debug("Skipping correction %s at [%d, %d)", c.id, c.start_index, c.end_index)
            continue
        if cursor < c.start_index:
            segments.append(TextSegment(text=text[cursor:c.start_index], start_offset=cursor))
        segments.append(
            TextSegment(text=text[c.start_index:c.end_index], correction=c, start_offset=c.start_index)
        )
        cursor = c.end_index

    if cursor < len(text) or not segments:
        segments.append(TextSegment(text=text[cursor:], start_offset=cursor))
    return segments

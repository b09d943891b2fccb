"""
Memento ``Link`` header parsing.

The Wayback Machine answers a lookup with a header such as::

    <http://example.com>; rel="original",
    <http://web.archive.org/web/20170413225815/http://example.com>; rel="first memento"; datetime="...",
    <http://web.archive.org/web/20200101000000/http://example.com>; rel="last memento"; datetime="..."

Relations are matched as plain substrings. Which phrases appear depends on
how many captures exist: a single capture is both "first last memento",
two or three captures produce combinations such as "next last memento".

Example usage:
    links = parse_link_header(response.headers["Link"])
    links.earliest, links.latest
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .hosts import is_wayback

SEGMENT_SEPARATOR = ", <"
COMPONENT_SEPARATOR = "; "


class MementoRelation(Enum):
    """Recognised relation phrases, in matching order."""
    FIRST = 'rel="first memento"'
    NEXT = 'rel="next memento"'
    LAST = 'rel="last memento"'
    FIRST_LAST = 'rel="first last memento"'
    NEXT_LAST = 'rel="next last memento"'
    PREV_LAST = 'rel="prev last memento"'
    PREV_FIRST = 'rel="prev first memento"'


EARLIEST_RELATIONS = (MementoRelation.FIRST, MementoRelation.FIRST_LAST)
LATEST_RELATIONS = (MementoRelation.LAST, MementoRelation.NEXT_LAST)


@dataclass
class MementoLinks:
    """Normalised Link header segments, keyed by relation."""
    segments: Dict[MementoRelation, str] = field(default_factory=dict)

    def url(self, relation: MementoRelation) -> Optional[str]:
        """Capture URL carried by ``relation``, if present."""
        segment = self.segments.get(relation)
        if segment is None:
            return None
        return capture_url_from_segment(segment) or None

    def _first_of(self, candidates) -> Optional[str]:
        for relation in candidates:
            url = self.url(relation)
            if url:
                return url
        return None

    @property
    def earliest(self) -> Optional[str]:
        return self._first_of(EARLIEST_RELATIONS)

    @property
    def latest(self) -> Optional[str]:
        return self._first_of(LATEST_RELATIONS)

    def __len__(self) -> int:
        """Number of recognised relations in the header."""
        return len(self.segments)

    def __contains__(self, relation: MementoRelation) -> bool:
        """Whether the header carried ``relation``, e.g. ``MementoRelation.FIRST_LAST in links``."""
        return relation in self.segments

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Capture URL per relation, keyed by lower-case relation name ("first", "next_last", ...)."""
        return {relation.name.lower(): self.url(relation) for relation in self.segments}


def split_segments(header: str) -> List[str]:
    """Split a raw Link header into normalised ``url; rel=...`` segments."""
    segments = []
    for segment in header.split(SEGMENT_SEPARATOR):
        segment = segment.strip()
        if segment.startswith("<"):
            segment = segment[1:]
        segments.append(segment.replace(">;", ";"))
    return segments


def match_relation(segment: str) -> Optional[MementoRelation]:
    """Return the first relation whose phrase occurs in ``segment``."""
    for relation in MementoRelation:
        if relation.value in segment:
            return relation
    return None


def capture_url_from_segment(segment: str) -> str:
    """Return the archive URL component of a segment, or "" if there is none."""
    for component in segment.split(COMPONENT_SEPARATOR):
        if is_wayback(component):
            return component
    return ""


def parse_link_header(header: Optional[str]) -> MementoLinks:
    """
    Parse a memento Link header.

    Segments matching no known relation are skipped. If a relation occurs
    twice the later segment wins.
    """
    links = MementoLinks()
    if not header:
        return links
    for segment in split_segments(header):
        relation = match_relation(segment)
        if relation is None:
            continue
        links.segments[relation] = segment
    return links

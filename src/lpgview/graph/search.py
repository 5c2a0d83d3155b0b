"""
Fuzzy Search Index.

A weighted, multi-field approximate-match index over node attributes.

Matching uses the Bitap algorithm (shift-or with error states) with the
match location ignored, so a pattern may match anywhere in a field and the
score of a field is simply ``errors / len(pattern)``. A field matches when
its score is within the threshold. Field scores are combined across keys as
``prod(score ** (weight * norm))`` where ``norm`` shrinks the influence of
long fields; lower totals rank first.

The index is a snapshot of the graph's node set: it is rebuilt, never
patched, when the graph changes.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import SEARCH_KEYS, SEARCH_LIMIT, SEARCH_THRESHOLD, SNIPPET_WIDTH
from ..core.graph import KnowledgeGraph

logger = logging.getLogger(__name__)

# Perfect matches still carry a tiny score so weights keep ordering them
MIN_SCORE = 0.001

Span = Tuple[int, int]


@dataclass(frozen=True)
class BitapMatch:
    """Outcome of matching one pattern against one text."""
    is_match: bool
    score: float
    indices: Tuple[Span, ...] = ()


@dataclass(frozen=True)
class FieldMatch:
    """
    A match inside one field of a node.

    ``indices`` are inclusive (start, end) character offsets into ``value``.
    ``ref_index`` is the element position for list-valued fields.
    """
    key: str
    value: str
    indices: Tuple[Span, ...]
    score: float
    ref_index: Optional[int] = None


@dataclass
class SearchResult:
    node_id: str
    score: float
    matches: List[FieldMatch] = field(default_factory=list)
    record: Dict[str, Any] = field(default_factory=dict)

    def match_for(self, key: str) -> Optional[FieldMatch]:
        """First match on ``key``, if any."""
        for match in self.matches:
            if match.key == key:
                return match
        return None


def _fold(text: str) -> str:
    """Lowercase without changing the string's length (offsets stay valid)."""
    out = []
    for ch in text:
        lowered = ch.lower()
        out.append(lowered if len(lowered) == 1 else ch)
    return "".join(out)


def field_norm(value: str) -> float:
    """Length normalization: ``1 / sqrt(word count)``, rounded to 3 places."""
    tokens = len(value.split(" ")) - value.split(" ").count("")
    if tokens <= 0:
        return 1.0
    return round(1 / math.sqrt(tokens), 3)


class BitapMatcher:
    """
    Approximate substring matcher for a single, already lowercased pattern.
    """

    def __init__(self, pattern: str, threshold: float = SEARCH_THRESHOLD):
        if not pattern:
            raise ValueError("Pattern must not be empty")
        self.pattern = pattern
        self.threshold = threshold
        self._alphabet: Dict[str, int] = {}
        length = len(pattern)
        for i, ch in enumerate(pattern):
            self._alphabet[ch] = self._alphabet.get(ch, 0) | (1 << (length - i - 1))

    def _score(self, errors: int) -> float:
        return errors / len(self.pattern)

    def match(self, text: str) -> BitapMatch:
        pattern = self.pattern
        pattern_len = len(pattern)
        text_len = len(text)
        threshold = self.threshold

        # Exact occurrences short-circuit the threshold to a perfect score
        exact: List[Span] = []
        start = text.find(pattern)
        while start > -1:
            exact.append((start, start + pattern_len - 1))
            start = text.find(pattern, start + pattern_len)
        if exact:
            return BitapMatch(True, MIN_SCORE, tuple(exact))

        best_location = -1
        best_errors = 0
        final_score = 1.0
        match_mask = 1 << (pattern_len - 1)
        finish = text_len + pattern_len
        last_bits: List[int] = []

        for errors in range(pattern_len):
            if self._score(errors) > threshold:
                break

            bits = [0] * (finish + 2)
            bits[finish + 1] = (1 << errors) - 1
            for j in range(finish, 0, -1):
                location = j - 1
                char_match = self._alphabet.get(text[location], 0) if location < text_len else 0
                bits[j] = ((bits[j + 1] << 1) | 1) & char_match
                if errors:
                    prev_right = last_bits[j + 1] if j + 1 < len(last_bits) else 0
                    prev_here = last_bits[j] if j < len(last_bits) else 0
                    bits[j] |= ((prev_right | prev_here) << 1) | 1 | prev_right

                if bits[j] & match_mask:
                    score = self._score(errors)
                    if score <= threshold:
                        threshold = score
                        final_score = score
                        best_location = location
                        best_errors = errors
                        if best_location <= 0:
                            break

            if best_location >= 0:
                break
            last_bits = bits

        if best_location < 0:
            return BitapMatch(False, 1.0)

        end = min(best_location + pattern_len + best_errors, text_len) - 1
        end = max(end, best_location)
        return BitapMatch(True, max(MIN_SCORE, final_score), ((best_location, end),))


DEFAULT_KEYS: Tuple[Tuple[str, float], ...] = SEARCH_KEYS


class SearchIndex:
    """
    Ranked fuzzy index over node records.

    Example:
        index = SearchIndex.build(graph)
        for result in index.search("epistem"):
            print(result.node_id, result.match_for("label"))
    """

    def __init__(
        self,
        records: Sequence[Dict[str, Any]],
        keys: Sequence[Tuple[str, float]] = DEFAULT_KEYS,
        threshold: float = SEARCH_THRESHOLD,
        limit: int = SEARCH_LIMIT,
    ):
        total = sum(weight for _, weight in keys)
        if total <= 0:
            raise ValueError("Search key weights must sum to a positive value")
        self.keys = [(name, weight / total) for name, weight in keys]
        self.threshold = threshold
        self.limit = limit
        self._records = list(records)

    @classmethod
    def build(
        cls,
        graph: KnowledgeGraph,
        keys: Sequence[Tuple[str, float]] = DEFAULT_KEYS,
        threshold: float = SEARCH_THRESHOLD,
        limit: int = SEARCH_LIMIT,
    ) -> "SearchIndex":
        """Snapshot the graph's nodes into an index."""
        records = []
        for node_id, data in graph.iter_node_items():
            record: Dict[str, Any] = {
                "id": node_id,
                "label": data.get("label", node_id),
                "description": data.get("description", ""),
            }
            for name, _ in keys:
                if name not in record:
                    record[name] = data.get(name) or []
            records.append(record)
        logger.debug(f"Built search index over {len(records)} nodes")
        return cls(records, keys=keys, threshold=threshold, limit=limit)

    def __len__(self) -> int:
        return len(self._records)

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """
        Return up to ``limit`` results, best first.

        An empty or blank query returns no results.
        """
        if not query or not query.strip():
            return []

        matcher = BitapMatcher(_fold(query), self.threshold)
        scored: List[Tuple[float, int, SearchResult]] = []

        for position, record in enumerate(self._records):
            matches = list(self._match_record(matcher, record))
            if not matches:
                continue
            total = 1.0
            for match, weight in matches:
                total *= match.score ** (weight * field_norm(match.value))
            result = SearchResult(
                node_id=record["id"],
                score=total,
                matches=[match for match, _ in matches],
                record=record,
            )
            scored.append((total, position, result))

        scored.sort(key=lambda item: (item[0], item[1]))
        return [result for _, _, result in scored[: limit or self.limit]]

    def _match_record(
        self, matcher: BitapMatcher, record: Dict[str, Any]
    ) -> Iterable[Tuple[FieldMatch, float]]:
        for name, weight in self.keys:
            value = record.get(name)
            if isinstance(value, (list, tuple)):
                for ref_index, item in enumerate(value):
                    match = self._match_value(matcher, name, item, ref_index)
                    if match:
                        yield match, weight
            else:
                match = self._match_value(matcher, name, value, None)
                if match:
                    yield match, weight

    @staticmethod
    def _match_value(
        matcher: BitapMatcher, name: str, value: Any, ref_index: Optional[int]
    ) -> Optional[FieldMatch]:
        if value is None or isinstance(value, (dict, list, tuple)):
            return None
        text = str(value)
        if not text:
            return None
        outcome = matcher.match(_fold(text))
        if not outcome.is_match:
            return None
        return FieldMatch(
            key=name,
            value=text,
            indices=outcome.indices,
            score=outcome.score,
            ref_index=ref_index,
        )


def highlight_segments(text: str, indices: Sequence[Span]) -> List[Tuple[str, bool]]:
    """
    Split ``text`` into (segment, is_match) pieces for highlight rendering.
    """
    if not indices:
        return [(text, False)] if text else []

    segments: List[Tuple[str, bool]] = []
    last = 0
    for start, end in sorted(indices):
        start = max(start, last)
        if start > end:
            continue
        if start > last:
            segments.append((text[last:start], False))
        segments.append((text[start:end + 1], True))
        last = end + 1
    if last < len(text):
        segments.append((text[last:], False))
    return segments


def snippet(result: SearchResult, width: int = SNIPPET_WIDTH) -> str:
    """
    Short context line for a result.

    Prefers the matched description, falls back to the start of the
    description, and finally to a placeholder text.
    """
    desc_match = result.match_for("description")
    text = desc_match.value if desc_match else result.record.get("description", "")
    if not text:
        return "No description available."
    return text[:width].replace("\n", " ") + "..."

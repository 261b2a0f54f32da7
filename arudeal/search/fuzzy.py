"""
Fuzzy Index
===========
Weighted, typo-tolerant search over SearchDocuments.

Scoring follows the familiar bitap-style formula: for a pattern matched
inside a field value,

    score = errors / len(pattern) + |match_start - location| / distance

where `errors` is the smallest edit distance between the pattern and any
substring of the field. 0.0 is a perfect match at the expected location;
anything above `threshold` is not a match.

A query is split on whitespace and every term must match at least one key,
so "Toyota 2020" finds "2020 Toyota Camry" even though the words appear in
a different order.

EXAMPLE:
    index = FuzzyIndex(documents)
    index.search("Camri")       # typo, still finds the Camry
    index.search("toyota 2020") # terms in any order
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

EPSILON = 2.220446049250313e-16


@dataclass
class SearchKey:
    """A searchable attribute path and how much it counts"""
    path: str           # dot notation, e.g. "make.name"
    weight: float = 1.0


DEFAULT_KEYS = [
    SearchKey("title", 2.0),
    SearchKey("make.name", 1.5),
    SearchKey("model", 1.5),
    SearchKey("year"),
    SearchKey("color"),
    SearchKey("fuel_type.name"),
    SearchKey("body_type.name"),
    SearchKey("transmission.name"),
    SearchKey("location"),
]


@dataclass
class SearchResult(Generic[T]):
    item: T
    score: float
    ref_index: int = 0
    matches: Dict[str, float] = field(default_factory=dict)


def get_value_from_path(obj: Any, path: str) -> Any:
    """
    Extract a value using dot notation; dicts and objects both work.

    Example paths:
        "title" -> obj.title
        "make.name" -> obj.make.name
    """
    value = obj
    for part in path.split("."):
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
        if value is None:
            return None
    return value


def match_score(
    pattern: str,
    text: str,
    location: int = 0,
    distance: int = 100,
    threshold: Optional[float] = None,
) -> Tuple[float, int]:
    """
    Best (score, start) for `pattern` anywhere inside `text`.

    Approximate substring matching: the edit distance row starts at zero
    for every text position, so the match may begin anywhere. Each cell
    remembers where its alignment started so proximity can be scored.

    Scanning stops once no later alignment can beat the best one found.
    With a `threshold` it also stops once nothing can score at or below
    it; the returned score is then only known to be above the threshold.
    """
    m = len(pattern)
    if m == 0:
        return 0.0, 0

    def penalty(begin: int) -> float:
        proximity = abs(begin - location)
        if distance == 0:
            return 1.0 if proximity else 0.0
        return proximity / distance

    if text.startswith(pattern, location):
        return 0.0, location

    if threshold is not None:
        # every pattern char absent from text costs at least one edit
        absent = sum(1 for ch in pattern if ch not in text)
        if absent / m > threshold:
            return absent / m, 0

    n = len(text)
    # cost[i] / start[i]: best alignment of pattern[:i] ending at current column
    cost = list(range(m + 1))
    start = [0] * (m + 1)
    best_score, best_start = cost[m] / m + penalty(0), 0

    for j in range(1, n + 1):
        ch = text[j - 1]
        diag_cost, diag_start = cost[0], start[0]
        cost[0], start[0] = 0, j
        for i in range(1, m + 1):
            up_cost, up_start = cost[i], start[i]

            # substitution / match comes from the previous column's i-1
            c = diag_cost if pattern[i - 1] == ch else diag_cost + 1
            s = diag_start
            # text char skipped
            if up_cost + 1 < c or (up_cost + 1 == c and abs(up_start - location) < abs(s - location)):
                c, s = up_cost + 1, up_start
            # pattern char skipped
            left_cost, left_start = cost[i - 1] + 1, start[i - 1]
            if left_cost < c or (left_cost == c and abs(left_start - location) < abs(s - location)):
                c, s = left_cost, left_start

            cost[i], start[i] = c, s
            diag_cost, diag_start = up_cost, up_start

        score = cost[m] / m + penalty(start[m])
        if score < best_score:
            best_score, best_start = score, start[m]

        # later columns only add edits to these cells, or start fresh at j or beyond
        bound = min(cost[i] / m + penalty(start[i]) for i in range(1, m + 1))
        bound = min(bound, penalty(j)) if j >= location else 0.0
        if bound >= best_score or (threshold is not None and bound > threshold):
            break

    return best_score, best_start


class FuzzyIndex(Generic[T]):
    """
    In-memory fuzzy index over a fixed collection.

    Args:
        items: Documents to search (objects or dicts)
        keys: Weighted attribute paths to match against
        threshold: Worst score that still counts as a match (0 = exact)
        distance: How far from `location` a match may drift before its
            proximity penalty reaches 1.0
        location: Where in the field a match is expected
    """

    TERM_CACHE_SIZE = 256

    def __init__(
        self,
        items: Sequence[T],
        keys: Optional[List[SearchKey]] = None,
        threshold: float = 0.4,
        distance: int = 100,
        location: int = 0,
    ):
        self.items = list(items)
        self.keys = keys or DEFAULT_KEYS
        self.threshold = threshold
        self.distance = distance
        self.location = location

        total_weight = sum(k.weight for k in self.keys) or 1.0
        self._norm = {k.path: k.weight / total_weight for k in self.keys}

        # Lower-cased field values are computed once
        self._records: List[Dict[str, str]] = [self._index(item) for item in self.items]
        # term -> per-record key scores; typing re-sends the same terms
        self._term_cache: Dict[str, List[Dict[str, float]]] = {}

    def _index(self, item: T) -> Dict[str, str]:
        record = {}
        for key in self.keys:
            value = get_value_from_path(item, key.path)
            if value is None or value == "":
                continue
            record[key.path] = str(value).lower()
        return record

    def _term_scores(self, term: str) -> List[Dict[str, float]]:
        """Per-record, per-key scores for one term; keys above threshold are dropped."""
        cached = self._term_cache.get(term)
        if cached is not None:
            return cached

        # makes, colours, fuel types etc. repeat across records
        seen: Dict[str, float] = {}
        per_record = []
        for record in self._records:
            scores = {}
            for path, text in record.items():
                s = seen.get(text)
                if s is None:
                    s, _ = match_score(term, text, self.location, self.distance, self.threshold)
                    seen[text] = s
                if s <= self.threshold:
                    scores[path] = s
            per_record.append(scores)

        if len(self._term_cache) >= self.TERM_CACHE_SIZE:
            self._term_cache.clear()
        self._term_cache[term] = per_record
        return per_record

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult[T]]:
        """
        Find items matching every whitespace-separated term of `query`.

        Returns:
            Results ordered best first (lowest score); ties keep input order
        """
        terms = [t for t in (query or "").lower().split() if t]
        if not terms:
            return []

        term_scores = [self._term_scores(term) for term in terms]

        results: List[SearchResult[T]] = []
        for ref, item in enumerate(self.items):
            total = 1.0
            matched: Dict[str, float] = {}
            for per_record in term_scores:
                scores = per_record[ref]
                if not scores:
                    break
                for path, s in scores.items():
                    total *= (s or EPSILON) ** self._norm[path]
                    matched[path] = min(s, matched.get(path, 1.0))
            else:
                results.append(SearchResult(item=item, score=total, ref_index=ref, matches=matched))

        results.sort(key=lambda r: (r.score, r.ref_index))
        return results[:limit] if limit else results

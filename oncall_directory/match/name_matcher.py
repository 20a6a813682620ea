"""
Provider name matching for OnCall Directory.

Scores how closely a provider name matches a free-text search query.
The score is a sum of independent bonuses (exact, prefix, word boundary,
subsequence, small edit distance, shortness) so that callers can rank
candidates by sorting on it in descending order.
"""

import re
import logging
from typing import Callable, Dict, List, Optional

from oncall_directory.normalize.config import get_default_config
from oncall_directory.normalize.name_normalizer import normalize

logger = logging.getLogger(__name__)

_NON_WORD_PATTERN = re.compile(r'\W')


def levenshtein_capped(a: str, b: str, cap: int = 2) -> int:
    """
    Levenshtein distance between two strings, capped at `cap + 1`.

    Only the diagonal band of width 2*cap+1 is evaluated, one rolling row
    at a time, and evaluation stops as soon as a whole row exceeds the
    cap. Any result greater than `cap` is reported as `cap + 1`.

    Args:
        a: First string
        b: Second string
        cap: Largest distance of interest

    Returns:
        Edit distance, or cap + 1 if it exceeds cap
    """
    a = a if isinstance(a, str) else ""
    b = b if isinstance(b, str) else ""
    cap = max(0, int(cap))
    over = cap + 1

    if a == b:
        return 0

    len_a, len_b = len(a), len(b)
    if abs(len_a - len_b) > cap:
        return over

    width = 2 * cap + 1

    # Band cell k of row i holds dp[i][i + k - cap]
    prev = []
    for k in range(width):
        j = k - cap
        prev.append(j if 0 <= j <= len_b else over)

    for i in range(1, len_a + 1):
        ch = a[i - 1]
        curr = [over] * width
        for k in range(width):
            j = i + k - cap
            if j < 0 or j > len_b:
                continue
            if j == 0:
                curr[k] = i
                continue
            deletion = prev[k + 1] + 1 if k + 1 < width else over
            insertion = curr[k - 1] + 1 if k > 0 else over
            substitution = prev[k] + (0 if ch == b[j - 1] else 1)
            curr[k] = min(deletion, insertion, substitution, over)

        if all(value > cap for value in curr):
            return over
        prev = curr

    return min(prev[len_b - len_a + cap], over)


class ScoringRule:
    """
    A named additive bonus.

    `apply` receives the normalized candidate and query and returns the
    bonus to add (0 when the rule does not fire).
    """

    def __init__(self, name: str, apply: Callable[[str, str], int]):
        self.name = name
        self.apply = apply

    def __call__(self, candidate: str, query: str) -> int:
        return self.apply(candidate, query)

    def __repr__(self):
        return f"ScoringRule({self.name!r})"


class NameMatcher:
    """
    Scores provider names against search queries.

    Every rule is evaluated and the bonuses are summed; an exact match
    outranks any non-exact match because its bonus alone exceeds what
    all other rules can contribute together.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize name matcher with configuration.

        Args:
            config: Matching configuration with `edit_distance_cap` and `bonuses`
        """
        defaults = get_default_config()["matching"]
        self.config = config or {}
        self.edit_distance_cap = self.config.get("edit_distance_cap", defaults["edit_distance_cap"])

        self.bonuses = dict(defaults["bonuses"])
        self.bonuses.update(self.config.get("bonuses", {}))

        self.rules: List[ScoringRule] = [
            ScoringRule("exact", self._exact_bonus),
            ScoringRule("prefix", self._prefix_bonus),
            ScoringRule("word_boundary", self._word_boundary_bonus),
            ScoringRule("subsequence", self._subsequence_bonus),
            ScoringRule("edit_distance", self._edit_distance_bonus),
            ScoringRule("shortness", self._shortness_bonus),
        ]

        logger.info(f"Initialized NameMatcher with {len(self.rules)} scoring rules")

    def _exact_bonus(self, candidate: str, query: str) -> int:
        return self.bonuses["exact"] if candidate == query else 0

    def _prefix_bonus(self, candidate: str, query: str) -> int:
        return self.bonuses["prefix"] if candidate.startswith(query) else 0

    def _word_boundary_bonus(self, candidate: str, query: str) -> int:
        idx = candidate.find(query)
        if idx > 0 and _NON_WORD_PATTERN.match(candidate[idx - 1]):
            return self.bonuses["word_boundary"]
        return 0

    def _subsequence_bonus(self, candidate: str, query: str) -> int:
        matched = 0
        for ch in candidate:
            if matched < len(query) and ch == query[matched]:
                matched += 1
        if matched < len(query):
            return 0
        length_penalty = max(0, len(candidate) - len(query))
        return max(0, self.bonuses["subsequence"] - length_penalty)

    def _edit_distance_bonus(self, candidate: str, query: str) -> int:
        distance = levenshtein_capped(candidate, query, self.edit_distance_cap)
        if distance > self.edit_distance_cap:
            return 0
        return max(0, self.bonuses["edit_distance"] - self.bonuses["edit_distance_step"] * distance)

    def _shortness_bonus(self, candidate: str, query: str) -> int:
        return max(0, self.bonuses["shortness"] - len(candidate))

    def score_normalized(self, candidate: str, query: str) -> int:
        """
        Score an already normalized candidate against a normalized query.

        Args:
            candidate: Normalized candidate name
            query: Normalized query

        Returns:
            Non-negative relevance score
        """
        if not query:
            return 0
        return sum(rule(candidate, query) for rule in self.rules)

    def score(self, candidate_name: str, query: str) -> int:
        """
        Score a candidate name against a search query.

        Args:
            candidate_name: Provider or entity display name
            query: User-typed search text

        Returns:
            Non-negative relevance score, 0 for a blank query
        """
        return self.score_normalized(normalize(candidate_name), normalize(query))

    def score_breakdown(self, candidate_name: str, query: str) -> Dict[str, int]:
        """
        Calculate the contribution of each rule for a candidate/query pair.

        Args:
            candidate_name: Provider or entity display name
            query: User-typed search text

        Returns:
            Dictionary of rule name to bonus, plus the `total`
        """
        candidate = normalize(candidate_name)
        normalized_query = normalize(query)

        breakdown = {rule.name: 0 for rule in self.rules}
        if normalized_query:
            for rule in self.rules:
                breakdown[rule.name] = rule(candidate, normalized_query)

        breakdown["total"] = sum(breakdown[rule.name] for rule in self.rules)
        return breakdown


_default_matcher: Optional[NameMatcher] = None


def score_name(candidate_name: str, query: str) -> int:
    """
    Convenience function to score a name with the default matching rules.

    Args:
        candidate_name: Provider or entity display name
        query: User-typed search text

    Returns:
        Non-negative relevance score
    """
    global _default_matcher
    if _default_matcher is None:
        _default_matcher = NameMatcher()
    return _default_matcher.score(candidate_name, query)

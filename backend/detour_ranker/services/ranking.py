from typing import List, Sequence, Tuple

from detour_ranker.models import MatchResult


def _rank_key(indexed: Tuple[int, MatchResult]) -> tuple:
    position, match = indexed
    if match.detour_seconds is None:
        # Unroutable: after every routed match, in input order
        return (1, 0, position)
    return (0, match.detour_seconds, position)


def rank_matches(matches: Sequence[MatchResult]) -> List[MatchResult]:
    """
    Order matches best-first.

    Routed matches come first by ascending detour; ties keep their input
    order. Unroutable matches follow, also in input order. The output is a
    permutation of the input.
    """
    return [match for _, match in sorted(enumerate(matches), key=_rank_key)]

'''Tie-breakers and tie-aware candidate ordering.

Ties between candidates are legitimate outcomes of almost every election
method (equal tallies, equal scores, symmetric pairwise results), but the
result of a method evaluation must be a strict ranking of all candidates.
Every residual tie is therefore resolved by a *tie-breaker*: a comparator
over two candidate identifiers that returns a negative number if the first
candidate is to be placed ahead of the second, a positive number if the
second is, and zero only for a candidate compared with itself. The
tie-breaker must be a strict total order that stays fixed for the duration
of a trial.

The basic tie-breakers can be referred to by name (``'ascending'``,
``'descending'``); :class:`RandomOrder` provides a random order fixed per
trial for fairness.
'''

import functools
import itertools
import random
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

import votesim.component.core
from votesim.candidate import CandidateID, generate_candidates
from votesim.persist import simple_serialization


TieBreaker = Callable[[CandidateID, CandidateID], int]


class UnresolvedTieError(AssertionError):
    '''The tie-breaker failed to order two distinct candidates.

    This is an invariant violation rather than a runtime condition: a valid
    tie-breaker never considers two distinct candidates equal.
    '''
    def __init__(self, first: CandidateID, second: CandidateID):
        self.first = first
        self.second = second
        super().__init__(
            f'tie-breaker left candidates {first} and {second} unordered'
        )


class InvalidResultError(AssertionError):
    '''A method result is not a permutation of all candidates.'''
    def __init__(self, result: Sequence[CandidateID], n_candidates: int):
        self.result = result
        self.n_candidates = n_candidates
        super().__init__(
            f'result {list(result)} is not a ranking of all'
            f' {n_candidates} candidates'
        )


TIEBREAKERS = {}

tiebreaker_mark, get, construct = votesim.component.core.register_functions(
    TIEBREAKERS, 'tie-breaker'
)


@tiebreaker_mark
def ascending(first: CandidateID, second: CandidateID) -> int:
    '''Place the candidate with the lower identifier first.'''
    return first - second


@tiebreaker_mark
def descending(first: CandidateID, second: CandidateID) -> int:
    '''Place the candidate with the higher identifier first.'''
    return second - first


@simple_serialization
class RandomOrder:
    '''A tie-breaker ordering candidates by a random permutation.

    The permutation is drawn once on construction, so the tie-breaker stays
    consistent for all comparisons it makes; construct a new one (or pass
    a different seed) for each trial.

    :param n_candidates: Number of candidates in the election.
    :param seed: Seed for the random generator drawing the permutation.
    '''
    def __init__(self, n_candidates: int, seed: Optional[int] = None):
        self.n_candidates = n_candidates
        self.seed = seed
        self.order = generate_candidates(n_candidates)
        random.Random(seed).shuffle(self.order)
        self._positions = {
            cand: i for i, cand in enumerate(self.order)
        }

    def __call__(self, first: CandidateID, second: CandidateID) -> int:
        return self._positions[first] - self._positions[second]


def checked(tie_breaker: TieBreaker) -> TieBreaker:
    '''Wrap a tie-breaker to fail loudly if it leaves a tie unresolved.

    :raises UnresolvedTieError: From the returned comparator, when the
        tie-breaker considers two distinct candidates equal.
    '''
    def compare(first: CandidateID, second: CandidateID) -> int:
        if first == second:
            return 0
        result = tie_breaker(first, second)
        if result == 0:
            raise UnresolvedTieError(first, second)
        return result
    return compare


def order(candidates: Iterable[CandidateID],
          tie_breaker: TieBreaker,
          ) -> List[CandidateID]:
    '''Order tied candidates by the tie-breaker alone.'''
    return sorted(candidates, key=functools.cmp_to_key(checked(tie_breaker)))


def rank_by_scores(scores: Union[Sequence[Any], dict],
                   tie_breaker: TieBreaker,
                   candidates: Optional[Iterable[CandidateID]] = None,
                   descending: bool = True,
                   ) -> List[CandidateID]:
    '''Rank candidates by a score, resolving equal scores by the tie-breaker.

    :param scores: Scores indexed by candidate identifier (a sequence or
        a mapping). Any mutually comparable values can be used, including
        tuples for lexicographic comparisons.
    :param tie_breaker: Comparator to order candidates with equal scores.
    :param candidates: Candidates to rank; defaults to all candidates that
        have a score.
    :param descending: Whether higher scores rank first.
    :returns: Candidates ordered by score, best first.
    '''
    if candidates is None:
        if hasattr(scores, 'keys'):
            candidates = scores.keys()
        else:
            candidates = range(len(scores))
    by_score = sorted(
        candidates, key=scores.__getitem__, reverse=descending
    )
    ranking = []
    for score, group in itertools.groupby(by_score, key=scores.__getitem__):
        group = list(group)
        if len(group) > 1:
            ranking.extend(order(group, tie_breaker))
        else:
            ranking.append(group[0])
    return ranking


def flatten_tiers(tiers: Iterable[Iterable[CandidateID]],
                  tie_breaker: TieBreaker,
                  ) -> List[CandidateID]:
    '''Turn a ranking of tied groups into a strict ranking.

    :param tiers: Groups of candidates, best group first; candidates within
        a group are considered tied.
    '''
    ranking = []
    for tier in tiers:
        ranking.extend(order(tier, tie_breaker))
    return ranking


def check_result(result: Sequence[CandidateID], n_candidates: int) -> None:
    '''Check that a method result ranks every candidate exactly once.

    :raises InvalidResultError: If it does not.
    '''
    if (
        len(result) != n_candidates
        or set(result) != set(range(n_candidates))
    ):
        raise InvalidResultError(result, n_candidates)

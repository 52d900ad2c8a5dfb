'''Honest voters, casting ballots directly from their utilities.'''

import logging
from typing import Callable, Dict, Sequence, Tuple, Union

import votesim.util
from votesim.ballot import (
    ApprovalBallot, EqualRankedBallot, RankedBallot, ScoreBallot
)
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization
from votesim.voters.core import BallotRequest, Voter

logger = logging.getLogger(__name__)

ApprovalThreshold = Union[str, float, Callable[[Sequence[float]], float]]


def approval_bound(utilities: Sequence[float],
                   threshold: ApprovalThreshold,
                   ) -> float:
    '''Determine the utility a candidate needs to be approved.

    :param utilities: The voter's utilities.
    :param threshold: ``'mean'`` for the mean utility, a number for a preset
        bound, or a callable computing the bound from the utilities.
    '''
    if threshold == 'mean':
        return sum(utilities) / len(utilities)
    elif hasattr(threshold, '__call__'):
        return threshold(utilities)
    elif isinstance(threshold, (int, float)):
        return threshold
    else:
        raise ValueError(f'invalid approval threshold: {threshold!r}')


def equal_ranked_from_utilities(utilities: Sequence[float],
                                ) -> EqualRankedBallot:
    '''Group candidates with equal utility, best group first.'''
    groups = []
    last_utility = None
    for cand in votesim.util.preference_order(utilities):
        if groups and utilities[cand] == last_utility:
            groups[-1].append(cand)
        else:
            groups.append([cand])
            last_utility = utilities[cand]
    return tuple(frozenset(group) for group in groups)


def score_from_utilities(utilities: Sequence[float],
                         scale: int,
                         scales: bool,
                         ) -> Tuple[int, ...]:
    '''Convert utilities to integer scores in ``[0, scale]``.

    :param scales: If True, utilities are first rescaled linearly so that the
        least liked candidate gets zero and the most liked gets the maximum.
    '''
    if scales:
        utilities = votesim.util.scale_utilities_linearly(utilities)
    return tuple(votesim.util.utility_to_score(u, scale) for u in utilities)


def restrict_ranking(ranking: tuple, n_candidates: int) -> tuple:
    return tuple(cand for cand in ranking if cand < n_candidates)


def restrict_groups(groups: EqualRankedBallot,
                    n_candidates: int,
                    ) -> EqualRankedBallot:
    restricted = (
        frozenset(cand for cand in group if cand < n_candidates)
        for group in groups
    )
    return tuple(group for group in restricted if group)


@simple_serialization
class HonestVoter(Voter):
    '''A voter who casts their ballots directly from their true utilities.

    Ranked ballots order the candidates by decreasing utility (candidates of
    equal utility by ascending identifier); equal-ranked ballots group
    candidates of equal utility. Both never change and are computed
    once on construction. Score ballots are computed on the first request
    for a given scale and cached for subsequent requests at that scale.

    In an election with fewer candidates than the voter has utilities for,
    score scaling and the approval threshold only consider the utilities of
    the candidates running; such ballots are not cached.

    :param utilities: Utility of each candidate for the voter, by candidate
        identifier, as floats in ``[0, 1]``.
    :param scales: Whether to stretch score ballots so that the least liked
        candidate gets the minimum and the most liked the maximum score.
        With utilities ``(.01, 0, .2)`` and scale 10, the voter scores
        ``(1, 0, 10)`` when scaling and ``(0, 0, 2)`` otherwise. Scaling is
        not considered strategic voting here.
    :param approval_threshold: Where the voter puts their approval
        threshold: ``'mean'`` approves candidates with at least the mean
        utility, a float is a preset utility bound, a callable computes the
        bound from the utilities. The favourite is always approved.
    '''
    def __init__(self,
                 utilities: Sequence[float],
                 scales: bool = True,
                 approval_threshold: ApprovalThreshold = 'mean',
                 ):
        if not utilities:
            raise ValueError('voter needs utilities for at least one candidate')
        self._utilities = tuple(utilities)
        self.scales = scales
        self.approval_threshold = approval_threshold
        self._ranked = tuple(votesim.util.preference_order(self._utilities))
        self._equal_ranked = equal_ranked_from_utilities(self._utilities)
        self._approval = votesim.util.utilities_at_or_above(
            self._utilities,
            approval_bound(self._utilities, approval_threshold),
        )
        self._score_cache: Dict[int, ScoreBallot] = {}

    @property
    def utilities(self) -> Tuple[float, ...]:
        return self._utilities

    def covers(self, n_candidates: int) -> bool:
        return len(self._utilities) >= n_candidates

    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        if n_candidates < len(self._utilities):
            return restrict_ranking(self._ranked, n_candidates)
        return self._ranked

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        if n_candidates < len(self._utilities):
            return restrict_groups(self._equal_ranked, n_candidates)
        return self._equal_ranked

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        if n_candidates < len(self._utilities):
            return score_from_utilities(
                self._utilities[:n_candidates], request.scale, self.scales
            )
        ballot = self._score_cache.get(request.scale)
        if ballot is None:
            ballot = score_from_utilities(
                self._utilities, request.scale, self.scales
            )
            self._score_cache[request.scale] = ballot
        return ballot

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        if n_candidates < len(self._utilities):
            utilities = self._utilities[:n_candidates]
            return votesim.util.utilities_at_or_above(
                utilities, approval_bound(utilities, self.approval_threshold)
            )
        return self._approval

    def cached_scales(self) -> Tuple[int, ...]:
        '''Scales for which a score ballot is currently cached.'''
        return tuple(self._score_cache.keys())

    def reset(self) -> None:
        self._score_cache.clear()

    def favourite(self) -> CandidateID:
        return votesim.util.favourite(self._utilities)

'''Rank scorers for positional election methods such as Borda.

A rank scorer returns the points awarded to each rank on a ballot, best rank
first. Where a voter places several candidates on a shared rank (which also
happens to all candidates left off a truncated ballot), the group occupies
as many consecutive ranks as it has members and the points for those ranks
are split evenly among them.

Rank scorers hold no per-election state; the number of candidates is passed
to every `scores()` call, so a single scorer can serve concurrent
evaluations.
'''

import abc
from fractions import Fraction
from numbers import Number
from typing import Dict, List

import votesim.component.core
from votesim.ballot import EqualRankedBallot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization


RANK_SCORERS = {}

rank_scorer_mark, get, _ = votesim.component.core.register_functions(
    RANK_SCORERS, 'rank scorer'
)


class RankScorer(metaclass=abc.ABCMeta):
    '''An abstract base class for rank scorers.

    Rank scorers must provide a `scores()` method that returns a list of
    scores for the given number of ranks in an election with the given
    number of candidates.
    '''
    @abc.abstractmethod
    def scores(self, n_ranked: int, n_candidates: int) -> List[Number]:
        raise NotImplementedError


@rank_scorer_mark
@simple_serialization
class Borda(RankScorer):
    '''Borda rank scorer.

    Assigns the `base` score to the last rank and one point more for each
    higher rank.

    :param base: The score for the last rank. The original Borda count uses
        1; many variants use zero, giving the number of candidates minus one
        to the first rank.
    '''
    def __init__(self, base: int = 1):
        self.base = base

    def scores(self, n_ranked: int, n_candidates: int) -> List[int]:
        '''Return the scores for the first n_ranked ranks.

        :raises ValueError: If more ranks are requested than there are
            candidates.
        '''
        if n_ranked > n_candidates:
            raise ValueError(f'cannot rank {n_ranked} out of maximum'
                             f' {n_candidates} candidates')
        top_score = n_candidates + self.base - 1
        return [top_score - rank for rank in range(n_ranked)]


@rank_scorer_mark
@simple_serialization
class Dowdall(RankScorer):
    '''Dowdall (Nauru) rank scorer, assigning 1, 1/2, 1/3... to the ranks.'''
    def scores(self, n_ranked: int, n_candidates: int) -> List[Fraction]:
        return [Fraction(1, rank + 1) for rank in range(n_ranked)]


def construct(scorer_def) -> RankScorer:
    '''Get a rank scorer instance by its class name, or pass one through.'''
    if isinstance(scorer_def, str):
        return get(scorer_def)()
    return scorer_def


def score_groups(groups: EqualRankedBallot,
                 rank_scores: List[Number],
                 ) -> Dict[CandidateID, Fraction]:
    '''Award rank scores to candidates on an equal-ranked ballot.

    Candidates sharing a rank split the points of the ranks their group
    spans evenly.

    :param groups: Groups of candidates, best group first.
    :param rank_scores: Points for each rank, best first; must be at least
        as long as the number of candidates on the ballot.
    '''
    awarded = {}
    position = 0
    for group in groups:
        span = rank_scores[position:position + len(group)]
        share = Fraction(sum(span), len(group))
        for cand in group:
            awarded[cand] = share
        position += len(group)
    return awarded

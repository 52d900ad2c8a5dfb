'''Positional election methods (Borda count and its relatives).

Each ballot awards points to the candidates by the rank it gives them, as
determined by a rank scorer from :mod:`votesim.component.rankscore`; the
candidates are ranked by their point totals.
'''

import logging
from fractions import Fraction
from typing import List, Union

import votesim.ballot
import votesim.component.rankscore
import votesim.evaluate.core
import votesim.tiebreak
from votesim.ballot import Ballot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)


@simple_serialization
class PositionalVoting(votesim.evaluate.core.Evaluator):
    '''Rank candidates by points awarded for positions on ranked ballots.

    Candidates left off a truncated ballot share its remaining ranks and
    split the points for them evenly, as do candidates a voter ranks equally.
    Abstaining ballots award no points.

    :param rank_scorer: A rank scorer, or the name of a registered one
        (``'Borda'``, ``'Dowdall'``).
    '''
    request_kind = votesim.ballot.EQUAL_RANKED

    def __init__(self,
                 rank_scorer: Union[
                     str, votesim.component.rankscore.RankScorer
                 ] = 'Borda',
                 ):
        self.rank_scorer = votesim.component.rankscore.construct(rank_scorer)

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        rank_scores = self.rank_scorer.scores(n_candidates, n_candidates)
        totals = [Fraction(0)] * n_candidates
        rankings = votesim.evaluate.core.completed_rankings(
            ballots, n_candidates
        )
        for ranking in rankings:
            awarded = votesim.component.rankscore.score_groups(
                ranking, rank_scores
            )
            for cand, points in awarded.items():
                totals[cand] += points
        logger.debug('positional totals: %s', totals)
        return votesim.tiebreak.rank_by_scores(totals, tie_breaker)

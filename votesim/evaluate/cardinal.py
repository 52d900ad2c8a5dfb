'''Cardinal election methods, evaluating score ballots.

All of these methods ask for score ballots of their fixed scale. Candidates
a voter leaves unrated receive the minimum score of the scale.
'''

import logging
from typing import List, Sequence, Tuple

import votesim.evaluate.core
import votesim.tiebreak
from votesim.ballot import Ballot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)


@simple_serialization
class ScoreVoting(votesim.evaluate.core.ScaledEvaluator):
    '''Score (range) voting: rank candidates by the sum of their scores.

    :param scale: Maximum score on the ballots.
    '''
    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        totals = votesim.evaluate.core.score_totals(
            self.completed_scores(ballots, n_candidates), n_candidates
        )
        logger.debug('score totals: %s', totals)
        return votesim.tiebreak.rank_by_scores(totals, tie_breaker)


@simple_serialization
class STAR(votesim.evaluate.core.ScaledEvaluator):
    '''Score Then Automatic Runoff (STAR) voting.

    Selects the two candidates with the highest score totals and ranks the
    one preferred over the other by more ballots first; if the runoff is
    tied, the one with the higher total wins. The remaining candidates
    follow in the order of their score totals.

    :param scale: Maximum score on the ballots.
    '''
    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        scores = self.completed_scores(ballots, n_candidates)
        totals = votesim.evaluate.core.score_totals(scores, n_candidates)
        by_score = votesim.tiebreak.rank_by_scores(totals, tie_breaker)
        logger.debug('score totals: %s', totals)
        if n_candidates < 2:
            return by_score
        first, second = by_score[:2]
        first_pref, second_pref = self.runoff(scores, first, second)
        logger.info(
            'runoff %s vs %s: %d to %d',
            first, second, first_pref, second_pref
        )
        if second_pref > first_pref:
            first, second = second, first
        return [first, second] + by_score[2:]

    @staticmethod
    def runoff(scores: Sequence[Sequence[int]],
               first: CandidateID,
               second: CandidateID,
               ) -> Tuple[int, int]:
        '''Count ballots scoring either candidate higher than the other.'''
        first_pref, second_pref = 0, 0
        for ballot in scores:
            if ballot[first] > ballot[second]:
                first_pref += 1
            elif ballot[second] > ballot[first]:
                second_pref += 1
        return first_pref, second_pref


def majority_value(grades: Sequence[int]) -> Tuple[int, ...]:
    '''Compute the majority value of a candidate's grades.

    This is the sequence of the lower medians obtained by repeatedly taking
    the lower median of the grades and removing it.
    '''
    remaining = sorted(grades)
    value = []
    while remaining:
        median = remaining.pop((len(remaining) - 1) // 2)
        value.append(median)
    return tuple(value)


@simple_serialization
class MajorityJudgment(votesim.evaluate.core.ScaledEvaluator):
    '''Majority Judgment, a median-based cardinal method.

    Ranks the candidates by the majority value of their grades
    (Balinski and Laraki), compared lexicographically: the candidate with
    the higher median grade ranks first; between candidates with equal
    medians, one median grade is removed from each and the medians are
    compared again.

    :param scale: Maximum grade on the ballots.
    '''
    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        scores = self.completed_scores(ballots, n_candidates)
        values = [
            majority_value([ballot[cand] for ballot in scores])
            for cand in range(n_candidates)
        ]
        return votesim.tiebreak.rank_by_scores(values, tie_breaker)

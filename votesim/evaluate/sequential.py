'''Sequential ranked election methods.

These methods proceed in rounds over the ranked ballots: instant runoff and
Coombs eliminate one candidate per round, Bucklin adds lower preferences
round by round until candidates achieve a majority. The full ranking of the
candidates follows from the order in which they were eliminated or elected.
'''

import logging
from fractions import Fraction
from typing import Dict, List

import votesim.ballot
import votesim.evaluate.core
import votesim.tiebreak
from votesim.ballot import Ballot, EqualRankedBallot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoff(votesim.evaluate.core.Evaluator):
    '''Instant-runoff voting (alternative vote, Hare method).

    In each round, every ballot counts for its highest ranked candidate
    still in the count and the candidate with the fewest votes is
    eliminated; of several candidates tied for the fewest votes, the one the
    tie-breaker places last is eliminated. The candidates are ranked in the
    reverse order of elimination, so the last one standing wins.
    '''
    request_kind = votesim.ballot.EQUAL_RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        rankings = votesim.evaluate.core.completed_rankings(
            ballots, n_candidates
        )
        remaining = set(range(n_candidates))
        eliminated = []
        while len(remaining) > 1:
            totals = votesim.evaluate.core.first_preferences(
                rankings, remaining
            )
            logger.debug('current vote totals: %s', totals)
            loser = votesim.tiebreak.rank_by_scores(totals, tie_breaker)[-1]
            logger.info('eliminating %s', loser)
            remaining.remove(loser)
            eliminated.append(loser)
        return list(remaining) + eliminated[::-1]


@simple_serialization
class Coombs(votesim.evaluate.core.Evaluator):
    '''Coombs' method.

    In each round, if a candidate is ranked first among the remaining
    candidates on more than half of the (non-abstaining) ballots, they are
    elected to the next free place of the ranking and removed from the
    count. Otherwise, the candidate ranked last by the most ballots is
    eliminated and takes the last free place; of several candidates tied
    for the most last places, the one the tie-breaker places last goes.
    '''
    request_kind = votesim.ballot.EQUAL_RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        rankings = votesim.evaluate.core.completed_rankings(
            ballots, n_candidates
        )
        majority_quota = Fraction(len(rankings), 2)
        remaining = set(range(n_candidates))
        elected = []
        eliminated = []
        while len(remaining) > 1:
            firsts = votesim.evaluate.core.first_preferences(
                rankings, remaining
            )
            leader = votesim.tiebreak.rank_by_scores(firsts, tie_breaker)[0]
            if rankings and firsts[leader] > majority_quota:
                logger.info('%s elected by majority', leader)
                remaining.remove(leader)
                elected.append(leader)
                continue
            lasts = votesim.evaluate.core.last_preferences(
                rankings, remaining
            )
            logger.debug('current last place totals: %s', lasts)
            loser = votesim.tiebreak.rank_by_scores(
                lasts, tie_breaker, descending=False
            )[-1]
            logger.info('eliminating %s', loser)
            remaining.remove(loser)
            eliminated.append(loser)
        return elected + list(remaining) + eliminated[::-1]


@simple_serialization
class Bucklin(votesim.evaluate.core.Evaluator):
    '''Bucklin voting.

    Each candidate starts with their first-preference votes, to which the
    second preferences are added in the second round, the third in the third
    and so on. After each round, the candidates with more than half of the
    ballots are elected in the order of their vote totals and removed from
    further counting. Ranks shared by several candidates split the vote
    for each of them evenly.

    Since completed ballots rank everybody, all candidates pass the majority
    in the last round at the latest.
    '''
    request_kind = votesim.ballot.EQUAL_RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        rankings = votesim.evaluate.core.completed_rankings(
            ballots, n_candidates
        )
        majority_quota = Fraction(len(rankings), 2)
        totals = {cand: Fraction(0) for cand in range(n_candidates)}
        elected = []
        for round_i in range(n_candidates):
            for ranking in rankings:
                self._add_round_votes(totals, ranking, round_i)
            logger.debug('round %d vote totals: %s', round_i + 1, totals)
            majority = {
                cand: n_votes for cand, n_votes in totals.items()
                if n_votes > majority_quota
            }
            if majority:
                best = votesim.tiebreak.rank_by_scores(majority, tie_breaker)
                logger.info(
                    'round %d: %s elected by majority', round_i + 1, best
                )
                elected.extend(best)
                for cand in best:
                    del totals[cand]
            if not totals:
                break
        # with no ballots cast, nobody ever reaches a majority
        return elected + votesim.tiebreak.rank_by_scores(totals, tie_breaker)

    @staticmethod
    def _add_round_votes(totals: Dict[CandidateID, Fraction],
                         ranking: EqualRankedBallot,
                         round_i: int,
                         ) -> None:
        position = 0
        for group in ranking:
            if position <= round_i < position + len(group):
                share = Fraction(1, len(group))
                for cand in group:
                    if cand in totals:
                        totals[cand] += share
                return
            position += len(group)

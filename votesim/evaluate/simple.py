'''Single-mark election methods: plurality, anti-plurality and approval.

Each voter's ballot counts once for (or against) the candidates it marks and
the candidates are ranked by the resulting tallies. Equal tallies are
resolved by the tie-breaker.
'''

import logging
from typing import List

import votesim.ballot
import votesim.evaluate.core
import votesim.tiebreak
from votesim.ballot import Ballot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)


@simple_serialization
class Plurality(votesim.evaluate.core.Evaluator):
    '''Plurality voting (first past the post).

    Every voter votes for the top candidate on their ranked ballot;
    candidates are ranked by the number of votes. A ballot ranking no
    candidate is an abstention.
    '''
    request_kind = votesim.ballot.RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        tally = votesim.evaluate.core.first_preferences(
            votesim.evaluate.core.completed_rankings(ballots, n_candidates),
            range(n_candidates),
        )
        logger.debug('plurality tally: %s', tally)
        return votesim.tiebreak.rank_by_scores(tally, tie_breaker)


@simple_serialization
class AntiPlurality(votesim.evaluate.core.Evaluator):
    '''Anti-plurality voting.

    Every voter votes against the candidate they rank last (all candidates
    they leave off a truncated ballot share that vote); the candidate with
    the fewest votes against wins.
    '''
    request_kind = votesim.ballot.RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        against = votesim.evaluate.core.last_preferences(
            votesim.evaluate.core.completed_rankings(ballots, n_candidates),
            range(n_candidates),
        )
        logger.debug('anti-plurality votes against: %s', against)
        return votesim.tiebreak.rank_by_scores(
            against, tie_breaker, descending=False
        )


@simple_serialization
class Approval(votesim.evaluate.core.Evaluator):
    '''Approval voting: the candidate approved by the most voters wins.'''
    request_kind = votesim.ballot.APPROVAL

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        approvals = [0] * n_candidates
        for ballot in ballots:
            for cand in ballot:
                approvals[cand] += 1
        logger.debug('approval counts: %s', approvals)
        return votesim.tiebreak.rank_by_scores(approvals, tie_breaker)

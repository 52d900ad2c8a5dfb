'''General election method evaluator machinery.

An evaluator asks every voter to cast a ballot of the shape it needs, exactly
once per evaluation, and aggregates the ballots into a strict ranking of all
candidates, best first. The aggregation itself is available separately as
:meth:`Evaluator.rank`, which works on plain ballot lists.

The helper functions here turn ballots into the tallies the evaluators
build on, applying the common interpretation of incomplete ballots:
candidates left off a ranked ballot share its last rank, a ranked ballot
listing no candidate at all is an abstention, and candidates sharing a rank
split the vote (or points) for it evenly.
'''

import abc
import logging
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import votesim.ballot
import votesim.tiebreak
from votesim.ballot import Ballot, EqualRankedBallot
from votesim.candidate import CandidateID
from votesim.voters.core import BallotRequest, Voter

logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''An election method with a valid setup reached an unresolvable state.'''
    pass


def ballot_validator(request: BallotRequest,
                     ) -> votesim.ballot.BallotValidator:
    '''Return a validator for ballots of the requested shape.'''
    if request.kind == votesim.ballot.RANKED:
        return votesim.ballot.RankedBallotValidator()
    elif request.kind == votesim.ballot.EQUAL_RANKED:
        return votesim.ballot.RankedBallotValidator(allow_equal=True)
    elif request.kind == votesim.ballot.SCORE:
        return votesim.ballot.ScoreBallotValidator(request.scale)
    elif request.kind == votesim.ballot.APPROVAL:
        return votesim.ballot.ApprovalBallotValidator()
    else:
        raise ValueError(f'unknown ballot kind: {request.kind!r}')


def collect_ballots(voters: Iterable[Voter],
                    n_candidates: int,
                    request: BallotRequest,
                    ) -> List[Ballot]:
    '''Ask every voter for a ballot, once each, in the order given.

    :raises BallotError: If a voter casts an invalid ballot.
    :raises CandidateError: If a ballot references an unknown candidate.
    '''
    validator = ballot_validator(request)
    ballots = []
    for voter in voters:
        ballot = voter.cast_ballot(n_candidates, request)
        validator.validate(ballot, n_candidates)
        ballots.append(ballot)
    return ballots


def completed_rankings(ballots: Iterable[Ballot],
                       n_candidates: int,
                       ) -> List[EqualRankedBallot]:
    '''Complete ranked ballots for ranking-based methods, dropping abstentions.

    See :func:`votesim.ballot.complete_ranking` for the completion rules.
    '''
    completed = []
    for ballot in ballots:
        groups = votesim.ballot.complete_ranking(ballot, n_candidates)
        if groups:
            completed.append(groups)
    return completed


def first_preferences(rankings: Iterable[EqualRankedBallot],
                      candidates: Iterable[CandidateID],
                      ) -> Dict[CandidateID, Fraction]:
    '''Count the first preferences among the given candidates.

    Each ballot gives one vote to its highest-ranked group of candidates
    still in the count, split evenly if the group has more members.

    :param rankings: Completed equal-ranked ballots.
    :param candidates: Candidates still in the count; candidates not given
        are skipped on the ballots.
    :returns: Vote counts for all the given candidates, including zeros.
    '''
    candidates = frozenset(candidates)
    tally = {cand: Fraction(0) for cand in candidates}
    for ranking in rankings:
        for group in ranking:
            group = group & candidates
            if group:
                share = Fraction(1, len(group))
                for cand in group:
                    tally[cand] += share
                break
    return tally


def last_preferences(rankings: Iterable[EqualRankedBallot],
                     candidates: Iterable[CandidateID],
                     ) -> Dict[CandidateID, Fraction]:
    '''Count the votes against the lowest-ranked candidates still in the count.

    The mirror image of :func:`first_preferences`.
    '''
    return first_preferences(
        (tuple(reversed(ranking)) for ranking in rankings), candidates
    )


def pairwise_counts(rankings: Iterable[EqualRankedBallot],
                    n_candidates: int,
                    ) -> Dict[Tuple[CandidateID, CandidateID], int]:
    '''Count pairwise preferences in completed ranked ballots.

    For each ordered pair of distinct candidates, counts the ballots that
    rank the first strictly above the second. Candidates sharing a rank
    express no preference between each other.

    :returns: A count for every ordered pair of distinct candidates,
        including zeros.
    '''
    counts = {
        (first, second): 0
        for first in range(n_candidates)
        for second in range(n_candidates)
        if first != second
    }
    for ranking in rankings:
        above = []
        for group in ranking:
            for upper in above:
                for lower in group:
                    counts[upper, lower] += 1
            above.extend(group)
    return counts


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate an election among simulated voters.

    A root abstract base class for all evaluators. Subclasses set the
    ``request_kind`` to the ballot shape they need and implement
    :meth:`rank`.
    '''
    request_kind: str = votesim.ballot.RANKED
    scale: Optional[int] = None

    def ballot_request(self, method: Optional[str] = None) -> BallotRequest:
        return BallotRequest(self.request_kind, method, self.scale)

    def evaluate(self,
                 voters: Sequence[Voter],
                 n_candidates: int,
                 tie_breaker: Union[str, votesim.tiebreak.TieBreaker]
                 = 'ascending',
                 method: Optional[str] = None,
                 ) -> List[CandidateID]:
        '''Cast the ballots of all voters and rank the candidates.

        :param voters: The voters; each casts exactly one ballot.
        :param n_candidates: Number of candidates in the election.
        :param tie_breaker: Comparator to resolve residual ties, or the name
            of a registered tie-breaker.
        :param method: Identifier of the method being run, passed to the
            voters with the ballot request.
        :returns: All candidates, best first.
        '''
        tie_breaker = votesim.tiebreak.construct(tie_breaker)
        ballots = collect_ballots(
            voters, n_candidates, self.ballot_request(method)
        )
        logger.debug(
            'collected %d %s ballots', len(ballots), self.request_kind
        )
        return self.rank(ballots, n_candidates, tie_breaker)

    @abc.abstractmethod
    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        '''Aggregate the ballots into a strict ranking of all candidates.'''
        raise NotImplementedError


class ScaledEvaluator(Evaluator):
    '''An evaluator working with score ballots of a fixed scale.

    :param scale: Maximum score on the ballots.
    '''
    request_kind = votesim.ballot.SCORE

    def __init__(self, scale: int = 10):
        if scale < 1:
            raise ValueError(f'invalid score scale: {scale!r}')
        self.scale = scale

    def completed_scores(self,
                         ballots: Iterable[Ballot],
                         n_candidates: int,
                         ) -> List[Tuple[int, ...]]:
        '''Complete score ballots, rating unrated candidates at the minimum.'''
        return [
            votesim.ballot.complete_scores(ballot, n_candidates)
            for ballot in ballots
        ]


def score_totals(scores: Iterable[Sequence[int]],
                 n_candidates: int,
                 ) -> List[int]:
    '''Sum completed score ballots per candidate.'''
    totals = [0] * n_candidates
    for ballot in scores:
        for cand, score in enumerate(ballot):
            totals[cand] += score
    return totals

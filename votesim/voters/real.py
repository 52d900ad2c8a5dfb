'''Voters built from real ballots.

These voters carry no utility information, just a ballot somebody actually
cast; they can only express themselves on ballots derivable from it. Use
them to replay real election data through the simulated methods.
'''

from typing import Optional, Sequence, Union

import votesim.ballot
import votesim.tiebreak
from votesim.ballot import (
    ApprovalBallot, EqualRankedBallot, RankedBallot, ScoreBallot
)
from votesim.persist import simple_serialization
from votesim.voters.core import BallotRequest, UnsupportedBallotError, Voter


@simple_serialization
class RealOrdinalVoter(Voter):
    '''A voter holding a real, possibly truncated, ranked ballot.

    Only ranked and equal-ranked ballots can be cast.

    :param ballot: The ranked ballot, best candidate first.
    '''
    def __init__(self, ballot: Sequence[int]):
        self.ballot = tuple(ballot)
        votesim.ballot.RankedBallotValidator().validate(
            self.ballot, max(self.ballot, default=-1) + 1
        )
        self._groups = votesim.ballot.ranking_to_groups(self.ballot)

    def covers(self, n_candidates: int) -> bool:
        return all(cand < n_candidates for cand in self.ballot)

    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        return self.ballot

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        return self._groups

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        raise UnsupportedBallotError(self, request)

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        raise UnsupportedBallotError(self, request)


@simple_serialization
class RealCardinalVoter(Voter):
    '''A voter holding a real score ballot on a fixed scale.

    Ranked ballots list the rated candidates by decreasing score, equal
    scores ordered by the tie-breaker; equal-ranked ballots group the rated
    candidates by score. Approval ballots can only be derived from ballots
    on a scale of one, where they contain the candidates scored one.
    Unrated candidates never appear on the derived ballots.

    :param scale: Maximum score of the ballot.
    :param ballot: Scores indexed by candidate, None for unrated ones.
    :param tie_breaker: Orders equally scored candidates on ranked ballots;
        a name from :data:`votesim.tiebreak.TIEBREAKERS` or a comparator.
    '''
    def __init__(self,
                 scale: int,
                 ballot: Sequence[Optional[int]],
                 tie_breaker: Union[str, votesim.tiebreak.TieBreaker]
                 = 'ascending',
                 ):
        if scale < 1:
            raise ValueError(f'invalid score scale: {scale!r}')
        self.scale = scale
        self.ballot = tuple(ballot)
        votesim.ballot.ScoreBallotValidator(scale).validate(
            self.ballot, len(self.ballot)
        )
        self.tie_breaker = tie_breaker
        rated = {
            cand: score for cand, score in enumerate(self.ballot)
            if score is not None
        }
        self._groups = self._group_by_score(rated)
        self._ranked = tuple(votesim.tiebreak.flatten_tiers(
            self._groups, votesim.tiebreak.construct(tie_breaker)
        ))

    @staticmethod
    def _group_by_score(rated: dict) -> EqualRankedBallot:
        groups = {}
        for cand, score in rated.items():
            groups.setdefault(score, set()).add(cand)
        return tuple(
            frozenset(groups[score])
            for score in sorted(groups.keys(), reverse=True)
        )

    def covers(self, n_candidates: int) -> bool:
        return all(score is None for score in self.ballot[n_candidates:])

    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        return self._ranked

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        return self._groups

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        if request.scale != self.scale:
            raise UnsupportedBallotError(self, request)
        return self.ballot[:n_candidates]

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        if self.scale != 1:
            raise UnsupportedBallotError(self, request)
        return frozenset(
            cand for cand, score in enumerate(self.ballot) if score == 1
        )

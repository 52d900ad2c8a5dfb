'''Strategic voters.

Strategic voters know their true utilities but distort their ballots to
help a preferred candidate, based on their beliefs about which two
candidates are the *frontrunners* (the likely contenders for the win).
Adaptive strategic voters revise these beliefs after observing each
published method result, taking its top two candidates as the new
frontrunners; non-adaptive ones stick to their initial beliefs.

Frontrunners that do not take part in the election (their identifier is
out of range) are disregarded; with less than two frontrunners left, the
voter has no strategy to apply and votes honestly.
'''

import logging
from typing import List, Optional, Sequence, Tuple

import votesim.util
from votesim.ballot import (
    ApprovalBallot, EqualRankedBallot, RankedBallot, ScoreBallot
)
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization
from votesim.voters.core import BallotRequest, Voter
from votesim.voters.honest import HonestVoter

logger = logging.getLogger(__name__)


def _is_candidate_id(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and value >= 0
    )


class StrategicVoter(Voter):
    '''Base class for voters with utilities who may vote strategically.

    Not intended for direct use. Honest ballots, from which the strategic
    ones are derived, come from an inner :class:`HonestVoter`.

    :param utilities: Utility of each candidate for the voter.
    :param frontrunners: The two candidates initially believed to be the
        frontrunners, as distinct non-negative candidate identifiers.
        Identifiers beyond the number of candidates in an election are
        disregarded in it.
    :param adaptive: Whether to update the beliefs from observed results.
    '''
    def __init__(self,
                 utilities: Sequence[float],
                 frontrunners: Sequence[CandidateID] = (),
                 adaptive: bool = False,
                 ):
        self._honest = HonestVoter(utilities)
        self.frontrunners = tuple(frontrunners)
        if self.frontrunners and (
            len(self.frontrunners) != 2
            or self.frontrunners[0] == self.frontrunners[1]
            or not all(_is_candidate_id(cand) for cand in self.frontrunners)
        ):
            raise ValueError(
                f'frontrunners must be two distinct candidates,'
                f' got {self.frontrunners}'
            )
        self.adaptive = adaptive
        self.beliefs = self.frontrunners

    @property
    def utilities(self) -> Tuple[float, ...]:
        return self._honest.utilities

    def covers(self, n_candidates: int) -> bool:
        return self._honest.covers(n_candidates)

    def observe_result(self,
                       method: str,
                       ranking: Sequence[CandidateID],
                       ) -> None:
        if self.adaptive and len(ranking) >= 2:
            self.beliefs = tuple(ranking[:2])
            logger.debug(
                'voter adopted frontrunners %s after %s', self.beliefs, method
            )

    def reset(self) -> None:
        self._honest.reset()
        self.beliefs = self.frontrunners

    def contenders(self,
                   n_candidates: int,
                   ) -> Optional[Tuple[CandidateID, CandidateID]]:
        '''Return the believed frontrunners, liked one first.

        Frontrunners of equal utility stay in their believed order.
        Returns None if less than two believed frontrunners are in the
        election.
        '''
        valid = [cand for cand in self.beliefs if 0 <= cand < n_candidates]
        if len(valid) < 2:
            return None
        first, second = valid
        if self.honest_preference(first, second) < 0:
            first, second = second, first
        return first, second


def _move_to_top(ranking: Sequence[CandidateID],
                 candidate: CandidateID,
                 ) -> RankedBallot:
    return (candidate, ) + tuple(c for c in ranking if c != candidate)


def _move_to_bottom(ranking: Sequence[CandidateID],
                    candidate: CandidateID,
                    ) -> RankedBallot:
    return tuple(c for c in ranking if c != candidate) + (candidate, )


def _without(groups: EqualRankedBallot,
             candidate: CandidateID,
             ) -> List[frozenset]:
    out = []
    for group in groups:
        group = group.difference((candidate, ))
        if group:
            out.append(group)
    return out


@simple_serialization
class BulletVoter(StrategicVoter):
    '''A voter who only ever votes for their favourite candidate.

    Ranks only the favourite, gives it the maximum score and the minimum to
    everyone else, and approves of nobody else. Holds no frontrunner
    beliefs.
    '''
    serialize_params = ['utilities']

    def __init__(self, utilities: Sequence[float]):
        super().__init__(utilities)

    def favourite(self, n_candidates: int) -> CandidateID:
        return votesim.util.favourite(self.utilities[:n_candidates])

    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        return (self.favourite(n_candidates), )

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        return (frozenset((self.favourite(n_candidates), )), )

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        favourite = self.favourite(n_candidates)
        return tuple(
            request.scale if cand == favourite else 0
            for cand in range(n_candidates)
        )

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        return frozenset((self.favourite(n_candidates), ))


@simple_serialization
class CompromisingVoter(StrategicVoter):
    '''A voter who supports the preferable frontrunner.

    The voter raises the frontrunner they like more to the top of their
    ranking, gives the maximum score to it and to every candidate liked at
    least as much, and approves exactly those candidates. Otherwise the
    ballots are honest.
    '''
    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        honest = self._honest.cast_ranked_ballot(n_candidates, request)
        contenders = self.contenders(n_candidates)
        if contenders is None:
            return honest
        return _move_to_top(honest, contenders[0])

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        honest = self._honest.cast_equal_ranked_ballot(n_candidates, request)
        contenders = self.contenders(n_candidates)
        if contenders is None:
            return honest
        preferred = contenders[0]
        return (frozenset((preferred, )), ) + tuple(_without(honest, preferred))

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        honest = self._honest.cast_score_ballot(n_candidates, request)
        contenders = self.contenders(n_candidates)
        if contenders is None:
            return honest
        bound = self.candidate_utility(contenders[0])
        return tuple(
            request.scale if self.candidate_utility(cand) >= bound else score
            for cand, score in enumerate(honest)
        )

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        contenders = self.contenders(n_candidates)
        if contenders is None:
            return self._honest.cast_approval_ballot(n_candidates, request)
        return votesim.util.utilities_at_or_above(
            self.utilities[:n_candidates],
            self.candidate_utility(contenders[0]),
        )


@simple_serialization
class BuryingVoter(StrategicVoter):
    '''A voter who buries the frontrunner they dislike.

    The voter moves the less liked frontrunner to the bottom of their
    ranking, gives it the minimum score and withholds their approval from
    it. Otherwise the ballots are honest. If the voter likes both
    frontrunners equally, there is nobody to bury and they vote honestly.
    '''
    def _buried(self, n_candidates: int) -> Optional[CandidateID]:
        contenders = self.contenders(n_candidates)
        if contenders is None:
            return None
        if self.honest_preference(*contenders) == 0:
            return None
        return contenders[1]

    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> RankedBallot:
        honest = self._honest.cast_ranked_ballot(n_candidates, request)
        buried = self._buried(n_candidates)
        if buried is None:
            return honest
        return _move_to_bottom(honest, buried)

    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> EqualRankedBallot:
        honest = self._honest.cast_equal_ranked_ballot(n_candidates, request)
        buried = self._buried(n_candidates)
        if buried is None:
            return honest
        return tuple(_without(honest, buried)) + (frozenset((buried, )), )

    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> ScoreBallot:
        honest = self._honest.cast_score_ballot(n_candidates, request)
        buried = self._buried(n_candidates)
        if buried is None:
            return honest
        return tuple(
            0 if cand == buried else score
            for cand, score in enumerate(honest)
        )

    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> ApprovalBallot:
        honest = self._honest.cast_approval_ballot(n_candidates, request)
        buried = self._buried(n_candidates)
        if buried is None:
            return honest
        # the buried candidate is never the favourite, so some remain
        return honest.difference((buried, ))

'''The voter capability contract.

A voter casts ballots of the shape an election method asks for. Casting is
a mutating operation: a voter may cache ballots derived from its utilities,
or consult beliefs it has formed from previously observed results. Methods
must therefore never assume voters to be stateless; they call
:meth:`Voter.cast_ballot` exactly once per voter per evaluation.
'''

import abc
from typing import NamedTuple, Optional, Sequence, Tuple

import votesim.ballot
from votesim.ballot import Ballot
from votesim.candidate import CandidateID


class BallotRequest(NamedTuple):
    '''What an election method asks the voters to cast.

    :param kind: Ballot shape, one of :data:`votesim.ballot.BALLOT_KINDS`.
    :param method: Identifier of the requesting method, if known. Strategic
        voters may use it to tailor their ballot.
    :param scale: Maximum score for score ballots; ignored otherwise.
    '''
    kind: str
    method: Optional[str] = None
    scale: Optional[int] = None


class UnsupportedBallotError(Exception):
    '''The voter cannot cast the requested ballot shape.

    Raised e.g. by voters built from real ranked ballots when asked for
    a score ballot.
    '''
    def __init__(self, voter: 'Voter', request: BallotRequest):
        self.voter = voter
        self.request = request
        message = f'{type(voter).__name__} cannot cast {request.kind} ballots'
        if request.scale is not None:
            message += f' with scale {request.scale}'
        super().__init__(message)


class NoUtilityError(Exception):
    '''The voter carries no utility information.'''
    def __init__(self, voter: 'Voter'):
        self.voter = voter
        super().__init__(
            f'{type(voter).__name__} does not contain utility information'
        )


class Voter(metaclass=abc.ABCMeta):
    '''A voter taking part in a simulated election.

    Subclasses implement one casting operation per ballot shape;
    :meth:`cast_ballot` selects the right one for the request.
    '''
    def cast_ballot(self,
                    n_candidates: int,
                    request: BallotRequest,
                    ) -> Ballot:
        '''Cast a ballot of the requested shape.

        :param n_candidates: Number of candidates in the election.
        :param request: The ballot shape (and scale) requested by the method.
        :raises UnsupportedBallotError: If the voter cannot cast that shape.
        :raises ValueError: If the ballot kind is unknown.
        '''
        if request.kind == votesim.ballot.RANKED:
            return self.cast_ranked_ballot(n_candidates, request)
        elif request.kind == votesim.ballot.EQUAL_RANKED:
            return self.cast_equal_ranked_ballot(n_candidates, request)
        elif request.kind == votesim.ballot.SCORE:
            if request.scale is None or request.scale < 1:
                raise ValueError(f'invalid score scale: {request.scale!r}')
            return self.cast_score_ballot(n_candidates, request)
        elif request.kind == votesim.ballot.APPROVAL:
            return self.cast_approval_ballot(n_candidates, request)
        else:
            raise ValueError(f'unknown ballot kind: {request.kind!r}')

    @abc.abstractmethod
    def cast_ranked_ballot(self,
                           n_candidates: int,
                           request: BallotRequest,
                           ) -> votesim.ballot.RankedBallot:
        '''Cast a strict, possibly truncated ranking, best first.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_equal_ranked_ballot(self,
                                 n_candidates: int,
                                 request: BallotRequest,
                                 ) -> votesim.ballot.EqualRankedBallot:
        '''Cast a ranking of groups of equally ranked candidates.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_score_ballot(self,
                          n_candidates: int,
                          request: BallotRequest,
                          ) -> votesim.ballot.ScoreBallot:
        '''Cast ratings in ``[0, request.scale]`` indexed by candidate.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_approval_ballot(self,
                             n_candidates: int,
                             request: BallotRequest,
                             ) -> votesim.ballot.ApprovalBallot:
        '''Cast the set of approved candidates.'''
        raise NotImplementedError

    @abc.abstractmethod
    def covers(self, n_candidates: int) -> bool:
        '''Whether the voter's data is valid for this many candidates.'''
        raise NotImplementedError

    @property
    def utilities(self) -> Tuple[float, ...]:
        '''The voter's true utilities for the candidates, by identifier.'''
        raise NoUtilityError(self)

    def candidate_utility(self, candidate: CandidateID) -> float:
        return self.utilities[candidate]

    def honest_preference(self,
                          first: CandidateID,
                          second: CandidateID,
                          ) -> int:
        '''Compare two candidates by the voter's true utility.

        :returns: A positive number if the voter likes the first candidate
            more, negative if less, zero if they are indifferent.
        '''
        first_u = self.candidate_utility(first)
        second_u = self.candidate_utility(second)
        return (first_u > second_u) - (first_u < second_u)

    def observe_result(self,
                       method: str,
                       ranking: Sequence[CandidateID],
                       ) -> None:
        '''Take note of a published method result. Ignored by default.'''
        pass

    def reset(self) -> None:
        '''Return the voter to its freshly constructed state.'''
        pass

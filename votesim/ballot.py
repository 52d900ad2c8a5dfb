'''Ballot shapes, ballot completion and ballot validators.

A voter expresses their preference on a ballot. The following ballot shapes
are recognized by votesim:

-   **Ranked** ballots - a voter ranks a number of candidates, best first.
    Represented by a tuple of candidate identifiers.
-   **Equal-ranked** ballots - a voter ranks groups of candidates, allowing
    several candidates to share a rank. Represented by a tuple of frozen
    sets of candidate identifiers, best group first.
-   **Score** ballots - a voter rates candidates on a scale from zero to a
    given maximum. Represented by a tuple indexed by candidate identifier,
    holding integer ratings or None for unrated candidates.
-   **Approval** ballots - a voter approves of a number of candidates.
    Represented by a frozen set of candidate identifiers.

Ranked ballots need not cover all candidates (they may be *truncated*), and
score ballots need not rate all of them. The completion functions in this
module define how the election methods interpret such ballots: unranked
candidates share the last rank, unrated candidates get the scale minimum.

Ballot validators check individual ballots. If a ballot is invalid, they
raise a subclass of :class:`BallotError` (or
:class:`votesim.candidate.CandidateError` if a referenced candidate is
invalid).
'''

import abc
import collections.abc
from typing import Any, Tuple, FrozenSet, Union, Optional

from votesim.candidate import CandidateID, check_candidate
from votesim.persist import simple_serialization


RANKED = 'ranked'
EQUAL_RANKED = 'equal_ranked'
SCORE = 'score'
APPROVAL = 'approval'

BALLOT_KINDS = (RANKED, EQUAL_RANKED, SCORE, APPROVAL)

RankedBallot = Tuple[CandidateID, ...]
EqualRankedBallot = Tuple[FrozenSet[CandidateID], ...]
ScoreBallot = Tuple[Optional[int], ...]
ApprovalBallot = FrozenSet[CandidateID]
Ballot = Union[RankedBallot, EqualRankedBallot, ScoreBallot, ApprovalBallot]

SCORE_MINIMUM = 0


class BallotError(Exception):
    '''A ballot is invalid in the given election.'''
    pass


class BallotTypeError(BallotError):
    '''A ballot is of an invalid type.

    :param ballot: The offending ballot.
    :param expected: Ballot type that was expected.
    '''
    def __init__(self, ballot: Any, expected: type = None):
        self.ballot = ballot
        self.expected = expected
        message = f'invalid ballot type: {type(ballot)}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class BallotValueError(BallotError):
    '''A value given on the ballot is invalid.

    :param value: The offending value.
    :param candidate: A candidate the value was given for, if known.
    :param allowed: A description of the allowed values.
    '''
    def __init__(self,
                 value: Any,
                 candidate: Optional[CandidateID] = None,
                 allowed: Any = None,
                 ):
        self.value = value
        self.candidate = candidate
        self.allowed = allowed
        message = f'invalid ballot value: {value!r}'
        if candidate is not None:
            message += f' for candidate {candidate}'
        if allowed is not None:
            message += f', allowed: {allowed}'
        super().__init__(message)


def ranked_candidates(ballot: Union[RankedBallot, EqualRankedBallot]
                      ) -> FrozenSet[CandidateID]:
    '''Return all candidates that appear on a (equal-)ranked ballot.'''
    cands = set()
    for item in ballot:
        if isinstance(item, collections.abc.Set):
            cands.update(item)
        else:
            cands.add(item)
    return frozenset(cands)


def complete_ranking(ballot: Union[RankedBallot, EqualRankedBallot],
                     n_candidates: int,
                     ) -> EqualRankedBallot:
    '''Complete a possibly truncated ranked ballot for ranking-based methods.

    Converts the ballot to the equal-ranked shape and appends all candidates
    not appearing on it as a single group tied for the last rank. A ballot
    that ranks no candidate at all is an abstention and stays empty.

    :param ballot: A ranked or equal-ranked ballot.
    :param n_candidates: Number of candidates in the election.
    '''
    groups = tuple(
        frozenset(item) if isinstance(item, collections.abc.Set)
        else frozenset((item, ))
        for item in ballot
    )
    groups = tuple(group for group in groups if group)
    if not groups:
        return ()
    ranked = ranked_candidates(groups)
    unranked = frozenset(range(n_candidates)).difference(ranked)
    if unranked:
        groups += (unranked, )
    return groups


def complete_scores(ballot: ScoreBallot,
                    n_candidates: int,
                    minimum: int = SCORE_MINIMUM,
                    ) -> Tuple[int, ...]:
    '''Complete a partially rated score ballot for rating-based methods.

    Unrated candidates (None entries and candidates beyond the end of the
    ballot) receive the minimum score of the scale.

    :param ballot: A score ballot.
    :param n_candidates: Number of candidates in the election.
    :param minimum: Minimum score of the scale.
    '''
    scores = [minimum if score is None else score for score in ballot]
    if len(scores) < n_candidates:
        scores.extend([minimum] * (n_candidates - len(scores)))
    return tuple(scores[:n_candidates])


def ranking_to_groups(ranking: RankedBallot) -> EqualRankedBallot:
    '''Convert a strict ranking to the equal-ranked shape.'''
    return tuple(frozenset((cand, )) for cand in ranking)


class BallotValidator(metaclass=abc.ABCMeta):
    '''Validate that a single ballot is valid in the given election.

    Base class, not intended for direct use.
    '''
    @abc.abstractmethod
    def validate(self, ballot: Any, n_candidates: int) -> None:
        raise NotImplementedError


@simple_serialization
class RankedBallotValidator(BallotValidator):
    '''Validate a ranked or equal-ranked ballot.

    The ballot must be a tuple of candidate identifiers (or frozen sets
    thereof, if equal rankings are allowed), each appearing at most once.

    :param allow_equal: Whether candidates may share a rank.
    '''
    def __init__(self, allow_equal: bool = False):
        self.allow_equal = allow_equal

    def validate(self, ballot: Any, n_candidates: int) -> None:
        '''Check if the ranked ballot is valid.

        :raises BallotTypeError: If the ballot is not a tuple or contains
            a group where equal rankings are not allowed.
        :raises BallotValueError: If a candidate is ranked more than once.
        :raises CandidateError: If a candidate is out of range.
        '''
        if not isinstance(ballot, tuple):
            raise BallotTypeError(ballot, tuple)
        n_ranked = 0
        for item in ballot:
            if isinstance(item, collections.abc.Set):
                if not self.allow_equal:
                    raise BallotTypeError(item, int)
                for cand in item:
                    check_candidate(cand, n_candidates)
                n_ranked += len(item)
            else:
                check_candidate(item, n_candidates)
                n_ranked += 1
        if len(ranked_candidates(ballot)) < n_ranked:
            raise BallotValueError(ballot, allowed='no duplicate candidates')


@simple_serialization
class ScoreBallotValidator(BallotValidator):
    '''Validate a score ballot on a fixed scale.

    :param scale: Maximum score; valid scores are integers in ``[0, scale]``
        or None for unrated candidates.
    '''
    def __init__(self, scale: int):
        self.scale = scale

    def validate(self, ballot: Any, n_candidates: int) -> None:
        '''Check if the score ballot is valid.

        :raises BallotTypeError: If the ballot is not a tuple.
        :raises BallotValueError: If the ballot is longer than the number of
            candidates or a score is out of the scale.
        '''
        if not isinstance(ballot, tuple):
            raise BallotTypeError(ballot, tuple)
        if len(ballot) > n_candidates:
            raise BallotValueError(
                len(ballot), allowed=f'at most {n_candidates} ratings'
            )
        for cand, score in enumerate(ballot):
            if score is None:
                continue
            if (
                isinstance(score, bool)
                or not isinstance(score, int)
                or not SCORE_MINIMUM <= score <= self.scale
            ):
                raise BallotValueError(
                    score, cand, f'[{SCORE_MINIMUM}, {self.scale}]'
                )


@simple_serialization
class ApprovalBallotValidator(BallotValidator):
    '''Validate an approval ballot (a frozen set of candidates).'''
    def validate(self, ballot: Any, n_candidates: int) -> None:
        '''Check if the approval ballot is valid.

        :raises BallotTypeError: If the ballot is not a frozen set.
        :raises CandidateError: If a candidate is out of range.
        '''
        if not isinstance(ballot, frozenset):
            raise BallotTypeError(ballot, frozenset)
        for cand in ballot:
            check_candidate(cand, n_candidates)

import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.ballot
from votesim.ballot import BallotValueError
from votesim.candidate import CandidateError
from votesim.voters import (
    BallotRequest, NoUtilityError, RealCardinalVoter, RealOrdinalVoter,
    UnsupportedBallotError
)


RANKED = BallotRequest(votesim.ballot.RANKED)
EQUAL_RANKED = BallotRequest(votesim.ballot.EQUAL_RANKED)
APPROVAL = BallotRequest(votesim.ballot.APPROVAL)


def score(scale):
    return BallotRequest(votesim.ballot.SCORE, scale=scale)


def test_ordinal_ballots():
    voter = RealOrdinalVoter([2, 0])
    assert voter.cast_ballot(4, RANKED) == (2, 0)
    assert voter.cast_ballot(4, EQUAL_RANKED) == (
        frozenset([2]), frozenset([0])
    )


@pytest.mark.parametrize('request_', [APPROVAL, score(5)])
def test_ordinal_unsupported(request_):
    voter = RealOrdinalVoter([1, 0])
    with pytest.raises(UnsupportedBallotError) as excinfo:
        voter.cast_ballot(2, request_)
    assert excinfo.value.request == request_


def test_ordinal_no_utilities():
    voter = RealOrdinalVoter([1, 0])
    with pytest.raises(NoUtilityError):
        voter.utilities
    with pytest.raises(NoUtilityError):
        voter.honest_preference(0, 1)


def test_ordinal_covers():
    voter = RealOrdinalVoter([3])
    assert voter.covers(4)
    assert not voter.covers(3)
    assert RealOrdinalVoter([]).covers(1)


@pytest.mark.parametrize('ballot, error', [
    ([1, 1], BallotValueError),
    ([0, -2], CandidateError),
])
def test_ordinal_invalid(ballot, error):
    with pytest.raises(error):
        RealOrdinalVoter(ballot)


def test_cardinal_ballots():
    voter = RealCardinalVoter(5, [3, None, 5, 3])
    assert voter.cast_ballot(4, RANKED) == (2, 0, 3)
    assert voter.cast_ballot(4, EQUAL_RANKED) == (
        frozenset([2]), frozenset([0, 3])
    )
    assert voter.cast_ballot(4, score(5)) == (3, None, 5, 3)


def test_cardinal_tie_breaker():
    voter = RealCardinalVoter(5, [3, None, 5, 3], tie_breaker='descending')
    assert voter.cast_ballot(4, RANKED) == (2, 3, 0)


def test_cardinal_other_scale():
    voter = RealCardinalVoter(5, [3, 1])
    with pytest.raises(UnsupportedBallotError):
        voter.cast_ballot(2, score(10))
    with pytest.raises(UnsupportedBallotError):
        voter.cast_ballot(2, APPROVAL)


def test_cardinal_approval():
    voter = RealCardinalVoter(1, [1, 0, None, 1])
    assert voter.cast_ballot(4, APPROVAL) == frozenset([0, 3])


def test_cardinal_covers():
    voter = RealCardinalVoter(5, [3, 1, None, None])
    assert voter.covers(2)
    assert voter.covers(5)
    assert not voter.covers(1)


def test_cardinal_invalid():
    with pytest.raises(BallotValueError):
        RealCardinalVoter(5, [6, 1])
    with pytest.raises(ValueError):
        RealCardinalVoter(0, [0])

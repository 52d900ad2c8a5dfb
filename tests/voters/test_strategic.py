import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.ballot
from votesim.profile import ElectionProfile
from votesim.voters import (
    BallotRequest, BulletVoter, BuryingVoter, CompromisingVoter
)


RANKED = BallotRequest(votesim.ballot.RANKED)
EQUAL_RANKED = BallotRequest(votesim.ballot.EQUAL_RANKED)
APPROVAL = BallotRequest(votesim.ballot.APPROVAL)
SCORE = BallotRequest(votesim.ballot.SCORE, scale=10)

UTILITIES = [1., .5, 0., .75]


def test_bullet():
    voter = BulletVoter([.2, .9, .4])
    assert voter.cast_ballot(3, RANKED) == (1, )
    assert voter.cast_ballot(3, EQUAL_RANKED) == (frozenset([1]), )
    assert voter.cast_ballot(3, SCORE) == (0, 10, 0)
    assert voter.cast_ballot(3, APPROVAL) == frozenset([1])


def test_bullet_fewer_candidates():
    voter = BulletVoter([.2, .1, .9])
    assert voter.cast_ballot(2, RANKED) == (0, )
    assert voter.cast_ballot(2, SCORE) == (10, 0)


@pytest.mark.parametrize('request_, expected', [
    (RANKED, (1, 0, 3, 2)),
    (EQUAL_RANKED, tuple(frozenset([c]) for c in (1, 0, 3, 2))),
    (SCORE, (10, 10, 0, 10)),
    (APPROVAL, frozenset([0, 1, 3])),
])
def test_compromising(request_, expected):
    voter = CompromisingVoter(UTILITIES, (1, 2))
    assert voter.cast_ballot(4, request_) == expected


@pytest.mark.parametrize('request_, expected', [
    (RANKED, (0, 1, 2, 3)),
    (EQUAL_RANKED, tuple(frozenset([c]) for c in (0, 1, 2, 3))),
    (SCORE, (10, 5, 0, 0)),
    (APPROVAL, frozenset([0])),
])
def test_burying(request_, expected):
    voter = BuryingVoter(UTILITIES, (3, 0))
    assert voter.cast_ballot(4, request_) == expected


def test_burying_indifferent():
    voter = BuryingVoter([.5, .5, 1.], (0, 1))
    assert voter.cast_ballot(3, RANKED) == (2, 0, 1)


def test_no_frontrunners_honest():
    voter = CompromisingVoter(UTILITIES)
    assert voter.cast_ballot(4, RANKED) == (0, 3, 1, 2)
    assert voter.cast_ballot(4, SCORE) == (10, 5, 0, 8)


def test_frontrunner_out_of_range():
    voter = CompromisingVoter(UTILITIES, (1, 3))
    assert voter.cast_ballot(3, RANKED) == (0, 1, 2)


def test_adaptive():
    voter = CompromisingVoter(UTILITIES, (1, 2), adaptive=True)
    voter.observe_result('plurality', [3, 2, 0, 1])
    assert voter.beliefs == (3, 2)
    assert voter.cast_ballot(4, RANKED) == (3, 0, 1, 2)
    voter.reset()
    assert voter.beliefs == (1, 2)
    assert voter.cast_ballot(4, RANKED) == (1, 0, 3, 2)


def test_not_adaptive():
    voter = BuryingVoter(UTILITIES, (1, 2))
    voter.observe_result('plurality', [3, 2, 0, 1])
    assert voter.beliefs == (1, 2)


@pytest.mark.parametrize('frontrunners', [
    (1, 1), (1, 2, 3), (0, ), (0, -1), (-2, -1), (1.5, 2), (True, 2),
])
def test_invalid_frontrunners(frontrunners):
    with pytest.raises(ValueError):
        CompromisingVoter(UTILITIES, frontrunners)


@pytest.mark.parametrize('voter_class', [CompromisingVoter, BuryingVoter])
def test_negative_frontrunner_never_cast(voter_class):
    voter = voter_class(UTILITIES, (0, 3))
    voter.beliefs = (0, -1)
    assert voter.contenders(4) is None
    assert voter.cast_ballot(4, RANKED) == (0, 3, 1, 2)


def test_negative_frontrunner_rejected_before_profile():
    with pytest.raises(ValueError):
        ElectionProfile([BuryingVoter([.9, .5, .1], (0, -1))], 3)

import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.ballot
import votesim.evaluate.core as core
import votesim.evaluate.simple
from votesim.candidate import CandidateError
from votesim.voters import BallotRequest, HonestVoter


class BrokenVoter(HonestVoter):
    def cast_ranked_ballot(self, n_candidates, request):
        return (n_candidates, )


class CountingVoter(HonestVoter):
    def __init__(self, utilities):
        super().__init__(utilities)
        self.n_cast = 0

    def cast_ballot(self, n_candidates, request):
        self.n_cast += 1
        return super().cast_ballot(n_candidates, request)


def test_completed_rankings():
    ballots = [(2, ), (), (frozenset([0, 1]), ), (1, 0, 2)]
    assert core.completed_rankings(ballots, 3) == [
        (frozenset([2]), frozenset([0, 1])),
        (frozenset([0, 1]), frozenset([2])),
        (frozenset([1]), frozenset([0]), frozenset([2])),
    ]


def test_first_preferences():
    rankings = core.completed_rankings([(2, 0), (0, 2), (1, )], 3)
    assert core.first_preferences(rankings, range(3)) == {0: 1, 1: 1, 2: 1}
    assert core.first_preferences(rankings, [0, 2]) == {
        0: Fraction(3, 2), 2: Fraction(3, 2)
    }


def test_last_preferences():
    rankings = core.completed_rankings([(2, 0), (0, 1, 2)], 3)
    assert core.last_preferences(rankings, range(3)) == {0: 0, 1: 1, 2: 1}


def test_pairwise_counts():
    rankings = core.completed_rankings([(0, ), (1, 0, 2)], 3)
    assert core.pairwise_counts(rankings, 3) == {
        (0, 1): 1, (1, 0): 1,
        (0, 2): 2, (2, 0): 0,
        (1, 2): 1, (2, 1): 0,
    }


def test_cast_once():
    voters = [CountingVoter([.2, .5, .9]) for i in range(5)]
    votesim.evaluate.simple.Plurality().evaluate(voters, 3)
    assert [voter.n_cast for voter in voters] == [1] * 5


def test_ballot_request():
    evaluator = votesim.evaluate.simple.Approval()
    assert evaluator.ballot_request('approval') == BallotRequest(
        votesim.ballot.APPROVAL, 'approval', None
    )


@pytest.mark.parametrize('scale', [0, -5])
def test_invalid_scale(scale):
    with pytest.raises(ValueError):
        core.ScaledEvaluator(scale)


def test_score_totals():
    assert core.score_totals([(1, 2, 0), (3, 0, 0)], 3) == [4, 2, 0]


def test_invalid_ballot_rejected():
    voters = [HonestVoter([.2, .5, .9]), BrokenVoter([.2, .5, .9])]
    with pytest.raises(CandidateError):
        votesim.evaluate.simple.Plurality().evaluate(voters, 3)


@pytest.mark.parametrize('request_, valid, invalid', [
    (BallotRequest(votesim.ballot.RANKED), (2, 0), (frozenset([2]), )),
    (
        BallotRequest(votesim.ballot.EQUAL_RANKED),
        (frozenset([2, 0]), 1),
        (2, 2),
    ),
    (BallotRequest(votesim.ballot.SCORE, scale=5), (5, None), (6, 0)),
    (BallotRequest(votesim.ballot.APPROVAL), frozenset([1]), (1, )),
])
def test_ballot_validator(request_, valid, invalid):
    validator = core.ballot_validator(request_)
    validator.validate(valid, 3)
    with pytest.raises(votesim.ballot.BallotError):
        validator.validate(invalid, 3)

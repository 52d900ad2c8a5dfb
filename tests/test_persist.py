import sys
import os
import json
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.ballot
import votesim.persist
import votesim.system
import votesim.tiebreak
from votesim.profile import ElectionProfile
from votesim.voters import (
    BallotRequest, BulletVoter, BuryingVoter, CompromisingVoter, HonestVoter,
    RealCardinalVoter, RealOrdinalVoter
)

VOTERS = [
    HonestVoter([.2, .7, .1]),
    HonestVoter([.2, .7, .1], scales=False, approval_threshold=.5),
    RealOrdinalVoter([2, 0]),
    RealCardinalVoter(5, [3, None, 5], tie_breaker='descending'),
    BulletVoter([.9, .1, .4]),
    CompromisingVoter([.9, .1, .4], (1, 2), adaptive=True),
    BuryingVoter([.9, .1, .4], (0, 2)),
]

REQUESTS = [
    BallotRequest(votesim.ballot.RANKED),
    BallotRequest(votesim.ballot.EQUAL_RANKED),
]


def roundtrip(obj):
    dict_form = votesim.persist.to_dict(obj)
    serial = json.dumps(dict_form)
    rebuilt = votesim.persist.from_dict(json.loads(serial))
    assert rebuilt.to_dict() == dict_form
    assert json.dumps(rebuilt.to_dict()) == serial
    return rebuilt


@pytest.mark.parametrize('method', list(votesim.system.METHODS.values()))
def test_method_roundtrip(method):
    rebuilt = roundtrip(method)
    assert type(rebuilt.evaluator) is type(method.evaluator)


@pytest.mark.parametrize('voter', VOTERS)
def test_voter_roundtrip(voter):
    rebuilt = roundtrip(voter)
    assert type(rebuilt) is type(voter)
    for request in REQUESTS:
        assert rebuilt.cast_ballot(3, request) == voter.cast_ballot(3, request)


def comparable(results):
    return {
        identifier: (
            type(result.error)
            if isinstance(result, votesim.system.MethodFailure) else result
        )
        for identifier, result in results.items()
    }


def test_profile_roundtrip():
    profile = ElectionProfile(VOTERS, 3)
    rebuilt = roundtrip(profile)
    assert rebuilt.n_candidates == 3
    assert len(rebuilt) == len(VOTERS)
    assert comparable(votesim.system.evaluate_all(rebuilt)) \
        == comparable(votesim.system.evaluate_all(profile))


def test_random_order_roundtrip():
    tie_breaker = votesim.tiebreak.RandomOrder(6, 42)
    assert roundtrip(tie_breaker).order == tie_breaker.order


@pytest.mark.parametrize('value', [
    'plurality', {'type': 'tuple'}, {'class': '.relative'}
])
def test_invalid_from_dict(value):
    with pytest.raises(ValueError):
        votesim.persist.from_dict(value)


def test_fraction_and_callable_params():
    voter = HonestVoter(
        [Fraction(1, 3), Fraction(2, 3), Fraction(1, 2)],
        approval_threshold=max,
    )
    dict_form = votesim.persist.to_dict(voter)
    assert dict_form['approval_threshold'] == {'callable': 'builtins.max'}
    assert dict_form['utilities'][0] == {'fraction': [1, 3]}
    rebuilt = roundtrip(voter)
    assert rebuilt.utilities == voter.utilities
    assert rebuilt.cast_ballot(3, BallotRequest(votesim.ballot.APPROVAL)) \
        == frozenset([1])


def test_lambda_not_serializable():
    voter = HonestVoter([.2, .7, .1], approval_threshold=lambda u: .5)
    with pytest.raises(ValueError):
        votesim.persist.to_dict(voter)
import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.generate
from votesim.voters import (
    BulletVoter, BuryingVoter, CompromisingVoter, HonestVoter
)


class FixedSampler(votesim.generate.Sampler):
    def __init__(self, points):
        self.points = points

    def sample(self, n, n_dims, rng):
        return iter(self.points[:n])


@pytest.mark.parametrize('sampler', ['uniform', 'beta', 'triangular'])
def test_score_space(sampler):
    gen = votesim.generate.ScoreSpaceGenerator(sampler, random_state=1711)
    utilities = gen.generate(50, 4)
    assert len(utilities) == 50
    for voter_utils in utilities:
        assert len(voter_utils) == 4
        assert all(0 <= u <= 1 for u in voter_utils)
    assert utilities == votesim.generate.ScoreSpaceGenerator(
        sampler, random_state=1711
    ).generate(50, 4)


def test_score_space_clamps():
    gen = votesim.generate.ScoreSpaceGenerator('gauss', random_state=3)
    utilities = gen.generate(30, 3)
    assert all(0 <= u <= 1 for voter_utils in utilities for u in voter_utils)


@pytest.mark.parametrize('distribution', [
    'zipf', 'shuffle', 'seed', 'choice', 'randint', 'getstate',
])
def test_unknown_distribution(distribution):
    with pytest.raises(ValueError):
        votesim.generate.DistributionSampler(distribution)


@pytest.mark.parametrize('distribution', ['random', 'beta', 'normal'])
def test_float_distribution(distribution):
    sampler = votesim.generate.DistributionSampler(distribution)
    points = list(sampler.sample(3, 2, random.Random(0)))
    assert len(points) == 3
    assert all(isinstance(x, float) for point in points for x in point)


def test_distribution_params():
    sampler = votesim.generate.DistributionSampler('uniform', a=2, b=3)
    gen = votesim.generate.ScoreSpaceGenerator(sampler, random_state=0)
    # all samples above the unit interval get clamped to 1
    assert gen.generate(5, 2) == [(1., 1.)] * 5


@pytest.mark.parametrize('seed', [0, 1, 2])
def test_issue_space(seed):
    gen = votesim.generate.IssueSpaceGenerator(n_dims=3, random_state=seed)
    utilities = gen.generate(40, 5)
    assert len(utilities) == 40
    for voter_utils in utilities:
        assert len(voter_utils) == 5
        assert max(voter_utils) == 1
        assert min(voter_utils) == 0
    assert utilities == votesim.generate.IssueSpaceGenerator(
        n_dims=3, random_state=seed
    ).generate(40, 5)


def test_issue_space_fixed_positions():
    gen = votesim.generate.IssueSpaceGenerator(
        FixedSampler([(0., 0.), (.5, 0.)]),
        candidates=[(0., 0.), (1., 0.), (.5, 0.), (7., 7.)],
        p=1,
    )
    assert gen.generate(2, 3) == [(1., 0., .5), (0., 0., 1.)]


def test_issue_space_too_few_positions():
    gen = votesim.generate.IssueSpaceGenerator(candidates=[(0., 0.)])
    with pytest.raises(ValueError):
        gen.generate(10, 2)


def test_minmax_equal():
    assert votesim.generate.IssueSpaceGenerator.minmax([2., 2.]) == (1., 1.)


UTILITIES = [(1., 0., .5)] * 3 + [(0., 1., .5)] * 2 + [(0., .5, 1.)] * 5


def test_honest_profile():
    profile = votesim.generate.honest_profile(UTILITIES)
    assert profile.n_candidates == 3
    assert len(profile) == len(UTILITIES)
    assert all(type(voter) is HonestVoter for voter in profile)
    with pytest.raises(ValueError):
        votesim.generate.honest_profile([])


def test_poll_frontrunners():
    assert votesim.generate.poll_frontrunners(UTILITIES) == (2, 0)


@pytest.mark.parametrize('share, n_strategic', [(0, 0), (.3, 3), (1, 10)])
def test_mixed_profile_share(share, n_strategic):
    profile = votesim.generate.mixed_profile(
        UTILITIES, strategic_share=share, random_state=5
    )
    strategic = [
        voter for voter in profile if type(voter) is not HonestVoter
    ]
    assert len(strategic) == n_strategic
    for voter in strategic:
        assert type(voter) in (CompromisingVoter, BuryingVoter)
        assert voter.frontrunners == (2, 0)


def test_mixed_profile_options():
    profile = votesim.generate.mixed_profile(
        UTILITIES,
        strategic_share=1,
        strategies=('bullet', ),
    )
    assert all(type(voter) is BulletVoter for voter in profile)
    profile = votesim.generate.mixed_profile(
        UTILITIES,
        strategic_share=1,
        strategies=('compromising', ),
        frontrunners=(0, 1),
        adaptive=True,
    )
    assert all(voter.frontrunners == (0, 1) for voter in profile)
    assert all(voter.adaptive for voter in profile)


def test_mixed_profile_reproducible():
    def variants(seed):
        return [
            type(voter) for voter in votesim.generate.mixed_profile(
                UTILITIES, strategic_share=.5, random_state=seed
            )
        ]

    assert variants(11) == variants(11)


@pytest.mark.parametrize('share', [-.1, 1.5])
def test_mixed_profile_invalid_share(share):
    with pytest.raises(ValueError):
        votesim.generate.mixed_profile(UTILITIES, strategic_share=share)

"""Generate voter utilities and election profiles for simulations.

Utilities can either be sampled directly in the score space (every utility
is an independent draw from a distribution on the unit interval) or derived
from proximity in an issue space (voters and candidates are points and the
voters like the candidates close to them). The profile builders then wrap
the utilities into voters.

All generators take a ``random_state`` seed, so that every trial of
a simulation can be reproduced exactly; they use their own random generator
and never touch the global state of the :mod:`random` module.
"""

import abc
import math
import random
from numbers import Number
from typing import (
    Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union
)

import votesim.evaluate.simple
import votesim.util
import votesim.voters
from votesim.profile import ElectionProfile

Utilities = Tuple[float, ...]


class Sampler(metaclass=abc.ABCMeta):
    """A generic sampler interface."""
    @abc.abstractmethod
    def sample(self,
               n: int,
               n_dims: int,
               rng: random.Random,
               ) -> Iterable[Tuple[float, ...]]:
        raise NotImplementedError


class DistributionSampler(Sampler):
    """Sample points from a statistical distribution.

    The distributions are taken from Python's :class:`random.Random` by
    referencing the names of the generating methods. Any keyword arguments
    are passed to the generating method; if none are given, defaults are
    used for some distributions (uniform, gauss, triangular, beta). The
    names ``'beta'`` and ``'normal'`` are accepted as aliases.

    :param distribution: The name of the distribution to use. Must refer to
        a method of :class:`random.Random` that produces random floats,
        listed in :attr:`DISTRIBUTIONS`.
    """
    DEFAULT_PARAMS: Dict[str, Dict[str, Number]] = {
        'gauss': {'mu': 0, 'sigma': 1},
        'uniform': {'a': 0, 'b': 1},
        'triangular': {'low': 0, 'high': 1, 'mode': .5},
        'betavariate': {'alpha': 2, 'beta': 2},
    }
    ALIASES: Dict[str, str] = {'beta': 'betavariate', 'normal': 'gauss'}
    DISTRIBUTIONS: FrozenSet[str] = frozenset([
        'random', 'uniform', 'triangular', 'betavariate',
        'expovariate', 'gammavariate', 'gauss', 'lognormvariate',
        'normalvariate', 'vonmisesvariate', 'paretovariate',
        'weibullvariate',
    ])

    def __init__(self, distribution: str = 'uniform', **kwargs):
        distribution = self.ALIASES.get(distribution, distribution)
        if distribution not in self.DISTRIBUTIONS:
            raise ValueError(f'unknown distribution: {distribution}')
        self.distribution = distribution
        if not kwargs and distribution in self.DEFAULT_PARAMS:
            kwargs = self.DEFAULT_PARAMS[distribution].copy()
        self.params = kwargs

    def sample(self,
               n: int,
               n_dims: int,
               rng: random.Random,
               ) -> Iterable[Tuple[float, ...]]:
        """Sample n points of n_dims coordinates each."""
        distro_fx = getattr(rng, self.distribution)
        for i in range(n):
            yield tuple(distro_fx(**self.params) for dim in range(n_dims))


def _create_sampler(sampler: Union[str, Sampler]) -> Sampler:
    if isinstance(sampler, str):
        return DistributionSampler(sampler)
    return sampler


class ScoreSpaceGenerator:
    """Generate utilities by sampling them directly.

    Each voter's utility for each candidate is an independent draw from the
    sampler, clamped to the unit interval.

    :param sampler: A :class:`Sampler` or the name of a distribution for
        :class:`DistributionSampler`; ``'uniform'`` and ``'beta'`` produce
        values in the unit interval by default.
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 sampler: Union[str, Sampler] = 'uniform',
                 random_state: Optional[int] = None,
                 ):
        self.sampler = _create_sampler(sampler)
        self.random_state = random_state

    def generate(self, n_voters: int, n_candidates: int) -> List[Utilities]:
        """Generate the utilities of each voter for each candidate."""
        rng = random.Random(self.random_state)
        return [
            tuple(min(max(u, 0.), 1.) for u in sample)
            for sample in self.sampler.sample(n_voters, n_candidates, rng)
        ]


class IssueSpaceGenerator:
    """Generate utilities from proximity in a multidimensional issue space.

    Candidates and voters are sampled as points in the issue space and each
    voter's utilities are derived from their distances to the candidates:
    the closest candidate gets a utility of 1, the furthest gets 0 and the
    others fall linearly in between.

    :param sampler: How to sample the voter points: a :class:`Sampler` or
        the name of a distribution for :class:`DistributionSampler`.
    :param n_dims: Dimensionality of the issue space.
    :param candidates: Positions of the candidates in the issue space. If
        not given, they are sampled in the same way the voters are.
    :param p: Exponent of the L_p distance (2 for Euclidean, 1 for taxicab).
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 sampler: Union[str, Sampler] = 'gauss',
                 n_dims: int = 2,
                 candidates: Optional[Sequence[Sequence[float]]] = None,
                 p: int = 2,
                 random_state: Optional[int] = None,
                 ):
        self.sampler = _create_sampler(sampler)
        self.n_dims = n_dims
        self.candidates = candidates
        self.p = p
        self.random_state = random_state

    def generate(self, n_voters: int, n_candidates: int) -> List[Utilities]:
        """Generate the utilities of each voter for each candidate."""
        rng = random.Random(self.random_state)
        if self.candidates is None:
            cand_positions = list(
                self.sampler.sample(n_candidates, self.n_dims, rng)
            )
        elif len(self.candidates) < n_candidates:
            raise ValueError(
                f'{len(self.candidates)} candidate positions given,'
                f' {n_candidates} needed'
            )
        else:
            cand_positions = self.candidates[:n_candidates]
        return [
            self.minmax([
                votesim.util.lp_distance(voter_pos, cand_pos, self.p)
                for cand_pos in cand_positions
            ])
            for voter_pos in self.sampler.sample(n_voters, self.n_dims, rng)
        ]

    @staticmethod
    def minmax(distances: List[float]) -> Utilities:
        nearest = min(distances)
        furthest = max(distances)
        if math.isclose(nearest, furthest):
            return tuple(1. for dist in distances)
        return tuple(
            (furthest - dist) / (furthest - nearest) for dist in distances
        )


STRATEGIC_VARIANTS = {
    'bullet': votesim.voters.BulletVoter,
    'compromising': votesim.voters.CompromisingVoter,
    'burying': votesim.voters.BuryingVoter,
}


def honest_profile(utilities: Sequence[Sequence[float]],
                   scales: bool = True,
                   ) -> ElectionProfile:
    """Build a profile of honest voters with the given utilities."""
    if not utilities:
        raise ValueError('cannot build a profile with no voters')
    n_candidates = min(len(voter_utils) for voter_utils in utilities)
    return ElectionProfile(
        [votesim.voters.HonestVoter(u, scales=scales) for u in utilities],
        n_candidates,
    )


def poll_frontrunners(utilities: Sequence[Sequence[float]],
                      ) -> Tuple[int, int]:
    """Determine the frontrunners by an honest plurality poll.

    Returns the top two candidates of a plurality election among honest
    voters with the given utilities.
    """
    profile = honest_profile(utilities)
    ranking = votesim.evaluate.simple.Plurality().evaluate(
        profile.voters, profile.n_candidates
    )
    return ranking[0], ranking[1]


def mixed_profile(utilities: Sequence[Sequence[float]],
                  strategic_share: float = .5,
                  strategies: Sequence[str] = ('compromising', 'burying'),
                  frontrunners: Optional[Tuple[int, int]] = None,
                  adaptive: bool = False,
                  random_state: Optional[int] = None,
                  ) -> ElectionProfile:
    """Build a profile mixing honest and strategic voters.

    :param utilities: Utilities of the voters.
    :param strategic_share: Share of the voters to vote strategically; the
        strategic voters are drawn at random.
    :param strategies: Names of the strategies from
        :data:`STRATEGIC_VARIANTS` to assign to the strategic voters, at
        random.
    :param frontrunners: The believed frontrunners. By default, the top two
        of an honest plurality poll.
    :param adaptive: Whether the strategic voters update their beliefs from
        observed results.
    :param random_state: Seed for the random generator.
    """
    if not 0 <= strategic_share <= 1:
        raise ValueError(f'invalid strategic share: {strategic_share}')
    if not utilities:
        raise ValueError('cannot build a profile with no voters')
    variants = [STRATEGIC_VARIANTS[name] for name in strategies]
    rng = random.Random(random_state)
    n_candidates = min(len(voter_utils) for voter_utils in utilities)
    if frontrunners is None and n_candidates >= 2:
        frontrunners = poll_frontrunners(utilities)
    n_strategic = int(round(len(utilities) * strategic_share))
    strategic_is = set(rng.sample(range(len(utilities)), n_strategic))
    voters = []
    for i, voter_utils in enumerate(utilities):
        if i not in strategic_is:
            voters.append(votesim.voters.HonestVoter(voter_utils))
            continue
        variant = rng.choice(variants)
        if variant is votesim.voters.BulletVoter:
            voters.append(variant(voter_utils))
        else:
            voters.append(variant(voter_utils, frontrunners or (), adaptive))
    return ElectionProfile(voters, n_candidates)

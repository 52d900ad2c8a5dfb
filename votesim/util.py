'''Various utility functions for other modules of votesim.

There should normally be no need to use these functions directly.
'''

import math
from typing import List, Sequence, FrozenSet

from votesim.candidate import CandidateID


def scale_utilities_linearly(utilities: Sequence[float]) -> List[float]:
    '''Rescale utilities linearly so that the minimum is 0 and maximum is 1.

    If all utilities are equal, they are all set to their common value,
    clamped to the unit interval.
    '''
    top = max(utilities)
    bottom = min(utilities)
    if top == bottom:
        scaled = [top] * len(utilities)
    else:
        scaled = [(u - bottom) / (top - bottom) for u in utilities]
    return [min(max(u, 0.), 1.) for u in scaled]


def round_half_up(value: float) -> int:
    return int(math.floor(value + .5))


def utility_to_score(utility: float, scale: int) -> int:
    '''Convert a utility from the unit interval to a score in [0, scale].'''
    return min(max(round_half_up(scale * utility), 0), scale)


def utilities_at_or_above(utilities: Sequence[float],
                          bound: float,
                          ) -> FrozenSet[CandidateID]:
    '''Return candidates with utility at least the bound.

    Always contains at least the favourite candidate (the first one among
    those with the highest utility), even if its utility is below the bound.
    '''
    approved = frozenset(
        cand for cand, utility in enumerate(utilities) if utility >= bound
    )
    if not approved:
        approved = frozenset((favourite(utilities), ))
    return approved


def favourite(utilities: Sequence[float]) -> CandidateID:
    '''Return the candidate with the highest utility (lowest id on ties).'''
    return max(range(len(utilities)), key=lambda cand: (utilities[cand], -cand))


def preference_order(utilities: Sequence[float]) -> List[CandidateID]:
    '''Order candidates by descending utility, lower ids first on ties.'''
    return sorted(range(len(utilities)), key=lambda cand: -utilities[cand])


def lp_distance(location_1: Sequence[float],
                location_2: Sequence[float],
                p: int = 2,
                ) -> float:
    '''The L_p distance; p = 1 is taxicab distance, p = 2 is Euclidean.'''
    return sum(
        abs(x1 - x2) ** p for x1, x2 in zip(location_1, location_2)
    ) ** (1 / p)

'''Functions to score the strength of wins between pairs of candidates.

They transform the pairwise preference counts (how many voters prefer the
first candidate of a pair to the second) to win strengths, used by minimax
and similar Condorcet methods to weigh the pairwise defeats.
'''

from numbers import Number
from typing import Dict, Tuple

import votesim.component.core
from votesim.candidate import CandidateID


PairwiseCounts = Dict[Tuple[CandidateID, CandidateID], Number]

PAIRWIN_SCORERS = {}

pairwin_scorer_mark, get, construct = \
    votesim.component.core.register_functions(
        PAIRWIN_SCORERS, 'pairwise win scorer'
    )


@pairwin_scorer_mark
def winning_votes(counts: PairwiseCounts) -> PairwiseCounts:
    '''Count the votes for a pairwise win fully, losses and ties as zero.

    :param counts: Pairwise preference counts.
    '''
    return {
        pair: (count if count > counts.get((pair[1], pair[0]), 0) else 0)
        for pair, count in counts.items()
    }


@pairwin_scorer_mark
def margins(counts: PairwiseCounts) -> PairwiseCounts:
    '''Score a pair by its preference count minus the reverse one.

    The strength is thus negative for pairwise losses.

    :param counts: Pairwise preference counts.
    '''
    return {
        pair: count - counts.get((pair[1], pair[0]), 0)
        for pair, count in counts.items()
    }

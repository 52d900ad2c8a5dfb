'''Candidate identifiers.

Candidates in a simulated election profile carry no attributes of their own;
they are referenced by plain integer identifiers running from zero to the
number of candidates minus one. Everything the voters think about them lives
in the voters' candidate-indexed data.
'''

from typing import List


CandidateID = int


class CandidateError(Exception):
    '''A candidate reference is invalid in the given profile.

    :param candidate: The offending candidate identifier.
    :param n_candidates: Number of candidates in the election.
    '''
    def __init__(self, candidate: CandidateID, n_candidates: int):
        self.candidate = candidate
        self.n_candidates = n_candidates
        super().__init__(
            f'invalid candidate {candidate!r}, must be an integer'
            f' in [0, {n_candidates})'
        )


def generate_candidates(n_candidates: int) -> List[CandidateID]:
    '''Return identifiers of all candidates in ascending order.'''
    return list(range(n_candidates))


def check_candidate(candidate: CandidateID, n_candidates: int) -> None:
    '''Raise CandidateError if the candidate is not in the election.'''
    if (
        isinstance(candidate, bool)
        or not isinstance(candidate, int)
        or not 0 <= candidate < n_candidates
    ):
        raise CandidateError(candidate, n_candidates)

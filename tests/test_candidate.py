import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.candidate
from votesim.candidate import CandidateError


def test_generate_candidates():
    assert votesim.candidate.generate_candidates(4) == [0, 1, 2, 3]
    assert votesim.candidate.generate_candidates(0) == []


@pytest.mark.parametrize('candidate', [0, 1, 2])
def test_check_valid(candidate):
    votesim.candidate.check_candidate(candidate, 3)


@pytest.mark.parametrize('candidate', [-1, 3, 10, 1.0, '1', True, None])
def test_check_invalid(candidate):
    with pytest.raises(CandidateError) as excinfo:
        votesim.candidate.check_candidate(candidate, 3)
    assert excinfo.value.candidate is candidate
    assert '[0, 3)' in str(excinfo.value)

import sys
import os
import itertools
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.component.rankscore as rs

N_RANKED = [0, 1, 2, 3, 5, 10]

RANKERS = [rs.Dowdall(), rs.Borda(), rs.Borda(base=0)]


@pytest.mark.parametrize('n_ranked, n_candidates, rank_scorer', [
    (n_ranked, n_candidates, rank_scorer)
    for n_ranked, n_candidates, rank_scorer
    in itertools.product(N_RANKED, N_RANKED, RANKERS)
    if n_ranked <= n_candidates
])
def test_all(n_ranked, n_candidates, rank_scorer):
    scores = rank_scorer.scores(n_ranked, n_candidates)
    assert len(scores) == n_ranked
    assert all(score >= 0 for score in scores)
    assert list(sorted(scores, reverse=True)) == scores


@pytest.mark.parametrize('rank_scorer', [rs.Borda(), rs.Borda(base=0)])
def test_err_too_many_ranks(rank_scorer):
    with pytest.raises(ValueError):
        rank_scorer.scores(10, 5)


def test_borda_values():
    assert rs.Borda().scores(4, 4) == [4, 3, 2, 1]
    assert rs.Borda(base=0).scores(3, 4) == [3, 2, 1]


def test_borda_independent_of_previous_calls():
    scorer = rs.Borda()
    assert scorer.scores(3, 8) == [8, 7, 6]
    assert scorer.scores(3, 3) == [3, 2, 1]
    assert scorer.scores(3, 8) == [8, 7, 6]
    assert scorer.to_dict() == rs.Borda().to_dict()


def test_dowdall_values():
    assert rs.Dowdall().scores(3, 5) == [1, Fraction(1, 2), Fraction(1, 3)]


def test_construct():
    assert isinstance(rs.construct('Borda'), rs.Borda)
    assert isinstance(rs.construct('Dowdall'), rs.Dowdall)
    scorer = rs.Borda(base=0)
    assert rs.construct(scorer) is scorer
    with pytest.raises(KeyError):
        rs.construct('Nauru')


def test_score_groups():
    groups = (frozenset([2]), frozenset([0, 3]), frozenset([1]))
    awarded = rs.score_groups(groups, [4, 3, 2, 1])
    assert awarded == {2: 4, 0: Fraction(5, 2), 3: Fraction(5, 2), 1: 1}
    assert sum(awarded.values()) == 10

import sys
import os
import concurrent.futures

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.component.rankscore
import votesim.evaluate.positional
import votesim.system
import votesim.tiebreak
from votesim.voters import HonestVoter, RealOrdinalVoter

TENNESSEE = {
    (0, 1, 2, 3): 42,
    (1, 2, 3, 0): 26,
    (2, 3, 1, 0): 15,
    (3, 2, 1, 0): 17,
}


def expand(votes):
    return [
        RealOrdinalVoter(ballot)
        for ballot, n_votes in votes.items()
        for i in range(n_votes)
    ]


@pytest.mark.parametrize('rank_scorer, expected', [
    ('Borda', [1, 2, 0, 3]),
    (votesim.component.rankscore.Borda(base=0), [1, 2, 0, 3]),
    ('Dowdall', [1, 0, 2, 3]),
])
def test_tennessee(rank_scorer, expected):
    evaluator = votesim.evaluate.positional.PositionalVoting(rank_scorer)
    assert evaluator.evaluate(expand(TENNESSEE), 4) == expected


def test_truncated_ballot():
    evaluator = votesim.evaluate.positional.PositionalVoting()
    assert evaluator.evaluate([RealOrdinalVoter([2])], 4) == [2, 0, 1, 3]


def test_equal_ranks_split_points():
    evaluator = votesim.evaluate.positional.PositionalVoting()
    # 0: 2.5 + 2, 1: 2.5 + 3, 2: 3 + 1
    voters = [HonestVoter([.5, .5, 1.]), HonestVoter([.9, 1., .1])]
    assert evaluator.evaluate(voters, 3) == [1, 0, 2]


@pytest.mark.parametrize('tie_breaker, expected', [
    (votesim.tiebreak.ascending, [0, 1, 2]),
    (votesim.tiebreak.descending, [2, 1, 0]),
])
def test_abstentions(tie_breaker, expected):
    evaluator = votesim.evaluate.positional.PositionalVoting('Dowdall')
    assert evaluator.rank([(), ()], 3, tie_breaker) == expected


def test_catalog_evaluator_unchanged():
    method = votesim.system.get('borda')
    before = dict(vars(method.evaluator.rank_scorer))
    voters = [HonestVoter([.1, .2, .3, .4, .5])]
    assert method.evaluate(voters, 5) == [4, 3, 2, 1, 0]
    assert method.evaluate(voters, 3) == [2, 1, 0]
    assert vars(method.evaluator.rank_scorer) == before


def test_shared_evaluator_across_threads():
    evaluator = votesim.system.get('borda').evaluator
    sizes = [3, 8] * 50

    def run(n_candidates):
        voters = [HonestVoter([i / 10 for i in range(n_candidates)])]
        return evaluator.evaluate(voters, n_candidates)

    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(run, sizes))
    for n_candidates, ranking in zip(sizes, results):
        assert ranking == list(reversed(range(n_candidates)))

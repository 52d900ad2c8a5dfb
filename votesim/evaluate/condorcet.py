'''Condorcet election methods.

These methods examine pairwise orderings between candidates: how many voters
rank one candidate above another. Candidates left off a truncated ballot are
considered ranked below all ranked candidates and equal to each other, and
express no pairwise preference among themselves.

All of the methods in this module reliably rank a Condorcet winner first
when there is one.

These evaluators only take few parameters; therefore, a dictionary of their
instances with different setups is provided in the ``EVALUATORS`` module
variable.
'''

import logging
from fractions import Fraction
from typing import Callable, Dict, List, Tuple, Union
from numbers import Number

import votesim.ballot
import votesim.component.pairwin_scorer
import votesim.evaluate.core
import votesim.tiebreak
from votesim.ballot import Ballot
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)

PairwiseCounts = Dict[Tuple[CandidateID, CandidateID], Number]


def pairwise_wins(counts: PairwiseCounts,
                  include_ties: bool = False,
                  ) -> List[Tuple[CandidateID, CandidateID]]:
    """Select pairs of candidates where the first is preferred to the second.

    :param counts: Pairwise preference counts.
    :param include_ties: Whether to include pairs of candidates that are tied.
        Such a pair will be included in both directions.
    """
    wins = []
    for pair, count in counts.items():
        anti_count = counts.get((pair[1], pair[0]), 0)
        if anti_count < count or include_ties and anti_count == count:
            wins.append(pair)
    return wins


class PairwiseEvaluator(votesim.evaluate.core.Evaluator):
    '''Base class for methods working with the pairwise preference counts.'''
    request_kind = votesim.ballot.EQUAL_RANKED

    def rank(self,
             ballots: List[Ballot],
             n_candidates: int,
             tie_breaker: votesim.tiebreak.TieBreaker,
             ) -> List[CandidateID]:
        counts = votesim.evaluate.core.pairwise_counts(
            votesim.evaluate.core.completed_rankings(ballots, n_candidates),
            n_candidates,
        )
        logger.debug('pairwise counts: %s', counts)
        return self.rank_pairwise(counts, n_candidates, tie_breaker)

    def rank_pairwise(self,
                      counts: PairwiseCounts,
                      n_candidates: int,
                      tie_breaker: votesim.tiebreak.TieBreaker,
                      ) -> List[CandidateID]:
        raise NotImplementedError


@simple_serialization
class Copeland(PairwiseEvaluator):
    '''Copeland method: rank candidates by the number of pairwise wins.

    A pairwise tie counts as half a win to both candidates.
    '''
    def rank_pairwise(self,
                      counts: PairwiseCounts,
                      n_candidates: int,
                      tie_breaker: votesim.tiebreak.TieBreaker,
                      ) -> List[CandidateID]:
        return votesim.tiebreak.rank_by_scores(
            self.scores(counts, n_candidates), tie_breaker
        )

    @staticmethod
    def scores(counts: PairwiseCounts, n_candidates: int) -> List[Fraction]:
        scores = [Fraction(0)] * n_candidates
        for winner, loser in pairwise_wins(counts, include_ties=True):
            if counts[loser, winner] == counts[winner, loser]:
                scores[winner] += Fraction(1, 2)
            else:
                scores[winner] += 1
        return scores


@simple_serialization
class Minimax(PairwiseEvaluator):
    '''Minimax Condorcet method.

    Also known as successive reversal or Simpson-Kramer method. Ranks the
    candidates by their greatest pairwise defeat, smallest first.

    The magnitude of the pairwise defeat can be measured in different ways
    according to the pairwise win scorer provided.

    :param pairwin_scoring: A pairwise win scorer callable. The variants
        found in the :mod:`votesim.component.pairwin_scorer` module
        (``'winning_votes'``, ``'margins'``) can be referred to by their
        names.
    '''
    def __init__(self,
                 pairwin_scoring: Union[str, Callable] = 'winning_votes',
                 ):
        self.pairwin_scoring = votesim.component.pairwin_scorer.construct(
            pairwin_scoring
        )

    def rank_pairwise(self,
                      counts: PairwiseCounts,
                      n_candidates: int,
                      tie_breaker: votesim.tiebreak.TieBreaker,
                      ) -> List[CandidateID]:
        worst_defeat = {cand: 0 for cand in range(n_candidates)}
        for (winner, loser), score in self.pairwin_scoring(counts).items():
            worst_defeat[loser] = max(worst_defeat[loser], score)
        logger.debug('greatest pairwise defeats: %s', worst_defeat)
        return votesim.tiebreak.rank_by_scores(
            worst_defeat, tie_breaker, descending=False
        )


@simple_serialization
class Schulze(PairwiseEvaluator):
    '''Schulze (beatpath) Condorcet method.

    Finds the strongest paths between pairs of candidates in which each
    candidate pairwise beats the next (measuring the path by its weakest
    link in winning votes) and ranks the candidates by the number of
    opponents they beat through such paths.
    '''
    def rank_pairwise(self,
                      counts: PairwiseCounts,
                      n_candidates: int,
                      tie_breaker: votesim.tiebreak.TieBreaker,
                      ) -> List[CandidateID]:
        paths = self.widest_paths(counts, n_candidates)
        scores = [0] * n_candidates
        for winner, loser in pairwise_wins(paths):
            scores[winner] += 1
        logger.debug('beatpath wins: %s', scores)
        return votesim.tiebreak.rank_by_scores(scores, tie_breaker)

    @staticmethod
    def widest_paths(counts: PairwiseCounts,
                     n_candidates: int,
                     ) -> PairwiseCounts:
        paths = {
            pair: (count if count > counts[pair[1], pair[0]] else 0)
            for pair, count in counts.items()
        }
        candidates = range(n_candidates)
        for via in candidates:
            for source in candidates:
                if source == via:
                    continue
                for target in candidates:
                    if target in (source, via):
                        continue
                    paths[source, target] = max(
                        paths[source, target],
                        min(paths[source, via], paths[via, target]),
                    )
        return paths


@simple_serialization
class RankedPairs(PairwiseEvaluator):
    '''Tideman's ranked pairs Condorcet method.

    Sorts pairwise wins by their magnitude and sequentially locks them into
    a graph of who beats whom in descending order, discarding wins that
    would contradict previously locked ones (create a cycle). The ranking
    is then read from the locked graph, with the tie-breaker deciding
    among candidates the graph does not order.

    Wins of equal magnitude are locked in the tie-breaker order of their
    winners, then of their losers.

    :param pairwin_scoring: A pairwise win scorer callable or the name of
        one from :mod:`votesim.component.pairwin_scorer`.
    '''
    def __init__(self,
                 pairwin_scoring: Union[str, Callable] = 'winning_votes',
                 ):
        self.pairwin_scoring = votesim.component.pairwin_scorer.construct(
            pairwin_scoring
        )

    def rank_pairwise(self,
                      counts: PairwiseCounts,
                      n_candidates: int,
                      tie_breaker: votesim.tiebreak.TieBreaker,
                      ) -> List[CandidateID]:
        scored = self.pairwin_scoring(counts)
        candidate_order = votesim.tiebreak.order(
            range(n_candidates), tie_breaker
        )
        position = {cand: i for i, cand in enumerate(candidate_order)}
        wins = pairwise_wins(counts)
        wins.sort(key=lambda pair: (position[pair[0]], position[pair[1]]))
        wins.sort(key=lambda pair: scored[pair], reverse=True)
        locked = self._lock_pairs(wins)
        logger.debug('locked pairs: %s', locked)
        return self._build_ranking(locked, candidate_order)

    @classmethod
    def _lock_pairs(cls,
                    pairs: List[Tuple[CandidateID, CandidateID]],
                    ) -> List[Tuple[CandidateID, CandidateID]]:
        locked_pairs = []
        for pair in pairs:
            if not cls._is_path(locked_pairs, pair[1], pair[0]):
                locked_pairs.append(pair)
        return locked_pairs

    @staticmethod
    def _is_path(pairs: List[Tuple[CandidateID, CandidateID]],
                 source: CandidateID,
                 sink: CandidateID,
                 ) -> bool:
        visited = {source}
        while True:
            last_len = len(visited)
            for from_cand, to_cand in pairs:
                if from_cand in visited and to_cand not in visited:
                    if to_cand == sink:
                        return True
                    visited.add(to_cand)
            if len(visited) == last_len:
                return False

    @staticmethod
    def _build_ranking(locked_pairs: List[Tuple[CandidateID, CandidateID]],
                       candidate_order: List[CandidateID],
                       ) -> List[CandidateID]:
        remaining = list(candidate_order)
        edges = locked_pairs[:]
        ranking = []
        while remaining:
            beaten = {loser for winner, loser in edges}
            # the first unbeaten candidate by tie-breaker order
            top = next(
                (cand for cand in remaining if cand not in beaten), None
            )
            if top is None:
                raise votesim.evaluate.core.VotingSystemError(
                    'locked pairs contain a cycle'
                )
            ranking.append(top)
            remaining.remove(top)
            edges = [edge for edge in edges if edge[0] != top]
        return ranking


EVALUATORS = {
    'copeland': Copeland(),
    'minimax_winvotes': Minimax(),
    'minimax_margins': Minimax('margins'),
    'schulze': Schulze(),
    'rankedpairs_winvotes': RankedPairs(),
    'rankedpairs_margins': RankedPairs('margins'),
}

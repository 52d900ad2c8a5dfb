'''The catalog of election methods and the dispatcher running them.

The catalog (:data:`METHODS`) is the single authority on which election
methods exist: it lists them by their stable identifiers, in the order in
which the dispatcher runs them. New methods are added by :func:`register`
only; the dispatcher itself never changes.

The dispatcher, :func:`run_all`, runs every cataloged method on one election
profile and hands each result to a consumer callable before the next method
runs, so that a simulation can aggregate statistics over many trials without
keeping all the results around::

    def consumer(identifier, result):
        if not isinstance(result, MethodFailure):
            wins[identifier][result[0]] += 1

    votesim.system.run_all(profile, 'ascending', consumer)
'''

import collections
import logging
from typing import Any, Callable, Dict, List, Union

import votesim.ballot
import votesim.component.rankscore
import votesim.evaluate.cardinal
import votesim.evaluate.condorcet
import votesim.evaluate.core
import votesim.evaluate.positional
import votesim.evaluate.sequential
import votesim.evaluate.simple
import votesim.tiebreak
import votesim.voters
from votesim.candidate import CandidateID, CandidateError
from votesim.persist import simple_serialization
from votesim.profile import ElectionProfile, VoterStatePolicy

logger = logging.getLogger(__name__)


@simple_serialization
class ElectionMethod:
    '''A named election method in the catalog. Wraps an evaluator.

    :param identifier: Stable identifier of the method, unique in the
        catalog.
    :param name: Human-readable name of the method.
    :param evaluator: Evaluator implementing the method.
    '''
    def __init__(self,
                 identifier: str,
                 name: str,
                 evaluator: votesim.evaluate.core.Evaluator,
                 ):
        self.identifier = identifier
        self.name = name
        self.evaluator = evaluator

    def evaluate(self,
                 voters,
                 n_candidates: int,
                 tie_breaker: Union[str, votesim.tiebreak.TieBreaker]
                 = 'ascending',
                 ) -> List[CandidateID]:
        '''Return the evaluator's ranking of the candidates.'''
        return self.evaluator.evaluate(
            voters, n_candidates, tie_breaker, method=self.identifier
        )

    def __repr__(self):
        return f'<ElectionMethod {self.identifier}: {self.name}>'


class MethodFailure:
    '''The result of a method that could not be evaluated on a profile.

    Delivered to the dispatcher's consumer in place of a ranking.

    :param identifier: Identifier of the failed method.
    :param error: The exception that stopped the method.
    '''
    def __init__(self, identifier: str, error: Exception):
        self.identifier = identifier
        self.error = error

    def __repr__(self):
        return f'<MethodFailure {self.identifier}: {self.error!r}>'


MethodResult = Union[List[CandidateID], MethodFailure]
Consumer = Callable[[str, MethodResult], Any]

# Errors that abort a single method but not the whole dispatch. Invariant
# violations (AssertionError subclasses from votesim.tiebreak) propagate.
METHOD_ERRORS = (
    votesim.voters.UnsupportedBallotError,
    votesim.voters.NoUtilityError,
    votesim.evaluate.core.VotingSystemError,
    votesim.ballot.BallotError,
    CandidateError,
)

METHODS: Dict[str, ElectionMethod] = collections.OrderedDict()


def register(method: ElectionMethod) -> ElectionMethod:
    '''Add a method to the end of the catalog.

    :raises ValueError: If a method with the same identifier is registered.
    '''
    if method.identifier in METHODS:
        raise ValueError(f'duplicate method identifier: {method.identifier}')
    METHODS[method.identifier] = method
    return method


def method_count() -> int:
    '''Return the number of cataloged methods.'''
    return len(METHODS)


def method_list() -> List[str]:
    '''Return the identifiers of all cataloged methods in catalog order.'''
    return list(METHODS.keys())


def get(identifier: str) -> ElectionMethod:
    '''Return a cataloged method by its identifier.'''
    try:
        return METHODS[identifier]
    except KeyError:
        raise KeyError(f'unknown election method: {identifier}')


def run_all(profile: ElectionProfile,
            tie_breaker: Union[str, votesim.tiebreak.TieBreaker],
            consumer: Consumer,
            policy: VoterStatePolicy = VoterStatePolicy.SHARE,
            ) -> None:
    '''Run every cataloged method on the profile, in catalog order.

    The consumer is called exactly once per method, with the method
    identifier and its result, before the next method runs. A method that
    cannot be evaluated on the profile produces a :class:`MethodFailure`
    and the dispatch continues.

    :param profile: The election profile; its voters cast a ballot for each
        method.
    :param tie_breaker: Comparator to resolve residual ties, or the name of
        a registered tie-breaker. Used for all methods.
    :param consumer: Callable receiving ``(identifier, result)``.
    :param policy: What happens to voter state between the methods.
    :raises UnresolvedTieError: If the tie-breaker is not a strict order.
    :raises InvalidResultError: If a method produces an invalid ranking.
    '''
    tie_breaker = votesim.tiebreak.construct(tie_breaker)
    n_candidates = profile.n_candidates
    for identifier, method in METHODS.items():
        if policy is VoterStatePolicy.RESET:
            profile.reset()
        logger.info('running %s', identifier)
        try:
            result = method.evaluate(profile.voters, n_candidates, tie_breaker)
        except METHOD_ERRORS as err:
            logger.warning('method %s failed: %s', identifier, err)
            consumer(identifier, MethodFailure(identifier, err))
            continue
        votesim.tiebreak.check_result(result, n_candidates)
        logger.info('%s result: %s', identifier, result)
        consumer(identifier, result)
        if policy is VoterStatePolicy.SHARE:
            profile.announce(identifier, result)


def evaluate_all(profile: ElectionProfile,
                 tie_breaker: Union[str, votesim.tiebreak.TieBreaker]
                 = 'ascending',
                 policy: VoterStatePolicy = VoterStatePolicy.SHARE,
                 ) -> Dict[str, MethodResult]:
    '''Run every cataloged method and collect the results by identifier.'''
    results = collections.OrderedDict()

    def collect(identifier: str, result: MethodResult) -> None:
        results[identifier] = result

    run_all(profile, tie_breaker, collect, policy=policy)
    return results


def _register_defaults() -> None:
    for identifier, name, evaluator in [
        ('plurality', 'Plurality',
            votesim.evaluate.simple.Plurality()),
        ('anti_plurality', 'Anti-plurality',
            votesim.evaluate.simple.AntiPlurality()),
        ('approval', 'Approval voting',
            votesim.evaluate.simple.Approval()),
        ('borda', 'Borda count',
            votesim.evaluate.positional.PositionalVoting(
                votesim.component.rankscore.Borda()
            )),
        ('dowdall', 'Dowdall system',
            votesim.evaluate.positional.PositionalVoting(
                votesim.component.rankscore.Dowdall()
            )),
        ('irv', 'Instant-runoff voting',
            votesim.evaluate.sequential.InstantRunoff()),
        ('coombs', 'Coombs method',
            votesim.evaluate.sequential.Coombs()),
        ('bucklin', 'Bucklin voting',
            votesim.evaluate.sequential.Bucklin()),
        ('copeland', 'Copeland method',
            votesim.evaluate.condorcet.Copeland()),
        ('minimax_winvotes', 'Minimax (winning votes)',
            votesim.evaluate.condorcet.Minimax('winning_votes')),
        ('minimax_margins', 'Minimax (margins)',
            votesim.evaluate.condorcet.Minimax('margins')),
        ('schulze', 'Schulze method',
            votesim.evaluate.condorcet.Schulze()),
        ('ranked_pairs', 'Ranked pairs',
            votesim.evaluate.condorcet.RankedPairs()),
        ('score', 'Score voting (0-10)',
            votesim.evaluate.cardinal.ScoreVoting(10)),
        ('star', 'STAR voting (0-5)',
            votesim.evaluate.cardinal.STAR(5)),
        ('majority_judgment', 'Majority judgment (0-5)',
            votesim.evaluate.cardinal.MajorityJudgment(5)),
    ]:
        register(ElectionMethod(identifier, name, evaluator))


_register_defaults()

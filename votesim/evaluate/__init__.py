'''Election method evaluators.

Every evaluator takes the voters, the number of candidates and
a tie-breaker and returns a strict ranking of all candidates, best first::

    ranking = evaluator.evaluate(voters, n_candidates, tie_breaker)

The evaluators are grouped into modules by the kind of algorithm they use:

-   :mod:`votesim.evaluate.simple` for plurality, anti-plurality and
    approval voting,
-   :mod:`votesim.evaluate.positional` for Borda count and relatives,
-   :mod:`votesim.evaluate.sequential` for round-based ranked methods,
-   :mod:`votesim.evaluate.condorcet` for pairwise comparison methods,
-   :mod:`votesim.evaluate.cardinal` for score ballot methods.
'''

from votesim.evaluate.core import Evaluator, VotingSystemError

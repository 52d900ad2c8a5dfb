"""A commandline tool to list the election methods and try them out.

Lists the method catalog, or generates a random election profile and
evaluates it with all cataloged methods.
"""

import argparse
import logging
from typing import List, Optional

import votesim.generate
import votesim.system
import votesim.tiebreak
from votesim.profile import ElectionProfile, VoterStatePolicy

argparser = argparse.ArgumentParser(
    prog='votesim',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-l', '--list',
    dest='list_methods',
    action='store_true',
    help='list the cataloged election methods and exit',
)
argparser.add_argument(
    '-n', '--voters',
    type=int,
    default=100,
    help='number of voters in the generated profile',
)
argparser.add_argument(
    '-c', '--candidates',
    type=int,
    default=5,
    help='number of candidates in the generated profile',
)
argparser.add_argument(
    '-s', '--seed',
    type=int,
    help='random seed for the profile and the tie-breaker',
)
argparser.add_argument(
    '-S', '--strategic',
    type=float,
    default=0.,
    help='share of voters voting strategically',
)
argparser.add_argument(
    '-p', '--policy',
    choices=[policy.value for policy in VoterStatePolicy],
    default=VoterStatePolicy.SHARE.value,
    help='whether voter state carries over between methods',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


def main(list_methods: bool = False,
         voters: int = 100,
         candidates: int = 5,
         seed: Optional[int] = None,
         strategic: float = 0.,
         policy: str = VoterStatePolicy.SHARE.value,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if list_methods:
        show_catalog()
        return
    profile = build_profile(voters, candidates, seed, strategic)
    print(f'Evaluating {len(profile)} voters, {candidates} candidates')
    print()
    votesim.system.run_all(
        profile,
        votesim.tiebreak.RandomOrder(candidates, seed),
        show_result,
        policy=VoterStatePolicy(policy),
    )


def show_catalog() -> None:
    print(f'{votesim.system.method_count()} election methods available:')
    identifiers = votesim.system.method_list()
    n_just_chars = len(max(identifiers, key=len))
    for identifier in identifiers:
        method = votesim.system.get(identifier)
        print(identifier.ljust(n_just_chars), ' ', method.name)


def build_profile(n_voters: int,
                  n_candidates: int,
                  seed: Optional[int] = None,
                  strategic: float = 0.,
                  ) -> ElectionProfile:
    """Generate a spatial-model profile, possibly with strategic voters."""
    utilities = votesim.generate.IssueSpaceGenerator(
        random_state=seed
    ).generate(n_voters, n_candidates)
    if strategic:
        return votesim.generate.mixed_profile(
            utilities, strategic_share=strategic, random_state=seed
        )
    else:
        return votesim.generate.honest_profile(utilities)


def show_result(identifier: str, result) -> None:
    if isinstance(result, votesim.system.MethodFailure):
        print(identifier.ljust(20), 'failed:', result.error)
    else:
        print(identifier.ljust(20), format_ranking(result))


def format_ranking(ranking: List[int]) -> str:
    return ' > '.join(str(cand) for cand in ranking)


if __name__ == '__main__':
    args = argparser.parse_args()
    main(**vars(args))

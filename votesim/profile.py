'''Election profiles: the voters and the number of candidates.

A profile is the complete input of a simulated election. It is validated
once at construction, so that a malformed profile is rejected before any
election method is run on it.
'''

import enum
import logging
from typing import Any, Iterable, List

import votesim.voters
from votesim.persist import simple_serialization

logger = logging.getLogger(__name__)


class ProfileError(Exception):
    '''The election profile is malformed.'''
    pass


class VoterVariantError(ProfileError):
    '''A voter in the profile is not one of the known voter variants.

    :param voter: The offending voter.
    :param index: Position of the voter in the profile.
    '''
    def __init__(self, voter: Any, index: int):
        self.voter = voter
        self.index = index
        variants = ', '.join(v.__name__ for v in votesim.voters.VARIANTS)
        super().__init__(
            f'voter {index} is a {type(voter).__name__},'
            f' must be one of: {variants}'
        )


class VoterStatePolicy(enum.Enum):
    '''What happens to voter state between the methods run on a profile.

    Casting ballots may change voter state (cached ballots, beliefs about
    the frontrunners). With ``SHARE``, this state carries over from one
    method to the next and every result is announced to the voters, so
    adaptive voters learn as the methods run. With ``RESET``, every voter
    is returned to its initial state before each method, which makes the
    method results independent of the order they are run in.
    '''
    SHARE = 'share'
    RESET = 'reset'


@simple_serialization
class ElectionProfile:
    '''A population of voters facing a number of candidates.

    :param voters: The voters; each must be an instance of one of
        :data:`votesim.voters.VARIANTS`.
    :param n_candidates: Number of candidates, identified by integers from
        zero to ``n_candidates - 1``. Every voter's data must cover all of
        them.
    :raises ProfileError: If the number of candidates is not a positive
        integer or a voter does not cover all candidates.
    :raises VoterVariantError: If a voter is not a known variant.
    '''
    def __init__(self,
                 voters: Iterable[votesim.voters.Voters],
                 n_candidates: int,
                 ):
        if (
            isinstance(n_candidates, bool)
            or not isinstance(n_candidates, int)
            or n_candidates < 1
        ):
            raise ProfileError(
                f'number of candidates must be a positive integer,'
                f' got {n_candidates!r}'
            )
        self.voters: List[votesim.voters.Voters] = list(voters)
        self.n_candidates = n_candidates
        for i, voter in enumerate(self.voters):
            if not votesim.voters.is_variant(voter):
                raise VoterVariantError(voter, i)
            if not voter.covers(n_candidates):
                raise ProfileError(
                    f'voter {i} ({type(voter).__name__}) does not cover'
                    f' {n_candidates} candidates'
                )
        logger.debug(
            'profile created: %d voters, %d candidates',
            len(self.voters), n_candidates
        )

    def __len__(self) -> int:
        return len(self.voters)

    def __iter__(self):
        return iter(self.voters)

    def reset(self) -> None:
        '''Return all voters to their freshly constructed state.'''
        for voter in self.voters:
            voter.reset()

    def announce(self, method: str, ranking: List[int]) -> None:
        '''Let all voters observe a method result.'''
        for voter in self.voters:
            voter.observe_result(method, ranking)

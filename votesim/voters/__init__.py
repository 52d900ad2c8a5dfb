'''Simulated voters casting ballots for the election methods.

The set of voter variants is closed: an election profile only accepts
instances of the classes listed in :data:`VARIANTS`.
'''

from typing import Any, Union

from votesim.voters.core import (
    BallotRequest, NoUtilityError, UnsupportedBallotError, Voter
)
from votesim.voters.honest import HonestVoter
from votesim.voters.real import RealCardinalVoter, RealOrdinalVoter
from votesim.voters.strategic import (
    BulletVoter, BuryingVoter, CompromisingVoter, StrategicVoter
)


VARIANTS = (
    HonestVoter,
    RealOrdinalVoter,
    RealCardinalVoter,
    BulletVoter,
    CompromisingVoter,
    BuryingVoter,
)

Voters = Union[
    HonestVoter,
    RealOrdinalVoter,
    RealCardinalVoter,
    BulletVoter,
    CompromisingVoter,
    BuryingVoter,
]


def is_variant(voter: Any) -> bool:
    '''Whether the voter is an instance of one of the known variants.'''
    return type(voter) in VARIANTS

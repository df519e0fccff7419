# honeyword sets
# (N indistinguishable passwords, one of them is real)
#

from typing import NamedTuple, Tuple

from ..errors import RangeError
from .common import validate_positive_integer
from .strong import generate_strong_password

MIN_HONEYWORDS = 2


class HoneywordMetadata(NamedTuple):
    total_count: int
    real_password_index: int
    decoy_count: int


class HoneywordSet(NamedTuple):
    passwords: Tuple[str, ...]
    metadata: HoneywordMetadata

    @property
    def real_password(self) -> str:
        return self.passwords[self.metadata.real_password_index]

    def __str__(self):
        return '\n'.join(self.passwords)


async def generate_honeyword_set(config, random_generator) -> HoneywordSet:
    """Generate `iteration` passwords of `length` chars and pick the real one.

    Every password is a single strong chunk generated with the same
    parameters, so the decoys cannot be told apart from the real one.
    The index of the real password costs one more draw in [0, iteration).

    """
    validate_positive_integer(config.length, 'length')
    validate_positive_integer(config.iteration, 'iteration')
    if config.iteration < MIN_HONEYWORDS:
        raise RangeError("Honeyword generation requires at least 2 passwords "
                         "(1 real + 1 decoy minimum)", 'iteration')
    single = config.replace(iteration=1)
    passwords = []
    for _ in range(config.iteration):
        passwords.append(await generate_strong_password(single, random_generator))
    real_index = await random_generator.generate_random_int(config.iteration)
    return HoneywordSet(tuple(passwords),
                        HoneywordMetadata(config.iteration, real_index, config.iteration - 1))

# generators
# (strategy registry and dispatch)
#

from typing import Callable, NamedTuple

from ..entropy import ENTROPY_CALCULATOR_REGISTRY
from ..errors import UnknownTypeError, DictionaryNotReadyError
from ..password_types import PasswordType, VALID_PASSWORD_TYPES, to_password_type
from .common import validate_positive_integer, split_string
from .strong import (generate_chunk, generate_strong_password, generate_base64_password,
                     generate_quantum_password, validate_quantum_security,
                     QUANTUM_MIN_LENGTH, QUANTUM_ENTROPY_TARGET_BITS)
from .honeyword import generate_honeyword_set, HoneywordSet, HoneywordMetadata
from .memorable import (generate_memorable_password, generate_diceware_password,
                        generate_passphrase, validate_diceware_config, DICEWARE_WORD_COUNT)
from .pronounceable import generate_cvvc_syllable, generate_pronounceable_password
from .custom import (generate_custom_password, generate_template_password,
                     generate_from_instructions)


class Generator(NamedTuple):
    generate: Callable
    calculate_entropy: Callable
    needs_dictionary: bool = False


def _entry(ptype, generate, needs_dictionary=False):
    return Generator(generate, ENTROPY_CALCULATOR_REGISTRY[ptype], needs_dictionary)


GENERATOR_REGISTRY = {
    PasswordType.STRONG: _entry(PasswordType.STRONG, generate_strong_password),
    PasswordType.BASE64: _entry(PasswordType.BASE64, generate_base64_password),
    PasswordType.QUANTUM: _entry(PasswordType.QUANTUM, generate_quantum_password),
    PasswordType.HONEYWORD: _entry(PasswordType.HONEYWORD, generate_honeyword_set),
    PasswordType.MEMORABLE: _entry(PasswordType.MEMORABLE, generate_passphrase, True),
    PasswordType.DICEWARE: _entry(PasswordType.DICEWARE, generate_diceware_password, True),
    PasswordType.PRONOUNCEABLE: _entry(PasswordType.PRONOUNCEABLE, generate_pronounceable_password),
    PasswordType.CUSTOM: _entry(PasswordType.CUSTOM, generate_custom_password),
    PasswordType.TEMPLATE: _entry(PasswordType.TEMPLATE, generate_template_password),
}
assert set(GENERATOR_REGISTRY) == set(PasswordType), "every password type needs a generator"


def get_generator(type_) -> Generator:
    """Return Generator for `type_`.

    :raises UnknownTypeError: for unknown type, lists the valid ones

    """
    ptype = to_password_type(type_)
    if ptype is None:
        raise UnknownTypeError(type_, VALID_PASSWORD_TYPES)
    return GENERATOR_REGISTRY[ptype]


async def generate(config, random_generator, dictionary=None):
    """Dispatch `config` to its generator.

    Returns password string, or HoneywordSet for honeyword type.

    """
    generator = get_generator(config.type)
    if generator.needs_dictionary:
        if dictionary is None:
            raise DictionaryNotReadyError(
                "DictionaryPort is required for memorable and diceware passwords")
        return await generator.generate(config, random_generator, dictionary)
    return await generator.generate(config, random_generator)

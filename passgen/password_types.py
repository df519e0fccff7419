# password_types
# (strategy identifiers, metadata and structural validation)
#

import enum
from typing import NamedTuple, Optional


class PasswordType(str, enum.Enum):
    STRONG = 'strong'
    BASE64 = 'base64'
    MEMORABLE = 'memorable'
    QUANTUM = 'quantum-resistant'
    DICEWARE = 'diceware'
    HONEYWORD = 'honeyword'
    PRONOUNCEABLE = 'pronounceable'
    CUSTOM = 'custom'
    TEMPLATE = 'template'

    def __str__(self):
        return self.value


VALID_PASSWORD_TYPES = tuple(t.value for t in PasswordType)


class ValidationResult(NamedTuple):
    is_valid: bool
    errors: list


class PasswordTypeMetadata(NamedTuple):
    name: str
    description: str
    unit_type: str
    # None when the type does not consume `length`
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    default_length: Optional[int] = None
    min_iteration: int = 1
    entropy_per_unit: Optional[float] = None

    @property
    def uses_length(self):
        return self.min_length is not None


PASSWORD_TYPE_METADATA = {
    PasswordType.STRONG: PasswordTypeMetadata(
        "Strong Password", "Uniform random characters from the base64 alphabet",
        'character', 1, 1024, 16, entropy_per_unit=6.0),
    PasswordType.BASE64: PasswordTypeMetadata(
        "Base64 Password", "Uniform random selection from base64 character set",
        'character', 1, 1024, 16, entropy_per_unit=6.0),
    PasswordType.MEMORABLE: PasswordTypeMetadata(
        "Memorable Password", "Dictionary words joined by a separator",
        'word'),
    PasswordType.QUANTUM: PasswordTypeMetadata(
        "Quantum-Resistant Password", "Base64 characters sized for a 256-bit entropy target",
        'character', 32, 128, 43, entropy_per_unit=6.0),
    PasswordType.DICEWARE: PasswordTypeMetadata(
        "Diceware Passphrase", "Words from the EFF large wordlist (7776 words)",
        'word', entropy_per_unit=12.925),
    PasswordType.HONEYWORD: PasswordTypeMetadata(
        "Honeyword Set", "One real password hidden among N-1 decoys",
        'character', 1, 1024, 16, min_iteration=2, entropy_per_unit=6.0),
    PasswordType.PRONOUNCEABLE: PasswordTypeMetadata(
        "Pronounceable Password", "Consonant-vowel-vowel-consonant syllables",
        'syllable', entropy_per_unit=13.43),
    PasswordType.CUSTOM: PasswordTypeMetadata(
        "Custom Character Set", "Uniform random characters from a user-defined set",
        'character', 1, 1000, 16),
    PasswordType.TEMPLATE: PasswordTypeMetadata(
        "Template Password", "Literal runs and character set references like [A-Z]{3}",
        'pass'),
}


def is_positive_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def to_password_type(type_) -> Optional[PasswordType]:
    """Return matching PasswordType or None."""
    if isinstance(type_, PasswordType):
        return type_
    try:
        return PasswordType(type_)
    except ValueError:
        return None


def is_valid_password_type(type_) -> bool:
    return to_password_type(type_) is not None


RANGE = 'range'
CONFIG = 'config'


def iter_config_problems(ptype: PasswordType, config):
    """Yield (kind, message) for each problem of `config`.

    `kind` is RANGE for numeric bounds, CONFIG for everything else.

    """
    metadata = PASSWORD_TYPE_METADATA[ptype]

    iteration = config.iteration
    if not is_positive_integer(iteration):
        yield RANGE, "Iteration must be a positive integer"
    elif iteration < metadata.min_iteration:
        yield RANGE, f"Iteration must be at least {metadata.min_iteration} for {ptype}"

    if metadata.uses_length and config.length is not None:
        length = config.length
        if not is_positive_integer(length) or length < metadata.min_length:
            yield RANGE, f"Length must be at least {metadata.min_length}"
        elif length > metadata.max_length:
            yield RANGE, f"Length must not exceed {metadata.max_length}"

    if not isinstance(config.separator, str):
        yield CONFIG, "Separator must be a string"

    if ptype is PasswordType.CUSTOM:
        if not config.allowed_chars or not isinstance(config.allowed_chars, str):
            yield CONFIG, "Allowed characters are required for custom passwords"
    elif ptype is PasswordType.TEMPLATE:
        if not config.template or not isinstance(config.template, str):
            yield CONFIG, "Template is required for template passwords"


def validate_password_type_config(type_, config) -> ValidationResult:
    """Structural validation of a configuration for `type_`.

    Checks only the shape and bounds of the parameters, not whether
    a template parses or a character set is non-empty.

    """
    ptype = to_password_type(type_)
    if ptype is None:
        return ValidationResult(False, [
            f"Invalid password type: {type_}. Valid types: {', '.join(VALID_PASSWORD_TYPES)}"])
    errors = [message for _kind, message in iter_config_problems(ptype, config)]
    return ValidationResult(not errors, errors)

# entropy
# (normalized entropy per strategy, security levels)
#
# Each formula mirrors how the matching generator consumes randomness,
# so bits are comparable across strategies.
#

import enum
import logging
import math
from typing import Mapping, NamedTuple

from .charset import BASE64_CHARSET, CONSONANTS, VOWELS, build_custom_charset
from .config import PasswordConfig
from .errors import (ConfigurationError, UnknownTypeError,
                     TYPE_REQUIRED, CONFIG_REQUIRED)
from .password_types import (PasswordType, PASSWORD_TYPE_METADATA, VALID_PASSWORD_TYPES,
                             ValidationResult, to_password_type)
from .template import validate_template, calculate_template_entropy

log = logging.getLogger(__name__)

BASE64_CHARSET_SIZE = len(BASE64_CHARSET)
DICEWARE_WORDS = 7776
DEFAULT_DICTIONARY_SIZE = 7776
CVVC_SYLLABLE_COMBINATIONS = len(CONSONANTS) * len(VOWELS) ** 2 * len(CONSONANTS)


class SecurityLevel(str, enum.Enum):
    WEAK = 'WEAK'
    MODERATE = 'MODERATE'
    GOOD = 'GOOD'
    STRONG = 'STRONG'
    EXCELLENT = 'EXCELLENT'

    def __str__(self):
        return self.value


# lower bound in bits, checked from the top
SECURITY_THRESHOLDS = (
    (256, SecurityLevel.EXCELLENT),
    (128, SecurityLevel.STRONG),
    (80, SecurityLevel.GOOD),
    (64, SecurityLevel.MODERATE),
)


class EntropyResult(NamedTuple):
    total_bits: float
    security_level: SecurityLevel
    recommendation: str
    per_unit: float


def _length(config) -> int:
    if config.length is not None:
        return config.length
    return PASSWORD_TYPE_METADATA[to_password_type(config.type)].default_length


###################
# Formulas        #
###################

def fixed_charset_entropy(config) -> float:
    """length * iteration * log2(64)"""
    return _length(config) * config.iteration * math.log2(BASE64_CHARSET_SIZE)


def honeyword_entropy(config) -> float:
    """length * log2(64), the entropy of one password of the set.

    Decoys are generated independently and add nothing to the real one.

    """
    return _length(config) * math.log2(BASE64_CHARSET_SIZE)


def memorable_entropy(config) -> float:
    dictionary_size = config.dictionary_size
    if dictionary_size is None:
        dictionary_size = DEFAULT_DICTIONARY_SIZE
    return config.iteration * math.log2(dictionary_size)


def diceware_entropy(config) -> float:
    return config.iteration * math.log2(DICEWARE_WORDS)


def pronounceable_entropy(config) -> float:
    return config.iteration * math.log2(CVVC_SYLLABLE_COMBINATIONS)


def custom_entropy(config) -> float:
    """Rebuilds the same charset as the generator. Unbuildable charset gives 0."""
    try:
        descriptor = build_custom_charset(config.allowed_chars, config.forbidden_chars)
    except ConfigurationError as e:
        log.warning("Cannot estimate custom charset entropy: %s", e)
        return 0.0
    return _length(config) * config.iteration * descriptor.bits_per_character


def template_entropy(config) -> float:
    validation = validate_template(config.template)
    if not validation.is_valid:
        log.warning("Cannot estimate template entropy: %s", "; ".join(validation.errors))
        return 0.0
    return calculate_template_entropy(validation.metadata.instructions) * config.iteration


ENTROPY_CALCULATOR_REGISTRY = {
    PasswordType.STRONG: fixed_charset_entropy,
    PasswordType.BASE64: fixed_charset_entropy,
    PasswordType.QUANTUM: fixed_charset_entropy,
    PasswordType.HONEYWORD: honeyword_entropy,
    PasswordType.MEMORABLE: memorable_entropy,
    PasswordType.DICEWARE: diceware_entropy,
    PasswordType.PRONOUNCEABLE: pronounceable_entropy,
    PasswordType.CUSTOM: custom_entropy,
    PasswordType.TEMPLATE: template_entropy,
}
assert set(ENTROPY_CALCULATOR_REGISTRY) == set(PasswordType), \
    "every password type needs an entropy formula"


def _as_config(type_, config) -> PasswordConfig:
    if isinstance(config, PasswordConfig):
        return config if config.type == str(type_) else config.replace(type=str(type_))
    if isinstance(config, Mapping):
        return PasswordConfig.from_mapping({**config, 'type': str(type_)})
    raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")


def normalize_entropy(password, type_, config) -> float:
    """Entropy in bits of passwords generated by `type_` with `config`.

    `password` isn't inspected, the estimate depends only on the
    configuration. Result is rounded to 2 decimals.

    :raises ConfigurationError: type or config missing
    :raises UnknownTypeError: unsupported type
    :returns: bits, 0.0 if the formula cannot produce a meaningful number

    """
    if not type_:
        raise ConfigurationError(TYPE_REQUIRED)
    if config is None:
        raise ConfigurationError(CONFIG_REQUIRED)
    ptype = to_password_type(type_)
    if ptype is None:
        raise UnknownTypeError(type_, VALID_PASSWORD_TYPES)
    config = _as_config(ptype, config)
    try:
        entropy = ENTROPY_CALCULATOR_REGISTRY[ptype](config)
    except (ArithmeticError, TypeError, ValueError) as e:
        log.warning("Error calculating entropy for type %s: %s", ptype, e)
        return 0.0
    if not math.isfinite(entropy) or entropy < 0:
        log.warning("Invalid entropy calculated for type %s: %r", ptype, entropy)
        return 0.0
    return round(entropy, 2)


def get_security_level(entropy_bits: float) -> SecurityLevel:
    for threshold, level in SECURITY_THRESHOLDS:
        if entropy_bits >= threshold:
            return level
    return SecurityLevel.WEAK


def get_security_recommendation(entropy_bits: float) -> str:
    if entropy_bits >= 128:
        return "Excellent security. Suitable for high-security applications."
    if entropy_bits >= 80:
        return "Good security for most applications. " \
               "Consider increasing length for high-security needs."
    return "Consider increasing password length or iteration count for better security."


def per_unit_entropy(config, total_bits: float) -> float:
    """Bits per character, word or syllable, depending on the type."""
    ptype = to_password_type(config.type)
    iteration = config.iteration if isinstance(config.iteration, int) else 0
    if ptype is PasswordType.HONEYWORD:
        units = _length(config)
    elif PASSWORD_TYPE_METADATA[ptype].uses_length:
        units = _length(config) * iteration
    else:
        units = iteration
    return total_bits / units if units > 0 else 0.0


def calculate_entropy(config) -> EntropyResult:
    """Full entropy report for `config` (PasswordConfig or mapping with `type`)."""
    if config is None:
        raise ConfigurationError(CONFIG_REQUIRED)
    if isinstance(config, PasswordConfig):
        type_ = config.type
    elif isinstance(config, Mapping):
        type_ = config.get('type')
    else:
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(config).__name__}")
    bits = normalize_entropy('', type_, config)
    return EntropyResult(
        total_bits=bits,
        security_level=get_security_level(bits),
        recommendation=get_security_recommendation(bits),
        per_unit=per_unit_entropy(_as_config(type_, config), bits),
    )


def validate_entropy_inputs(password, type_, config) -> ValidationResult:
    errors = []
    if not isinstance(password, str):
        errors.append("Password must be a string")
    if not isinstance(type_, str):
        errors.append("Type must be a string")
    if not isinstance(config, (PasswordConfig, Mapping)):
        errors.append("Config must be a mapping or PasswordConfig")
    if isinstance(type_, str) and to_password_type(type_) is None:
        errors.append(f"Unsupported password type: {type_}")
    return ValidationResult(not errors, errors)

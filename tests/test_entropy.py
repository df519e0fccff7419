import math

import pytest

from passgen.config import PasswordConfig
from passgen.entropy import (normalize_entropy, calculate_entropy, get_security_level,
                             get_security_recommendation, validate_entropy_inputs,
                             SecurityLevel, ENTROPY_CALCULATOR_REGISTRY,
                             CVVC_SYLLABLE_COMBINATIONS)
from passgen.errors import ConfigurationError, UnknownTypeError
from passgen.password_types import PasswordType


def test_registry_complete():
    assert set(ENTROPY_CALCULATOR_REGISTRY) == set(PasswordType)


@pytest.mark.parametrize("type_", ['strong', 'base64', 'quantum-resistant'])
def test_fixed_charset(type_):
    assert normalize_entropy('', type_, {'length': 16}) == 96.0
    assert normalize_entropy('', type_, {'length': 16, 'iteration': 2}) == 192.0


def test_honeyword_counts_one_password():
    assert normalize_entropy('', 'honeyword', {'length': 16, 'iteration': 2}) == 96.0
    assert normalize_entropy('', 'honeyword', {'length': 16, 'iteration': 5}) == 96.0
    result = calculate_entropy({'type': 'honeyword', 'length': 16, 'iteration': 5})
    assert result.security_level is SecurityLevel.GOOD
    assert result.per_unit == 6.0


def test_default_length():
    assert normalize_entropy('', 'strong', {}) == 96.0
    assert normalize_entropy('', 'quantum-resistant', {}) == 258.0


def test_iteration_is_linear():
    for type_, config in [('diceware', {}), ('pronounceable', {}),
                          ('memorable', {'dictionary_size': 1000}),
                          ('custom', {'length': 10, 'allowed_chars': 'DIGITS'}),
                          ('template', {'template': '[A-Z]{3}-[0-9]{4}'})]:
        single = normalize_entropy('', type_, {**config, 'iteration': 1})
        triple = normalize_entropy('', type_, {**config, 'iteration': 3})
        assert single > 0
        assert triple == pytest.approx(3 * single, abs=0.02)


def test_diceware():
    assert normalize_entropy('', 'diceware', {'iteration': 6}) == 77.55
    result = calculate_entropy({'type': 'diceware', 'iteration': 6})
    assert result.total_bits == 77.55
    assert result.security_level is SecurityLevel.MODERATE
    assert result.per_unit == pytest.approx(77.55 / 6)


def test_memorable_dictionary_size():
    assert normalize_entropy('', 'memorable', {'iteration': 4}) == \
        round(4 * math.log2(7776), 2)
    assert normalize_entropy('', 'memorable', {'iteration': 4, 'dictionary_size': 1024}) == 40.0


def test_pronounceable():
    assert CVVC_SYLLABLE_COMBINATIONS == 21 * 5 * 5 * 21
    assert normalize_entropy('', 'pronounceable', {'iteration': 4}) == \
        round(4 * math.log2(CVVC_SYLLABLE_COMBINATIONS), 2)


def test_custom_and_template():
    config = {'length': 8, 'allowed_chars': 'aabbcc'}
    assert normalize_entropy('', 'custom', config) == round(8 * math.log2(3), 2)
    config = {'template': '[A-Z]{3}-[0-9]{4}', 'iteration': 2}
    expected = 2 * (3 * math.log2(26) + 4 * math.log2(10))
    assert normalize_entropy('', 'template', config) == round(expected, 2)


def test_unestimable_gives_zero():
    config = {'length': 8, 'allowed_chars': 'abc', 'forbidden_chars': 'abc'}
    assert normalize_entropy('', 'custom', config) == 0.0
    assert normalize_entropy('', 'template', {'template': 'no random here'}) == 0.0
    assert normalize_entropy('', 'template', {'template': '[a-z'}) == 0.0
    assert normalize_entropy('', 'template', {}) == 0.0
    assert normalize_entropy('', 'memorable', {'dictionary_size': -5}) == 0.0
    assert normalize_entropy('', 'memorable', {'iteration': 4, 'dictionary_size': 0}) == 0.0
    assert normalize_entropy('', 'strong', {'iteration': 'x'}) == 0.0


def test_password_is_not_inspected():
    config = PasswordConfig('strong', length=10)
    assert normalize_entropy('aaaaaaaaaa', 'strong', config) == \
        normalize_entropy('Zx9/+Qw1Lm', 'strong', config) == 60.0


def test_required_arguments():
    with pytest.raises(ConfigurationError):
        normalize_entropy('', '', {})
    with pytest.raises(ConfigurationError):
        normalize_entropy('', None, {})
    with pytest.raises(ConfigurationError):
        normalize_entropy('', 'strong', None)
    with pytest.raises(UnknownTypeError) as excinfo:
        normalize_entropy('', 'nope', {})
    assert 'strong' in str(excinfo.value)
    with pytest.raises(ConfigurationError):
        calculate_entropy({'length': 8})
    with pytest.raises(ConfigurationError):
        calculate_entropy('strong')
    with pytest.raises(ConfigurationError):
        calculate_entropy(['strong'])


@pytest.mark.parametrize("bits, level", [
    (0, SecurityLevel.WEAK),
    (63.99, SecurityLevel.WEAK),
    (64, SecurityLevel.MODERATE),
    (79.99, SecurityLevel.MODERATE),
    (80, SecurityLevel.GOOD),
    (127.99, SecurityLevel.GOOD),
    (128, SecurityLevel.STRONG),
    (255.99, SecurityLevel.STRONG),
    (256, SecurityLevel.EXCELLENT),
    (1000, SecurityLevel.EXCELLENT),
])
def test_security_level(bits, level):
    assert get_security_level(bits) is level


def test_recommendation():
    assert get_security_recommendation(200).startswith("Excellent")
    assert get_security_recommendation(90).startswith("Good")
    assert get_security_recommendation(40).startswith("Consider")


def test_validate_entropy_inputs():
    assert validate_entropy_inputs('pw', 'strong', {}).is_valid
    result = validate_entropy_inputs(None, 5, None)
    assert not result.is_valid
    assert len(result.errors) == 3
    assert not validate_entropy_inputs('pw', 'nope', {}).is_valid

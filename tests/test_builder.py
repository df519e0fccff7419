import pytest

from passgen.builder import (PasswordBuilder, PasswordPresets, create_password_builder,
                             SIMILAR_CHARS)
from passgen.charset import build_custom_charset
from passgen.config import PasswordConfig
from passgen.entropy import SecurityLevel
from passgen.errors import ConfigurationError, RangeError
from passgen.service import create_service

from .fakes import SequenceRandom


@pytest.fixture()
def service():
    return create_service(SequenceRandom([0, 1, 2, 3]))


def test_defaults(service):
    config = PasswordBuilder(service).build()
    assert config == PasswordConfig('strong')


def test_chaining(service):
    config = create_password_builder(service).length(8).iterations(3).separator('.').build()
    assert (config.type, config.length, config.iteration, config.separator) == \
        ('strong', 8, 3, '.')
    assert PasswordBuilder(service).type('diceware').build().type == 'diceware'


@pytest.mark.parametrize("method, type_", [
    ('use_base64', 'base64'),
    ('memorable', 'memorable'),
    ('quantum_resistant', 'quantum-resistant'),
    ('honeywords', 'honeyword'),
    ('pronounceable', 'pronounceable'),
])
def test_type_shortcuts(service, method, type_):
    builder = PasswordBuilder(service)
    assert getattr(builder, method)() is builder
    assert builder.build().type == type_


def test_custom_sets(service):
    config = PasswordBuilder(service).include_uppercase().include_digits() \
        .include_uppercase().include("!@").exclude("O0").build()
    assert config.type == 'custom'
    assert config.allowed_chars == 'UPPERCASE,DIGITS,!@'
    assert config.forbidden_chars == 'O0'
    charset = build_custom_charset(config.allowed_chars, config.forbidden_chars).charset
    assert 'O' not in charset and '0' not in charset
    assert charset.endswith('9!@')


def test_exclude_only_allows_everything_else(service):
    config = PasswordBuilder(service).exclude_similar().build()
    assert config.allowed_chars == 'UPPERCASE,LOWERCASE,DIGITS,SPECIAL'
    assert config.forbidden_chars == SIMILAR_CHARS


def test_empty_custom_set(service):
    builder = PasswordBuilder(service).include("ab").exclude("ab")
    with pytest.raises(ConfigurationError) as excinfo:
        builder.build()
    assert "Failed to create custom character set" in str(excinfo.value)


def test_later_type_wins(service):
    config = PasswordBuilder(service).include_digits().memorable().build()
    assert config.type == 'memorable'
    assert config.allowed_chars is None


def test_clone_is_independent(service):
    source = PasswordBuilder(service).include_digits().length(6)
    copy = source.clone().include_lowercase().length(10)
    assert source.build().allowed_chars == 'DIGITS'
    assert source.build().length == 6
    assert copy.build().allowed_chars == 'DIGITS,LOWERCASE'
    assert copy.build().length == 10


@pytest.mark.asyncio
async def test_generate(service):
    assert await PasswordBuilder(service).length(4).generate() == "ABCD"
    password = await PasswordPresets.pin(service).generate()
    assert password == "012301"
    passwords = await PasswordBuilder(service).length(2).generate_multiple(3)
    assert passwords == ["CD", "AB", "CD"]
    with pytest.raises(RangeError):
        await PasswordBuilder(service).generate_multiple(0)


@pytest.mark.asyncio
async def test_generate_with_entropy(service):
    result = await PasswordBuilder(service).length(4).generate(include_entropy=True)
    assert result.password == "ABCD"
    assert result.entropy == 24.0


def test_entropy_and_validation(service):
    result = PasswordBuilder(service).use_base64().length(16).iterations(2).calculate_entropy()
    assert result.total_bits == 192.0
    assert result.security_level is SecurityLevel.STRONG
    assert PasswordBuilder(service).honeywords().iterations(3).validate().is_valid
    validation = PasswordBuilder(service).honeywords().validate()
    assert not validation.is_valid


def test_presets(service):
    secure = PasswordPresets.secure(service).build()
    assert secure.type == 'custom'
    assert secure.length == 16
    charset = build_custom_charset(secure.allowed_chars, secure.forbidden_chars).charset
    assert not set(SIMILAR_CHARS) & set(charset)
    assert PasswordPresets.simple(service).build().length == 12
    pin = PasswordPresets.pin(service).build()
    assert (pin.allowed_chars, pin.length) == ('DIGITS', 6)
    passphrase = PasswordPresets.passphrase(service).build()
    assert (passphrase.type, passphrase.iteration) == ('memorable', 4)
    max_security = PasswordPresets.max_security(service)
    assert max_security.build().length == 64
    assert max_security.calculate_entropy().security_level is SecurityLevel.EXCELLENT

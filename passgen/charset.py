# charset
# (named character sets and custom set builder)
#

import math
import re
from typing import NamedTuple

from .errors import EmptyCharsetError
from .password_types import ValidationResult

BASE64_CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
VOWELS = "aeiou"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SPECIAL = "!@#$%^&*()_+-=[]{}|;:,.<>?"
HEX_UPPERCASE = "0123456789ABCDEF"
HEX_LOWERCASE = "0123456789abcdef"

MIN_CHARSET_SIZE = 2

_CONTROL_CHARS = re.compile('[\x00-\x1f\x7f-\x9f]')


class CharsetDescriptor(NamedTuple):
    charset: str
    size: int
    bits_per_character: float
    description: str

    @classmethod
    def from_chars(cls, charset: str, description: str = None) -> 'CharsetDescriptor':
        if not charset:
            raise EmptyCharsetError()
        if description is None:
            description = f"Custom character set ({len(charset)} characters)"
        return cls(charset, len(charset), math.log2(len(charset)), description)


CATALOG = {
    'BASE64': CharsetDescriptor.from_chars(BASE64_CHARSET, "Base64 character set (RFC 4648)"),
    'VOWELS': CharsetDescriptor.from_chars(VOWELS, "English vowels for syllable generation"),
    'CONSONANTS': CharsetDescriptor.from_chars(CONSONANTS, "English consonants for syllable generation"),
    'UPPERCASE': CharsetDescriptor.from_chars(UPPERCASE, "Uppercase letters A-Z"),
    'LOWERCASE': CharsetDescriptor.from_chars(LOWERCASE, "Lowercase letters a-z"),
    'DIGITS': CharsetDescriptor.from_chars(DIGITS, "Digits 0-9"),
    'SPECIAL': CharsetDescriptor.from_chars(SPECIAL, "Special characters and symbols"),
    'HEX_UPPERCASE': CharsetDescriptor.from_chars(HEX_UPPERCASE, "Hexadecimal digits with uppercase letters"),
    'HEX_LOWERCASE': CharsetDescriptor.from_chars(HEX_LOWERCASE, "Hexadecimal digits with lowercase letters"),
}


def get_charset(name: str):
    """Look up a named set, ignoring case. Returns None for unknown names."""
    return CATALOG.get(name.upper())


def unique_chars(text: str) -> str:
    """Remove duplicate characters, keep the first occurrence."""
    return ''.join(dict.fromkeys(text))


def build_custom_charset(allow_spec: str, forbid_spec: str = '') -> CharsetDescriptor:
    """Build a character set from `allow_spec` minus `forbid_spec`.

    `allow_spec` is a comma-separated list. Each entry is either a name
    from the catalog (case-insensitive) or literal characters,
    e.g. "UPPERCASE,DIGITS,!@#".

    :raises EmptyCharsetError: when nothing is left

    """
    if not isinstance(allow_spec, str):
        raise EmptyCharsetError("Allowed characters must be a string")
    parts = []
    for entry in allow_spec.split(','):
        named = get_charset(entry.strip())
        if named is not None:
            parts.append(named.charset)
        else:
            parts.append(entry.strip())
    charset = ''.join(parts)
    # A lone comma or whitespace is still a literal request
    if not charset:
        charset = allow_spec
    if forbid_spec:
        forbidden = set(forbid_spec)
        charset = ''.join(c for c in charset if c not in forbidden)
    charset = unique_chars(charset)
    if not charset:
        raise EmptyCharsetError(
            "Custom character set cannot be empty after applying forbidden character filter")
    return CharsetDescriptor.from_chars(charset)


def validate_charset(charset):
    """Check that `charset` is usable for passwords.

    :returns: ValidationResult

    """
    errors = []
    if not charset or not isinstance(charset, str):
        errors.append("Character set must be a non-empty string")
        return ValidationResult(False, errors)
    if len(charset) < MIN_CHARSET_SIZE:
        errors.append("Character set must contain at least 2 characters for security")
    control = _CONTROL_CHARS.findall(charset)
    if control:
        errors.append("Character set contains control characters: "
                      + ", ".join(repr(c) for c in control))
    return ValidationResult(not errors, errors)

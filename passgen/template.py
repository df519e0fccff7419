# template
# (password template parser, e.g. "[A-Z]{3}-[0-9]{4}-[special]")
#
# Grammar:
#   template  := (literal | charset)+
#   literal   := any run of characters up to the next '['
#   charset   := '[' set ']' quantity?
#   quantity  := '{' positive integer <= 1000 '}'
#
# `set` is a catalog name (case-insensitive), an alias (ALPHA, ...),
# an ascending range like "a-f", or literal characters.
#

import re
from typing import NamedTuple, Optional, Tuple

from .charset import CharsetDescriptor, get_charset, build_custom_charset, unique_chars
from .errors import TemplateSyntaxError

LITERAL = 'literal'
CHARACTER_SET = 'character_set'

MAX_QUANTITY = 1000
MAX_TOTAL_LENGTH = 1000
MIN_TOTAL_ENTROPY = 20

ALIASES = {
    'ALPHA': 'UPPERCASE,LOWERCASE',
    'ALPHANUMERIC': 'UPPERCASE,LOWERCASE,DIGITS',
    'HEX': 'HEX_UPPERCASE',
    'HEXADECIMAL': 'HEX_UPPERCASE',
}

_RANGE = re.compile(r'([A-Za-z0-9])-([A-Za-z0-9])')
_DIGITS = re.compile(r'[0-9]+')


class LiteralInstruction(NamedTuple):
    value: str
    kind = LITERAL

    @property
    def quantity(self) -> int:
        return len(self.value)

    @property
    def entropy(self) -> float:
        return 0.0

    @property
    def description(self) -> str:
        return f"Literal: {self.value!r}"


class CharsetInstruction(NamedTuple):
    charset: str
    quantity: int
    entropy: float
    description: str
    kind = CHARACTER_SET


class TemplateMetadata(NamedTuple):
    instructions: tuple
    total_entropy: float
    total_length: int
    has_random_content: bool


class TemplateValidation(NamedTuple):
    is_valid: bool
    errors: list
    metadata: Optional[TemplateMetadata]


class _Scanner:

    """Single left-to-right pass over the template.

    Each rule starts at `self.pos` and leaves it after the consumed text.

    """

    def __init__(self, template: str):
        self.text = template
        self.pos = 0

    def at_end(self):
        return self.pos >= len(self.text)

    def peek(self):
        return self.text[self.pos] if not self.at_end() else None

    def scan(self) -> Tuple:
        instructions = []
        while not self.at_end():
            if self.peek() == '[':
                instructions.append(self.charset())
            else:
                instructions.append(self.literal())
        return tuple(instructions)

    def literal(self) -> LiteralInstruction:
        end = self.text.find('[', self.pos)
        if end == -1:
            end = len(self.text)
        value = self.text[self.pos:end]
        self.pos = end
        return LiteralInstruction(value)

    def charset(self) -> CharsetInstruction:
        start = self.pos
        close = self.text.find(']', start)
        if close == -1:
            raise TemplateSyntaxError(f"Unmatched '[' at position {start}", start)
        definition = self.text[start + 1:close]
        if not definition:
            raise TemplateSyntaxError(f"Empty character set at position {start}", start)
        self.pos = close + 1
        quantity = 1
        if self.peek() == '{':
            quantity = self.quantity()
        descriptor = resolve_character_set(definition, start)
        return CharsetInstruction(descriptor.charset, quantity,
                                  descriptor.bits_per_character * quantity,
                                  descriptor.description)

    def quantity(self) -> int:
        start = self.pos
        close = self.text.find('}', start)
        if close == -1:
            raise TemplateSyntaxError(f"Unmatched '{{' at position {start}", start)
        definition = self.text[start + 1:close]
        if not definition:
            raise TemplateSyntaxError(
                f"Empty quantity specification at position {start}", start)
        if ',' in definition:
            raise TemplateSyntaxError(
                f"Range quantities not yet supported: {{{definition}}} at position {start}", start)
        if not _DIGITS.fullmatch(definition) or int(definition) < 1:
            raise TemplateSyntaxError(
                f"Invalid quantity: {definition} at position {start}. "
                f"Must be a positive integer.", start)
        quantity = int(definition)
        if quantity > MAX_QUANTITY:
            raise TemplateSyntaxError(
                f"Quantity too large: {quantity} at position {start}. "
                f"Maximum allowed: {MAX_QUANTITY}.", start)
        self.pos = close + 1
        return quantity


def resolve_character_set(definition: str, position: int = None) -> CharsetDescriptor:
    """Resolve the inside of `[...]` to a character set."""
    named = get_charset(definition)
    if named is not None:
        return named
    alias = ALIASES.get(definition.upper())
    if alias is not None:
        descriptor = build_custom_charset(alias)
        return descriptor._replace(description=f"{definition} ({descriptor.size} characters)")
    m = _RANGE.fullmatch(definition)
    if m:
        first, last = ord(m.group(1)), ord(m.group(2))
        if first > last:
            raise TemplateSyntaxError(
                f"Invalid range: {definition}. Start character must come before end character.",
                position)
        chars = ''.join(chr(code) for code in range(first, last + 1))
        return CharsetDescriptor.from_chars(
            chars, f"Range {definition} ({len(chars)} characters)")
    chars = unique_chars(definition)
    return CharsetDescriptor.from_chars(
        chars, f"Literal set {chars!r} ({len(chars)} characters)")


def parse_template(template: str) -> tuple:
    """Parse `template` into a tuple of instructions.

    :raises TemplateSyntaxError: on any syntax problem,
                                 `position` points at the offending token

    """
    if not template or not isinstance(template, str):
        raise TemplateSyntaxError("Template must be a non-empty string", 0)
    return _Scanner(template).scan()


def calculate_template_entropy(instructions) -> float:
    return sum(instruction.entropy for instruction in instructions)


def validate_template(template: str) -> TemplateValidation:
    """Parse `template` and check it is worth using for passwords.

    A template must contain random content, stay within
    `MAX_TOTAL_LENGTH` characters and provide `MIN_TOTAL_ENTROPY` bits.

    """
    try:
        instructions = parse_template(template)
    except TemplateSyntaxError as e:
        return TemplateValidation(False, [f"Template syntax error: {e}"], None)

    total_entropy = calculate_template_entropy(instructions)
    total_length = sum(instruction.quantity for instruction in instructions)
    has_random_content = any(instruction.kind == CHARACTER_SET for instruction in instructions)

    errors = []
    if not has_random_content:
        errors.append("Template must contain at least one random character set [...]")
    if total_length > MAX_TOTAL_LENGTH:
        errors.append(f"Template generates passwords that are too long: "
                      f"{total_length} characters (max: {MAX_TOTAL_LENGTH})")
    if total_entropy < MIN_TOTAL_ENTROPY:
        errors.append(f"Template provides insufficient entropy: "
                      f"{total_entropy:.1f} bits (minimum: {MIN_TOTAL_ENTROPY} bits)")
    metadata = TemplateMetadata(instructions, total_entropy, total_length, has_random_content)
    return TemplateValidation(not errors, errors, metadata)

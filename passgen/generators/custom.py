# custom character set and template generators

from ..charset import build_custom_charset, validate_charset
from ..errors import ConfigurationError
from ..template import parse_template, validate_template, LITERAL, CHARACTER_SET
from .common import validate_positive_integer, random_chars, join_chunks


async def generate_custom_password(config, random_generator) -> str:
    """Chunks of `length` characters drawn from `allowed_chars` minus `forbidden_chars`."""
    validate_positive_integer(config.length, 'length')
    validate_positive_integer(config.iteration, 'iteration')
    descriptor = build_custom_charset(config.allowed_chars, config.forbidden_chars)
    validation = validate_charset(descriptor.charset)
    if not validation.is_valid:
        raise ConfigurationError("Invalid character set: " + "; ".join(validation.errors))
    return await join_chunks(
        lambda: random_chars(descriptor.charset, config.length, random_generator),
        config.iteration, config.separator)


async def generate_from_instructions(instructions, random_generator) -> str:
    """One pass through parsed template. Literals don't consume randomness."""
    result = ''
    for instruction in instructions:
        if instruction.kind == LITERAL:
            result += instruction.value
        elif instruction.kind == CHARACTER_SET:
            result += await random_chars(instruction.charset, instruction.quantity,
                                         random_generator)
        else:
            raise ConfigurationError(f"Unsupported instruction type: {instruction.kind}")
    return result


async def generate_template_password(config, random_generator) -> str:
    """Fill the template `iteration` times, join passes with `separator`."""
    validate_positive_integer(config.iteration, 'iteration')
    # syntax errors surface with their position
    parse_template(config.template)
    validation = validate_template(config.template)
    if not validation.is_valid:
        raise ConfigurationError(f"Invalid template {config.template!r}: "
                                 + "; ".join(validation.errors))
    instructions = validation.metadata.instructions
    return await join_chunks(lambda: generate_from_instructions(instructions, random_generator),
                             config.iteration, config.separator)

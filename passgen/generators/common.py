# shared argument checks and helpers for generators

from ..errors import RangeError, must_be_positive_integer
from ..password_types import is_positive_integer


def validate_positive_integer(value, name: str):
    """Raise RangeError if `value` is not a positive integer."""
    if not is_positive_integer(value):
        raise RangeError(must_be_positive_integer(name), name)


def split_string(text: str, length: int) -> list:
    """Split `text` to pieces of `length` characters (last one may be shorter)."""
    validate_positive_integer(length, 'length')
    return [text[i:i + length] for i in range(0, len(text), length)]


async def random_chars(charset: str, length: int, random_generator) -> str:
    """Draw `length` characters from `charset`, one uniform draw per character."""
    result = []
    for _ in range(length):
        index = await random_generator.generate_random_int(len(charset))
        result.append(charset[index])
    return ''.join(result)


async def join_chunks(make_chunk, iteration: int, separator: str) -> str:
    chunks = []
    for _ in range(iteration):
        chunks.append(await make_chunk())
    return separator.join(chunks)

# fixed-charset generators
# (strong, base64, quantum-resistant)
#
# All three draw each character uniformly from the 64-symbol base64
# alphabet. They differ only in their length bounds and defaults.
#

import math

from ..charset import BASE64_CHARSET
from .common import validate_positive_integer, random_chars, join_chunks

QUANTUM_ENTROPY_TARGET_BITS = 256
BITS_PER_CHAR = math.log2(len(BASE64_CHARSET))
QUANTUM_MIN_LENGTH = math.ceil(QUANTUM_ENTROPY_TARGET_BITS / BITS_PER_CHAR)


async def generate_chunk(length: int, random_generator) -> str:
    validate_positive_integer(length, 'length')
    return await random_chars(BASE64_CHARSET, length, random_generator)


async def generate_strong_password(config, random_generator) -> str:
    """Generate `iteration` chunks of `length` base64 characters joined by `separator`."""
    validate_positive_integer(config.length, 'length')
    validate_positive_integer(config.iteration, 'iteration')
    return await join_chunks(lambda: generate_chunk(config.length, random_generator),
                             config.iteration, config.separator)


generate_base64_password = generate_strong_password
generate_quantum_password = generate_strong_password


def validate_quantum_security(config) -> dict:
    """Report whether `config` reaches the quantum-resistant entropy target."""
    validate_positive_integer(config.length, 'length')
    validate_positive_integer(config.iteration, 'iteration')
    entropy_bits = config.length * config.iteration * BITS_PER_CHAR
    return {
        'is_quantum_safe': entropy_bits >= QUANTUM_ENTROPY_TARGET_BITS,
        'entropy_bits': entropy_bits,
        'recommended_min_length': QUANTUM_MIN_LENGTH,
        'target': QUANTUM_ENTROPY_TARGET_BITS,
    }

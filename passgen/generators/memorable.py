# dictionary word generators
# (memorable, diceware, passphrase)
#

from ..errors import DictionaryNotReadyError, DictionarySizeError
from ..password_types import ValidationResult, is_positive_integer
from .common import validate_positive_integer

DICEWARE_WORD_COUNT = 7776  # 6^5, EFF large wordlist
DICEWARE_MAX_WORDS = 20


async def _ensure_loaded(dictionary, what='Dictionary'):
    words = await dictionary.load_dictionary()
    if not words:
        raise DictionaryNotReadyError(f"{what} is empty or not loaded")
    return words


async def _select_words(config, random_generator, dictionary) -> str:
    words = []
    for _ in range(config.iteration):
        words.append(await dictionary.select_random_word(random_generator.generate_random_int))
    return config.separator.join(words)


async def generate_memorable_password(config, random_generator, dictionary) -> str:
    """Join `iteration` random dictionary words with `separator`."""
    validate_positive_integer(config.iteration, 'iteration')
    await _ensure_loaded(dictionary)
    return await _select_words(config, random_generator, dictionary)


async def generate_diceware_password(config, random_generator, dictionary) -> str:
    """Like memorable, but insists on a full 7776 word diceware list."""
    validate_positive_integer(config.iteration, 'iteration')
    await _ensure_loaded(dictionary, 'Diceware dictionary')
    word_count = await dictionary.get_word_count()
    if word_count != DICEWARE_WORD_COUNT:
        raise DictionarySizeError(word_count, DICEWARE_WORD_COUNT)
    return await _select_words(config, random_generator, dictionary)


async def generate_passphrase(config, random_generator, dictionary) -> str:
    """Memorable password with optional `transforms`.

    :param config: `transforms` may contain flags
                   capitalize, uppercase, append_number

    """
    transforms = config.transforms or {}
    words = await generate_memorable_password(config, random_generator, dictionary)
    if transforms.get('capitalize'):
        parts = words.split(config.separator) if config.separator else [words]
        words = config.separator.join(w[:1].upper() + w[1:] for w in parts)
    if transforms.get('uppercase'):
        words = words.upper()
    if transforms.get('append_number'):
        words += str(await random_generator.generate_random_int(1000))
    return words


def validate_diceware_config(config) -> ValidationResult:
    errors = []
    if not is_positive_integer(config.iteration):
        errors.append("Iteration must be a positive integer")
    elif config.iteration > DICEWARE_MAX_WORDS:
        errors.append(f"Iteration should not exceed {DICEWARE_MAX_WORDS} words for practical use")
    if not isinstance(config.separator, str):
        errors.append("Separator must be a string")
    return ValidationResult(not errors, errors)

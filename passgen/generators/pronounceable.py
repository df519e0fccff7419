# pronounceable passwords
# (consonant-vowel-vowel-consonant syllables)
#

from ..charset import CONSONANTS, VOWELS
from .common import validate_positive_integer, join_chunks


async def generate_cvvc_syllable(random_generator) -> str:
    """Four draws: consonant, vowel, vowel, consonant."""
    syllable = ''
    for letters in (CONSONANTS, VOWELS, VOWELS, CONSONANTS):
        syllable += letters[await random_generator.generate_random_int(len(letters))]
    return syllable


async def generate_pronounceable_password(config, random_generator) -> str:
    validate_positive_integer(config.iteration, 'iteration')
    return await join_chunks(lambda: generate_cvvc_syllable(random_generator),
                             config.iteration, config.separator)

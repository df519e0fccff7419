# adapters
# (ports backed by the operating system)
#

import sys
import time
from pathlib import Path

from . import backend
from .config import DATA_DIR
from .errors import DictionaryNotReadyError, RangeError, must_be_positive_integer
from .ports import RandomGeneratorPort, DictionaryPort, LoggerPort, ClockPort, check_random_bound
from .password_types import is_positive_integer

# EFF large wordlist: 7776 lines "11111<TAB>abacus"
WORDLIST_CACHE_PATH = (DATA_DIR / 'eff_large_wordlist.txt').expanduser()
WORDLIST_WEB_URL = 'https://www.eff.org/files/2016/07/18/eff_large_wordlist.txt'


class SecureRandom(RandomGeneratorPort):

    """Random numbers from the best available backend (libsodium or os.urandom).

    Integers are produced by rejection sampling, no modulo bias.

    """

    async def generate_random_bytes(self, byte_length: int) -> bytes:
        if not is_positive_integer(byte_length):
            raise RangeError(must_be_positive_integer('byte_length'), 'byte_length')
        return backend.randombytes(byte_length)

    async def generate_random_int(self, max_value: int) -> int:
        check_random_bound(max_value, 'max_value')
        if max_value == 1:
            return 0
        bits = (max_value - 1).bit_length()
        num_bytes = (bits + 7) // 8
        excess = num_bytes * 8 - bits
        while True:
            value = int.from_bytes(backend.randombytes(num_bytes), 'big') >> excess
            if value < max_value:
                return value


def parse_wordlist(lines) -> tuple:
    """Extract words from wordlist lines.

    Accepts plain lists (one word per line) and diceware lists
    (dice roll, whitespace, word). Drops empty lines and words with "'".

    """
    words = []
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        word = fields[-1]
        if "'" in word:
            continue
        words.append(word)
    return tuple(words)


class WordlistDictionary(DictionaryPort):

    """Dictionary loaded from a wordlist file.

    Without explicit `path`, use the cached EFF large wordlist,
    downloading it on first use.

    """

    def __init__(self, path=None):
        self._path = Path(path).expanduser() if path is not None else None
        self._words = None

    def _read(self, path) -> tuple:
        with open(path, 'r', encoding='utf-8') as f:
            return parse_wordlist(f)

    def _download(self) -> tuple:
        import urllib.request
        with urllib.request.urlopen(WORDLIST_WEB_URL) as f:
            content = f.read()
        WORDLIST_CACHE_PATH.parent.mkdir(0o700, parents=True, exist_ok=True)
        with open(WORDLIST_CACHE_PATH, 'wb') as f:
            f.write(content)
        return parse_wordlist(content.decode('utf-8').splitlines())

    async def load_dictionary(self) -> tuple:
        if self._words is None:
            if self._path is not None:
                self._words = self._read(self._path)
            else:
                try:
                    self._words = self._read(WORDLIST_CACHE_PATH)
                except FileNotFoundError:
                    self._words = self._download()
        return self._words

    async def get_word_count(self) -> int:
        return len(await self.load_dictionary())

    async def select_random_word(self, draw) -> str:
        words = await self.load_dictionary()
        if not words:
            raise DictionaryNotReadyError(f"Wordlist {str(self._path)!r} is empty")
        return words[await draw(len(words))]


class ConsoleLogger(LoggerPort):

    """Print messages to stderr, skipping those below `level`."""

    LEVELS = ('debug', 'info', 'warn', 'error')

    def __init__(self, level='warn', file=None):
        self._level = self.LEVELS.index(level)
        self._file = file

    def _print(self, level, prefix, message, metadata=None):
        if self.LEVELS.index(level) < self._level:
            return
        if metadata:
            message += ' (' + ', '.join(f'{k}={v!r}' for k, v in metadata.items()) + ')'
        print(f"{prefix}: {message}", file=self._file or sys.stderr)

    def debug(self, message, **metadata):
        self._print('debug', "Debug", message, metadata)

    def info(self, message, **metadata):
        self._print('info', "Info", message, metadata)

    def warn(self, message, **metadata):
        self._print('warn', "Warning", message, metadata)

    def error(self, message, error=None):
        if error is not None:
            message = f"{message}: {error}"
        self._print('error', "Error", message)


class SystemClock(ClockPort):

    def now(self) -> float:
        return time.time()

    def performance_now(self) -> float:
        return time.perf_counter()

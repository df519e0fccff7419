# ports
# (interfaces of external collaborators and in-memory defaults)
#
# The engine never reads system randomness, files or clocks itself.
# It is given objects implementing these interfaces. Methods which
# may block (randomness, dictionary, storage) are coroutines.
#

import time
from datetime import datetime, timezone
from typing import NamedTuple

from . import errors
from .errors import DictionaryNotReadyError, RangeError, PortError
from .password_types import ValidationResult, is_positive_integer


class RandomGeneratorPort:

    """Source of uniformly distributed random numbers.

    Implementations must be free of modulo bias.

    """

    async def generate_random_bytes(self, byte_length: int) -> bytes:
        raise NotImplementedError

    async def generate_random_int(self, max_value: int) -> int:
        """Return random integer in range [0, `max_value`)."""
        raise NotImplementedError


class DictionaryPort:

    async def load_dictionary(self):
        """Return sequence of words. Repeated calls return the same list."""
        raise NotImplementedError

    async def get_word_count(self) -> int:
        raise NotImplementedError

    async def select_random_word(self, draw) -> str:
        """Select a word using `draw(max)`, a coroutine function
        returning random integer in [0, max)."""
        raise NotImplementedError


class LoggerPort:

    def debug(self, message, **metadata):
        raise NotImplementedError

    def info(self, message, **metadata):
        raise NotImplementedError

    def warn(self, message, **metadata):
        raise NotImplementedError

    def error(self, message, error=None):
        raise NotImplementedError


class ClockPort:

    def now(self) -> float:
        """Seconds since epoch."""
        raise NotImplementedError

    def performance_now(self) -> float:
        raise NotImplementedError

    def isoformat(self) -> str:
        return datetime.fromtimestamp(self.now(), timezone.utc).isoformat()


class StoragePort:

    async def read(self, key):
        raise NotImplementedError

    async def write(self, key, content):
        raise NotImplementedError

    async def exists(self, key) -> bool:
        raise NotImplementedError

    async def delete(self, key) -> bool:
        raise NotImplementedError


###################
# Default ports   #
###################

class NoOpLogger(LoggerPort):

    def debug(self, message, **metadata):
        pass

    def info(self, message, **metadata):
        pass

    def warn(self, message, **metadata):
        pass

    def error(self, message, error=None):
        pass


class MemoryStorage(StoragePort):

    def __init__(self):
        self._store = {}

    async def read(self, key):
        return self._store.get(key)

    async def write(self, key, content):
        self._store[key] = content

    async def exists(self, key) -> bool:
        return key in self._store

    async def delete(self, key) -> bool:
        return self._store.pop(key, None) is not None

    def clear(self):
        self._store.clear()


class FixedClock(ClockPort):

    """Clock which moves only when told to."""

    def __init__(self, timestamp: float = None):
        self.timestamp = time.time() if timestamp is None else timestamp
        self._perf = 0.0

    def now(self) -> float:
        return self.timestamp

    def performance_now(self) -> float:
        return self._perf

    def advance(self, seconds: float):
        self.timestamp += seconds
        self._perf += seconds


class MemoryDictionary(DictionaryPort):

    def __init__(self, words=()):
        self._words = tuple(words)

    async def load_dictionary(self):
        return self._words

    async def get_word_count(self) -> int:
        return len(self._words)

    async def select_random_word(self, draw) -> str:
        if not self._words:
            raise DictionaryNotReadyError("Dictionary is empty")
        index = await draw(len(self._words))
        return self._words[index]


# Small bundled list, enough for tests and demos.
# Use adapters.WordlistDictionary for real passphrases.
DEFAULT_WORD_LIST = (
    "abandon", "ability", "able", "about", "above", "absent", "absorb", "abstract",
    "absurd", "abuse", "access", "accident", "account", "accuse", "achieve", "acid",
    "acoustic", "acquire", "across", "act", "action", "actor", "actress", "actual",
    "adapt", "add", "addict", "address", "adjust", "admit", "adult", "advance",
    "advice", "aerobic", "affair", "afford", "afraid", "again", "age", "agent",
    "agree", "ahead", "aim", "air", "airport", "aisle", "alarm", "album",
)


##############
# Validation #
##############

class PortSchema(NamedTuple):
    port_class: str
    required: bool
    required_methods: tuple


PORT_SCHEMA = {
    'random_generator': PortSchema('RandomGeneratorPort', True,
                                   ('generate_random_bytes', 'generate_random_int')),
    'logger': PortSchema('LoggerPort', False, ('info', 'error')),
    'storage': PortSchema('StoragePort', False, ('read', 'write')),
    'clock': PortSchema('ClockPort', False, ('now', 'performance_now')),
    'dictionary': PortSchema('DictionaryPort', False,
                             ('load_dictionary', 'get_word_count', 'select_random_word')),
}


def _has_methods(port, methods):
    return all(callable(getattr(port, method, None)) for method in methods)


def validate_ports(ports) -> ValidationResult:
    """Check `ports` mapping against PORT_SCHEMA."""
    if not isinstance(ports, dict):
        return ValidationResult(False, ["Ports configuration must be a mapping"])
    required = [name for name, schema in PORT_SCHEMA.items() if schema.required]
    missing = [name for name in required if ports.get(name) is None]
    result = []
    if missing:
        result.append(errors.missing_ports(missing, required))
    for name, port in ports.items():
        schema = PORT_SCHEMA.get(name)
        if schema is None or port is None:
            continue
        if not _has_methods(port, schema.required_methods):
            result.append(errors.invalid_port(name, schema.port_class))
    return ValidationResult(not result, result)


class Ports(NamedTuple):
    random_generator: RandomGeneratorPort
    logger: LoggerPort
    storage: StoragePort
    clock: ClockPort
    dictionary: DictionaryPort


def resolve_ports(random_generator, logger=None, storage=None, clock=None,
                  dictionary=None, validate=True) -> Ports:
    """Fill in defaults for omitted optional ports.

    Every call creates fresh default instances, nothing is shared.

    :raises PortError: when `validate` is set and some port is unusable

    """
    ports = Ports(
        random_generator=random_generator,
        logger=logger if logger is not None else NoOpLogger(),
        storage=storage if storage is not None else MemoryStorage(),
        clock=clock if clock is not None else FixedClock(),
        dictionary=dictionary if dictionary is not None else MemoryDictionary(DEFAULT_WORD_LIST),
    )
    if validate:
        validation = validate_ports(ports._asdict())
        if not validation.is_valid:
            raise PortError(validation.errors)
    return ports


def check_random_bound(max_value, name='max'):
    """Shared argument check for RandomGeneratorPort implementations."""
    if not is_positive_integer(max_value):
        raise RangeError(errors.must_be_positive_integer(name), name)

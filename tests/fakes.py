from passgen.ports import RandomGeneratorPort, LoggerPort, check_random_bound


class SequenceRandom(RandomGeneratorPort):

    """Deterministic random source, cycles through `sequence`.

    Each draw returns `value % max`, so a sequence of small
    numbers selects exactly those indices.

    """

    def __init__(self, sequence):
        self._sequence = list(sequence)
        self._index = 0
        self.calls = 0
        self.bounds = []

    def _next(self):
        value = self._sequence[self._index]
        self._index = (self._index + 1) % len(self._sequence)
        return value

    async def generate_random_int(self, max_value):
        check_random_bound(max_value, 'max_value')
        self.calls += 1
        self.bounds.append(max_value)
        return self._next() % max_value

    async def generate_random_bytes(self, byte_length):
        return bytes(self._next() % 256 for _ in range(byte_length))


class RecordingLogger(LoggerPort):

    def __init__(self):
        self.records = []

    def debug(self, message, **metadata):
        self.records.append(('debug', message))

    def info(self, message, **metadata):
        self.records.append(('info', message))

    def warn(self, message, **metadata):
        self.records.append(('warn', message))

    def error(self, message, error=None):
        self.records.append(('error', message))

    def messages(self, level):
        return [message for lvl, message in self.records if lvl == level]

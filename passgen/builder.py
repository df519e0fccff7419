# builder
# (chainable configuration on top of PasswordService)
#
# Example::
#
#     password = await PasswordBuilder(service).include_uppercase() \
#         .include_digits().exclude_similar().length(20).generate()
#

from .charset import build_custom_charset
from .config import PasswordConfig
from .errors import ConfigurationError
from .generators.common import validate_positive_integer
from .password_types import PasswordType

SIMILAR_CHARS = "0O1lI|`'"
DEFAULT_CUSTOM_SETS = 'UPPERCASE,LOWERCASE,DIGITS,SPECIAL'


class PasswordBuilder:

    """Collect options by method chaining, then generate through `service`.

    Each `include_*` / `exclude*` call switches the type to custom.
    Entries added by `include` are comma-separated like in
    `build_custom_charset`, so a literal comma can't be included this way.

    """

    def __init__(self, service):
        self._service = service
        self._config = PasswordConfig(PasswordType.STRONG.value)
        self._allowed = []
        self._forbidden = ''

    def _set(self, **changes) -> 'PasswordBuilder':
        self._config = self._config.replace(**changes)
        return self

    def _add_allowed(self, entry) -> 'PasswordBuilder':
        if entry not in self._allowed:
            self._allowed.append(entry)
        return self._set(type=PasswordType.CUSTOM.value)

    def length(self, length) -> 'PasswordBuilder':
        return self._set(length=length)

    def type(self, type_) -> 'PasswordBuilder':
        return self._set(type=str(type_))

    def iterations(self, count) -> 'PasswordBuilder':
        return self._set(iteration=count)

    def separator(self, separator) -> 'PasswordBuilder':
        return self._set(separator=separator)

    def include_uppercase(self):
        return self._add_allowed('UPPERCASE')

    def include_lowercase(self):
        return self._add_allowed('LOWERCASE')

    def include_digits(self):
        return self._add_allowed('DIGITS')

    def include_symbols(self):
        return self._add_allowed('SPECIAL')

    def include(self, chars):
        return self._add_allowed(chars)

    def exclude(self, chars):
        self._forbidden += chars
        return self._set(type=PasswordType.CUSTOM.value)

    def exclude_similar(self):
        """Drop look-alike characters such as 0/O and 1/l/I."""
        return self.exclude(SIMILAR_CHARS)

    def use_base64(self):
        return self._set(type=PasswordType.BASE64.value)

    def memorable(self):
        return self._set(type=PasswordType.MEMORABLE.value)

    def quantum_resistant(self):
        return self._set(type=PasswordType.QUANTUM.value)

    def honeywords(self):
        return self._set(type=PasswordType.HONEYWORD.value)

    def pronounceable(self):
        return self._set(type=PasswordType.PRONOUNCEABLE.value)

    def build(self) -> PasswordConfig:
        """Return PasswordConfig for the collected options.

        For custom type without any `include_*`, all character
        classes are allowed.

        :raises ConfigurationError: custom character set is empty

        """
        if self._config.type != PasswordType.CUSTOM.value:
            return self._config
        allowed = ','.join(self._allowed) or DEFAULT_CUSTOM_SETS
        try:
            build_custom_charset(allowed, self._forbidden)
        except ConfigurationError as e:
            raise ConfigurationError(f"Failed to create custom character set: {e}") from e
        return self._config.replace(allowed_chars=allowed, forbidden_chars=self._forbidden)

    async def generate(self, include_entropy=False):
        return await self._service.generate(self.build(), include_entropy)

    async def generate_multiple(self, count, include_entropy=False) -> list:
        validate_positive_integer(count, 'count')
        return await self._service.generate_multiple([self.build()] * count, include_entropy)

    def calculate_entropy(self):
        return self._service.calculate_entropy(self.build())

    def validate(self):
        return self._service.validate_config(self.build())

    def clone(self) -> 'PasswordBuilder':
        """Independent copy, changes to it don't affect this builder."""
        other = PasswordBuilder(self._service)
        other._config = self._config
        other._allowed = list(self._allowed)
        other._forbidden = self._forbidden
        return other


def create_password_builder(service) -> PasswordBuilder:
    return PasswordBuilder(service)


class PasswordPresets:

    """Builders preconfigured for common use."""

    @staticmethod
    def secure(service) -> PasswordBuilder:
        return PasswordBuilder(service).include_uppercase().include_lowercase() \
            .include_digits().include_symbols().exclude_similar().length(16)

    @staticmethod
    def simple(service) -> PasswordBuilder:
        return PasswordBuilder(service).include_uppercase().include_lowercase() \
            .include_digits().length(12)

    @staticmethod
    def pin(service) -> PasswordBuilder:
        return PasswordBuilder(service).include_digits().length(6)

    @staticmethod
    def passphrase(service) -> PasswordBuilder:
        return PasswordBuilder(service).memorable().iterations(4).separator('-')

    @staticmethod
    def max_security(service) -> PasswordBuilder:
        return PasswordBuilder(service).quantum_resistant().length(64)

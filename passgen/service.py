# service
# (password generation facade)
#

from typing import Mapping, NamedTuple

from . import entropy
from .config import PasswordConfig
from .errors import (ConfigurationError, RangeError, UnknownTypeError, TYPE_REQUIRED,
                     unknown_type)
from .generators import generate as dispatch, get_generator
from .generators.strong import QUANTUM_ENTROPY_TARGET_BITS
from .password_types import (PasswordType, PASSWORD_TYPE_METADATA, VALID_PASSWORD_TYPES,
                             ValidationResult, RANGE, iter_config_problems,
                             to_password_type)
from .charset import build_custom_charset, validate_charset
from .template import validate_template
from .ports import resolve_ports


class GenerationResult(NamedTuple):
    password: object  # str, or HoneywordSet for honeyword type
    entropy: float
    security_level: entropy.SecurityLevel
    metadata: dict


class PasswordService:

    """Uniform entry point to all generation strategies.

    Holds only the ports given on construction, every call gets
    its own configuration. Nothing is cached between calls.

    """

    def __init__(self, ports):
        self._ports = ports

    def _resolve(self, config) -> PasswordConfig:
        """Normalize `config` and check its structure.

        :raises RangeError: length/iteration out of bounds
        :raises ConfigurationError: anything else

        """
        config = PasswordConfig.from_mapping(config)
        ptype = to_password_type(config.type)
        if ptype is None:
            raise UnknownTypeError(config.type, VALID_PASSWORD_TYPES)
        metadata = PASSWORD_TYPE_METADATA[ptype]
        changes = {'type': ptype.value}
        if metadata.uses_length and config.length is None:
            changes['length'] = metadata.default_length
        config = config.replace(**changes)
        for kind, message in iter_config_problems(ptype, config):
            if kind == RANGE:
                raise RangeError(message)
            raise ConfigurationError(message)
        return config

    async def generate(self, config, include_entropy=False):
        """Generate password for `config`.

        :param config: PasswordConfig or mapping with the same keys
        :param include_entropy: return GenerationResult instead of bare password
        :returns: password (str), HoneywordSet for honeyword type,
                  or GenerationResult

        """
        config = self._resolve(config)
        logger = self._ports.logger
        if config.type == PasswordType.QUANTUM.value:
            bits = entropy.fixed_charset_entropy(config)
            if bits < QUANTUM_ENTROPY_TARGET_BITS:
                logger.warn(f"Total entropy ({bits:.1f} bits) is below quantum-resistant "
                            f"target ({QUANTUM_ENTROPY_TARGET_BITS} bits).")
        logger.debug("Generating password", type=config.type)
        password = await dispatch(config, self._ports.random_generator, self._ports.dictionary)
        if not include_entropy:
            return password
        bits = entropy.normalize_entropy(password, config.type,
                                         await self._entropy_config(config))
        return GenerationResult(
            password=password,
            entropy=bits,
            security_level=entropy.get_security_level(bits),
            metadata={
                'type': config.type,
                'length': len(str(password)),
                'config': config,
                'generated_at': self._ports.clock.now(),
            },
        )

    async def _entropy_config(self, config) -> PasswordConfig:
        """Memorable entropy depends on the size of the dictionary actually used."""
        if config.type == PasswordType.MEMORABLE.value and config.dictionary_size is None:
            word_count = await self._ports.dictionary.get_word_count()
            return config.replace(dictionary_size=word_count)
        return config

    async def generate_multiple(self, configs, include_entropy=False) -> list:
        """Generate one password per config, in order, one after another."""
        results = []
        for config in configs:
            results.append(await self.generate(config, include_entropy))
        return results

    def calculate_entropy(self, config) -> entropy.EntropyResult:
        return entropy.calculate_entropy(config)

    def validate_config(self, config) -> ValidationResult:
        """Check `config` without generating. Never raises for bad input."""
        if config is None:
            return ValidationResult(False, ["Configuration is required"])
        if isinstance(config, PasswordConfig):
            type_ = config.type
        elif isinstance(config, Mapping):
            type_ = config.get('type')
        else:
            return ValidationResult(False, [
                f"Configuration must be a mapping, got {type(config).__name__}"])
        if not type_:
            return ValidationResult(False, [TYPE_REQUIRED])
        if to_password_type(type_) is None:
            return ValidationResult(False, [unknown_type(type_, VALID_PASSWORD_TYPES)])
        try:
            config = PasswordConfig.from_mapping(config)
        except (ConfigurationError, TypeError) as e:
            return ValidationResult(False, [str(e)])
        ptype = to_password_type(type_)
        errors = [message for _kind, message in iter_config_problems(ptype, config)]
        if not errors and ptype is PasswordType.TEMPLATE:
            errors.extend(validate_template(config.template).errors)
        elif not errors and ptype is PasswordType.CUSTOM:
            try:
                descriptor = build_custom_charset(config.allowed_chars, config.forbidden_chars)
            except ConfigurationError as e:
                errors.append(str(e))
            else:
                errors.extend(validate_charset(descriptor.charset).errors)
        return ValidationResult(not errors, errors)

    def get_supported_types(self) -> list:
        return list(VALID_PASSWORD_TYPES)

    def get_generator(self, type_):
        """Registry entry for `type_`, None if unknown."""
        try:
            return get_generator(type_)
        except UnknownTypeError:
            return None

    def get_ports(self):
        return self._ports


def create_service(random_generator, logger=None, storage=None, clock=None,
                   dictionary=None, validate_on_init=True) -> PasswordService:
    """Create PasswordService. Omitted optional ports get fresh defaults.

    :raises PortError: when `validate_on_init` and a port is unusable

    """
    ports = resolve_ports(random_generator, logger, storage, clock, dictionary,
                          validate=validate_on_init)
    return PasswordService(ports)

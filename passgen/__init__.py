"""Password generation with comparable entropy estimates.

Example::

    import asyncio
    from passgen import create_service
    from passgen.adapters import SecureRandom

    service = create_service(SecureRandom())
    password = asyncio.run(service.generate({'type': 'strong', 'length': 16, 'iteration': 4}))

"""

from .builder import PasswordBuilder, PasswordPresets, create_password_builder
from .charset import CharsetDescriptor, build_custom_charset, validate_charset
from .config import PasswordConfig
from .entropy import (EntropyResult, SecurityLevel, normalize_entropy, get_security_level,
                      calculate_entropy)
from .errors import (PasswordGeneratorError, RangeError, ConfigurationError,
                     UnknownTypeError, EmptyCharsetError, TemplateSyntaxError,
                     DictionarySizeError, DictionaryNotReadyError, PortError)
from .generators import GENERATOR_REGISTRY, HoneywordSet, generate, get_generator
from .password_types import PasswordType, VALID_PASSWORD_TYPES
from .ports import (RandomGeneratorPort, DictionaryPort, LoggerPort, ClockPort, StoragePort,
                    NoOpLogger, MemoryStorage, FixedClock, MemoryDictionary, DEFAULT_WORD_LIST)
from .service import PasswordService, GenerationResult, create_service
from .template import parse_template, validate_template, calculate_template_entropy

__version__ = '1.0.0'

# config
# (password configuration record, user config file)
#

import sys
import configparser
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigurationError, TYPE_REQUIRED

DATA_DIR = Path('~/.passgen')
DEFAULT_CONFIG_FILE = DATA_DIR / 'passgen.conf'


@dataclass(frozen=True)
class PasswordConfig:

    """Parameters of one generation request.

    `length` None means "default length of the type",
    it's filled in by the service before generating.

    """

    type: str
    length: Optional[int] = None
    iteration: int = 1
    separator: str = '-'
    allowed_chars: Optional[str] = None
    forbidden_chars: str = ''
    template: Optional[str] = None
    dictionary_size: Optional[int] = None
    transforms: Mapping[str, bool] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> 'PasswordConfig':
        if isinstance(mapping, cls):
            return mapping
        if mapping is None:
            raise ConfigurationError("Configuration is required")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        if not mapping.get('type'):
            raise ConfigurationError(TYPE_REQUIRED)
        return cls(**mapping)

    def replace(self, **changes) -> 'PasswordConfig':
        return dataclasses.replace(self, **changes)


class UserConfig:

    """Defaults read from INI file, section [passgen]."""

    INT_KEYS = ('length', 'iteration')
    STR_KEYS = ('type', 'separator', 'wordlist')

    def __init__(self, config_file=None):
        self.values = {}
        if config_file is not None:
            self.load(config_file)

    def load(self, config_file):
        config_file = Path(config_file).expanduser()
        config = configparser.ConfigParser(interpolation=None)
        config.read(config_file, encoding='utf-8')
        for section in config.sections():
            if section != 'passgen':
                print(f"WARNING: unknown section {section!r} in config {str(config_file)!r}",
                      file=sys.stderr)
                continue
            section = config[section]
            for key in section:
                if key in self.INT_KEYS:
                    try:
                        self.values[key] = section.getint(key)
                    except ValueError:
                        print(f"WARNING: {key!r} is not a number in config {str(config_file)!r}",
                              file=sys.stderr)
                elif key in self.STR_KEYS:
                    self.values[key] = section[key]
                else:
                    print(f"WARNING: unknown key [{section.name!r}] {key!r} "
                          f"in config {str(config_file)!r}", file=sys.stderr)

    def get(self, key, override=None, default=None):
        if override is not None:
            return override
        return self.values.get(key, default)

    @property
    def wordlist(self):
        path = self.values.get('wordlist')
        return Path(path).expanduser() if path else None

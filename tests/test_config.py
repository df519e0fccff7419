import dataclasses

import pytest

from passgen.config import PasswordConfig, UserConfig
from passgen.errors import ConfigurationError


def test_password_config():
    config = PasswordConfig('strong')
    assert config.length is None
    assert config.iteration == 1
    assert config.separator == '-'
    assert config.forbidden_chars == ''
    changed = config.replace(length=8)
    assert changed.length == 8
    assert config.length is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.length = 5


def test_from_mapping():
    config = PasswordConfig.from_mapping({'type': 'custom', 'length': 8, 'allowed_chars': 'ab'})
    assert config == PasswordConfig('custom', length=8, allowed_chars='ab')
    assert PasswordConfig.from_mapping(config) is config
    with pytest.raises(ConfigurationError):
        PasswordConfig.from_mapping({'type': 'strong', 'lenght': 8})
    with pytest.raises(ConfigurationError):
        PasswordConfig.from_mapping({'length': 8})
    with pytest.raises(ConfigurationError):
        PasswordConfig.from_mapping(None)


def test_user_config(tmp_path, capsys):
    config_file = tmp_path / 'passgen.conf'
    config_file.write_text("[passgen]\n"
                           "type = diceware\n"
                           "iteration = 6\n"
                           "length = many\n"
                           "separator = .\n"
                           "colour = red\n"
                           "wordlist = ~/words.txt\n"
                           "[other]\n"
                           "x = 1\n")
    cfg = UserConfig(config_file)
    assert cfg.get('type') == 'diceware'
    assert cfg.get('type', 'strong') == 'strong'
    assert cfg.get('iteration') == 6
    assert cfg.get('length', default=16) == 16
    assert cfg.get('separator') == '.'
    assert cfg.wordlist.name == 'words.txt'
    assert not str(cfg.wordlist).startswith('~')
    err = capsys.readouterr().err
    assert "'length' is not a number" in err
    assert "unknown key" in err and "'colour'" in err
    assert "unknown section 'other'" in err


def test_user_config_missing(tmp_path):
    cfg = UserConfig(tmp_path / 'missing.conf')
    assert cfg.values == {}
    assert cfg.wordlist is None
    assert UserConfig().get('type', default='strong') == 'strong'

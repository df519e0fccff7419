# errors
# (exception taxonomy and message templates)
#


def must_be_positive_integer(name):
    return f"The {name} argument must be a positive integer"


EMPTY_CHARSET = "Character set must not be empty"
TYPE_REQUIRED = "Password type is required"
CONFIG_REQUIRED = "Configuration is required for entropy calculation"


def unknown_type(type_, valid_types=()):
    msg = f"Unknown password type: {type_!r}"
    if valid_types:
        msg += f". Valid types: {', '.join(valid_types)}"
    return msg


def missing_ports(missing, required):
    return f"Missing required ports: {', '.join(missing)}. " \
           f"Required ports: {', '.join(required)}"


def invalid_port(port_name, expected_class):
    return f"{port_name}: Missing required methods for {expected_class}"


class PasswordGeneratorError(Exception):

    """Base class for all errors raised by passgen."""


class RangeError(PasswordGeneratorError, ValueError):

    """A numeric parameter is missing, not an integer or out of bounds."""

    def __init__(self, msg, name=None):
        PasswordGeneratorError.__init__(self, msg)
        self.name = name


class ConfigurationError(PasswordGeneratorError, ValueError):

    """The configuration itself is invalid."""


class UnknownTypeError(ConfigurationError):

    def __init__(self, type_, valid_types=()):
        ConfigurationError.__init__(self, unknown_type(type_, valid_types))
        self.type = type_
        self.valid_types = tuple(valid_types)


class EmptyCharsetError(ConfigurationError):

    def __init__(self, msg=EMPTY_CHARSET):
        ConfigurationError.__init__(self, msg)


class TemplateSyntaxError(ConfigurationError):

    """Template could not be parsed. `position` is the offending index."""

    def __init__(self, msg, position=None):
        ConfigurationError.__init__(self, msg)
        self.position = position


class DictionarySizeError(ConfigurationError):

    def __init__(self, actual, expected):
        ConfigurationError.__init__(
            self, f"Invalid diceware dictionary size: {actual}. Expected {expected} words.")
        self.actual = actual
        self.expected = expected


class DictionaryNotReadyError(PasswordGeneratorError, RuntimeError):

    """The dictionary port is empty or was not loaded.

    This is a problem of the collaborator, not of the configuration.

    """


class PortError(PasswordGeneratorError, TypeError):

    def __init__(self, errors):
        PasswordGeneratorError.__init__(self, "Port validation failed: " + "; ".join(errors))
        self.errors = list(errors)

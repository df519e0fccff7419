import sys
import asyncio
import argparse

from blessed import Terminal
import pyperclip

from . import backend
from .adapters import SecureRandom, WordlistDictionary, ConsoleLogger, SystemClock
from .config import PasswordConfig, UserConfig, DEFAULT_CONFIG_FILE
from .entropy import SecurityLevel
from .errors import PasswordGeneratorError
from .generators import HoneywordSet
from .password_types import PasswordType, PASSWORD_TYPE_METADATA, VALID_PASSWORD_TYPES
from .service import create_service

DEFAULT_TYPE = PasswordType.STRONG.value

LEVEL_STYLE = {
    SecurityLevel.WEAK: 'bright_red',
    SecurityLevel.MODERATE: 'yellow',
    SecurityLevel.GOOD: 'green',
    SecurityLevel.STRONG: 'bright_green',
    SecurityLevel.EXCELLENT: 'bright_blue',
}


def load_user_config(config_file):
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE.expanduser()
        if not config_file.exists():
            return UserConfig()
    return UserConfig(config_file)


def build_config(cfg, type, length, iteration, separator, allowed, forbidden, template):
    return PasswordConfig(
        type=cfg.get('type', type, DEFAULT_TYPE),
        length=cfg.get('length', length),
        iteration=cfg.get('iteration', iteration, 1),
        separator=cfg.get('separator', separator, '-'),
        allowed_chars=allowed,
        forbidden_chars=forbidden or '',
        template=template,
    )


def build_service(cfg, wordlist, verbose=False):
    logger = ConsoleLogger('debug' if verbose else 'warn')
    logger.debug("Random bytes from backend", backend=backend.backend_name)
    return create_service(
        SecureRandom(),
        logger=logger,
        clock=SystemClock(),
        dictionary=WordlistDictionary(wordlist or cfg.wordlist),
    )


def positive_int(value):
    """Argument type for counts, rejects zero and negative numbers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def format_level(term, level):
    return getattr(term, LEVEL_STYLE[level])(str(level))


def run_generate(config_file, type, length, iteration, separator, allowed, forbidden,
                 template, wordlist, count, show_entropy, copy, verbose):
    cfg = load_user_config(config_file)
    config = build_config(cfg, type, length, iteration, separator, allowed, forbidden, template)
    service = build_service(cfg, wordlist, verbose)
    results = asyncio.run(service.generate_multiple([config] * count,
                                                    include_entropy=show_entropy))
    term = Terminal()
    password = None
    for result in results:
        password = result.password if show_entropy else result
        if isinstance(password, HoneywordSet):
            for n, pw in enumerate(password.passwords):
                marker = term.bold('*') if n == password.metadata.real_password_index else ' '
                print(marker, pw)
            password = password.real_password
        else:
            print(password)
        if show_entropy:
            print(term.bold("entropy:"), f"{result.entropy:.2f} bits",
                  format_level(term, result.security_level))
    if copy and password is not None:
        pyperclip.copy(password)
        print("(copied to clipboard)", file=sys.stderr)


def run_entropy(config_file, type, length, iteration, separator, allowed, forbidden,
                template, wordlist, count, show_entropy, copy, verbose):
    cfg = load_user_config(config_file)
    config = build_config(cfg, type, length, iteration, separator, allowed, forbidden, template)
    service = build_service(cfg, wordlist, verbose)
    validation = service.validate_config(config)
    for error in validation.errors:
        print(f"Warning: {error}", file=sys.stderr)
    result = service.calculate_entropy(config)
    term = Terminal()
    print(term.bold("type:    "), config.type)
    print(term.bold("entropy: "), f"{result.total_bits:.2f} bits "
                                  f"({result.per_unit:.2f} bits per unit)")
    print(term.bold("level:   "), format_level(term, result.security_level))
    print(result.recommendation)


def run_types():
    term = Terminal()
    for type_ in VALID_PASSWORD_TYPES:
        metadata = PASSWORD_TYPE_METADATA[PasswordType(type_)]
        print(term.bold(type_.ljust(20)), metadata.description)


def parse_args(argv=None):
    """Process command line args."""
    ap = argparse.ArgumentParser(prog="passgen",
                                 description="Password generator",
                                 formatter_class=argparse.RawTextHelpFormatter)

    sp = ap.add_subparsers()
    ap_generate = sp.add_parser("generate", aliases=['gen'],
                                help="generate passwords (default)")
    ap_generate.set_defaults(func=run_generate)
    ap_entropy = sp.add_parser("entropy", help="estimate entropy of a configuration")
    ap_entropy.set_defaults(func=run_entropy)
    ap_types = sp.add_parser("types", help="list password types")
    ap_types.set_defaults(func=run_types)

    for subparser in (ap_generate, ap_entropy):
        subparser.add_argument('-c', '--config', dest='config_file',
                               help=f"config file (default: {DEFAULT_CONFIG_FILE})")
        subparser.add_argument('-t', '--type', choices=VALID_PASSWORD_TYPES,
                               help=f"password type (default: {DEFAULT_TYPE})")
        subparser.add_argument('-l', '--length', type=int,
                               help="characters per chunk (default depends on type)")
        subparser.add_argument('-i', '--iteration', type=int,
                               help="number of chunks, words or syllables (default: 1)")
        subparser.add_argument('-s', '--separator',
                               help="separator between chunks (default: '-')")
        subparser.add_argument('--allowed',
                               help="custom: allowed characters or set names, "
                                    "e.g. 'UPPERCASE,DIGITS,!@#'")
        subparser.add_argument('--forbidden',
                               help="custom: characters to exclude")
        subparser.add_argument('--template',
                               help="template: e.g. '[A-Z]{3}-[0-9]{4}'")
        subparser.add_argument('-w', '--wordlist',
                               help="wordlist file for memorable/diceware "
                                    "(default: EFF large wordlist)")
        subparser.add_argument('-v', '--verbose', action='store_true',
                               help="print debug messages")

    ap_generate.add_argument('-n', dest='count', type=positive_int, default=1,
                             help="number of passwords to generate (default: %(default)s)")
    ap_generate.add_argument('-e', '--entropy', dest='show_entropy', action='store_true',
                             help="print entropy and security level")
    ap_generate.add_argument('--copy', action='store_true',
                             help="copy the (last) password to clipboard")
    ap_entropy.set_defaults(count=1, show_entropy=True, copy=False)

    args = ap.parse_args(args=argv)

    if 'func' not in args:
        ap_generate.parse_args(args=[], namespace=args)

    return args


def main(argv=None):
    """Main program

    :param argv: Used in tests. Default is sys.argv
    :return: exit status

    """
    args = parse_args(argv)
    run_func = args.func
    delattr(args, 'func')
    try:
        run_func(**vars(args))
    except (PasswordGeneratorError, backend.MissingError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

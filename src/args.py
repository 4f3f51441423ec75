"""Argument parsing for the intern front-end.

The parser is generated from the command registry after the adapters have
run. Before parsing, argv is pre-scanned: global verbose flags are pulled
out and, when no command is named, the default command is inserted.
"""

import argparse
import re
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from commands import Command, CommandRegistry
from constants import Constants, ExitCodes

DESCRIPTION = (
    "Run JavaScript tests. If no command is given, Intern is run using the "
    "default test config.  Run `intern help run` for run options."
)

_ARGUMENT_RE = re.compile(r"^(?P<open>[<\[])(?P<name>[^\]>]+?)(?P<variadic>\.\.\.)?[>\]]$")


class CliArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with the front-end's fatal code."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.FATAL.value, f"{self.prog}: error: {message}\n")


def _metavar(value: str) -> str:
    return re.sub(r"\s+", "-", value.strip("<>[]").strip())


def _add_positionals(parser: argparse.ArgumentParser, command: Command) -> None:
    for token in command.arguments.split():
        m = _ARGUMENT_RE.match(token)
        if not m:
            raise ValueError(f"Invalid argument declaration {token!r} for command '{command.name}'")
        required = m.group("open") == "<"
        if m.group("variadic"):
            nargs = "+" if required else "*"
        else:
            nargs = None if required else "?"
        parser.add_argument(m.group("name"), nargs=nargs)


def _add_options(parser: argparse.ArgumentParser, command: Command) -> None:
    for opt in command.options:
        kwargs = {"dest": opt.dest, "help": opt.description}
        if opt.takes_value:
            kwargs["metavar"] = _metavar(opt.value)
            kwargs["default"] = opt.default
            if opt.transform is not None:
                kwargs["type"] = opt.transform
            if not opt.value_required:
                kwargs["nargs"] = "?"
                kwargs["const"] = True
            if opt.default is not None:
                kwargs["help"] = f"{opt.description} (default: {opt.default})"
        else:
            kwargs["action"] = "store_true"
            kwargs["default"] = bool(opt.default)
        parser.add_argument(*opt.names, **kwargs)


def build_parser(
    registry: CommandRegistry,
    version: str = Constants.CLI_VERSION,
) -> Tuple[argparse.ArgumentParser, Dict[str, argparse.ArgumentParser]]:
    """Build the top-level parser and one sub-parser per visible command."""
    parser = CliArgumentParser(
        prog=Constants.PROG_NAME,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version",
                        action="version",
                        version=version)
    parser.add_argument(*Constants.VERBOSE_FLAGS,
                        dest="verbose",
                        help="show more information about what Intern is doing",
                        action="store_true")

    sub = parser.add_subparsers(
        dest="subcommand",
        title="commands",
        metavar="<command>",
        parser_class=CliArgumentParser,
    )
    subparsers: Dict[str, argparse.ArgumentParser] = {}
    for command in registry.visible():
        child = sub.add_parser(
            command.name,
            help=command.description,
            description=command.description,
            epilog=command.help_text,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _add_positionals(child, command)
        _add_options(child, command)
        subparsers[command.name] = child
    return parser, subparsers


def extract_global_flags(argv: Sequence[str]) -> Tuple[bool, List[str]]:
    """Remove ``-v``/``--verbose`` from argv (before any ``--``).

    Returns:
        (verbose, remaining argv)
    """
    verbose = False
    remaining: List[str] = []
    passthrough = False
    for token in argv:
        if passthrough:
            remaining.append(token)
            continue
        if token == "--":
            passthrough = True
            remaining.append(token)
        elif token in Constants.VERBOSE_FLAGS:
            verbose = True
        else:
            remaining.append(token)
    return verbose, remaining


def command_index(argv: Sequence[str]) -> Optional[int]:
    """Index of the command name in argv, or None when no command is given."""
    for i, token in enumerate(argv):
        if token in Constants.VERBOSE_FLAGS:
            continue
        if token.startswith("-"):
            return None
        return i
    return None


def requests_help(argv: Sequence[str]) -> bool:
    """True when the first non-global token asks for help or the version."""
    for token in argv:
        if token in Constants.VERBOSE_FLAGS:
            continue
        return token in Constants.HELP_FLAGS or token == Constants.VERSION_FLAG
    return False


def inject_default_command(argv: Sequence[str], default: str = Constants.DEFAULT_COMMAND) -> List[str]:
    """Insert ``default`` when argv names no command and asks for no help."""
    argv = list(argv)
    if command_index(argv) is not None or requests_help(argv):
        return argv
    insert_at = 0
    while insert_at < len(argv) and argv[insert_at] in Constants.VERBOSE_FLAGS:
        insert_at += 1
    argv.insert(insert_at, default)
    return argv

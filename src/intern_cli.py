"""intern - command-line front-end for the Intern test runner

Locates the project's local Intern install, selects the command adapter for
its version, and runs the requested command.

    Returns:
        int: Exit code
"""
import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from args import build_parser, command_index, extract_global_flags, inject_default_command
from bootstrap import bootstrap
from cli_config import CliConfig, load_config
from cli_context import Context
from cli_registry import register_base_commands
from commands import CommandRegistry
from common.console import die
from common.logging_utils import configure_logging, extra_context, get_verbose_logger, is_debug_enabled
from constants import BROWSERS, Constants, ExitCodes
from dispatch import dispatch
from errors import CliError, UnknownCommand
from versioning.resolver import resolve_dependency

__version__ = Constants.CLI_VERSION

logger = logging.getLogger(__name__)


def create_context(config: CliConfig, verbose: bool = False, cwd: Optional[str] = None) -> Context:
    """Resolve the runner (bootstrapping once if needed) and build the context.

    Raises:
        DependencyNotFound: If the runner is missing even after the prompt.
    """
    registry = register_base_commands(CommandRegistry(), config.tests_dir)
    cwd = cwd or os.getcwd()
    resolved = bootstrap(
        lambda: resolve_dependency(Constants.DEPENDENCY_NAME, cwd, config.package_manager),
        package_manager=config.package_manager,
    )
    return Context(
        browsers=BROWSERS,
        commands=registry,
        vlog=get_verbose_logger(verbose),
        intern_dir=resolved.directory,
        intern_pkg=resolved.metadata,
        config=config,
    )


def prepare_commands(context: Context) -> None:
    """Dispatch to the version adapter, then sort, freeze and build parsers."""
    dispatch(context)
    context.commands.sort_options()
    context.commands.freeze()
    context.parser, context.subparsers = build_parser(context.commands)


def execute(context: Context, argv: Sequence[str]) -> int:
    """Parse ``argv`` against the registry and run exactly one action."""
    index = command_index(argv)
    if index is not None:
        try:
            context.commands.lookup(argv[index])
        except UnknownCommand as e:
            catch_all = context.commands.catch_all
            return int(catch_all.action(argparse.Namespace(name=e.name), context) or 0)

    args = context.parser.parse_args(list(argv))
    if not args.subcommand:
        context.parser.print_help()
        return ExitCodes.SUCCESS.value

    command = context.commands.lookup(args.subcommand)
    if is_debug_enabled(logger):
        logger.debug(
            "Executing command",
            extra=extra_context(event="function_entry", component="cli", action="execute", target=command.name),
        )
    result = command.action(args, context)
    return ExitCodes.SUCCESS.value if result is None else int(result)


def run_cli(argv: Sequence[str], config: Optional[CliConfig] = None, cwd: Optional[str] = None) -> int:
    """Run the whole front-end for ``argv`` and return the exit code."""
    verbose, argv = extract_global_flags(argv)
    config = config or load_config(cwd)
    configure_logging(config.log_level, verbose)

    context = create_context(config, verbose, cwd)
    prepare_commands(context)
    return execute(context, inject_default_command(argv, config.default_command))


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        exit_code = run_cli(argv)
    except CliError as e:
        die(e.lines, e.exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = ExitCodes.INTERRUPTED.value
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("%s", e)
        if is_debug_enabled(logger):
            logger.debug("Unhandled error", exc_info=True)
        exit_code = ExitCodes.FATAL.value
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

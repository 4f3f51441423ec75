"""Commands registered by the front-end before any adapter runs.

``init``, ``run`` and ``serve`` are declared here with the options shared by
every runner version; the selected adapter supplies their actions and may
add options of its own.
"""

import logging

from commands import CommandRegistry, enum_arg, int_arg
from common.console import print_lines
from constants import BROWSERS, Constants, ExitCodes

logger = logging.getLogger(__name__)


def _version(args, context):
    lines = [f"intern-cli: {Constants.CLI_VERSION}"]
    if context.intern_dir:
        lines.append(f"intern: {context.intern_version}")
    if getattr(args, "check", False):
        from registry.npm import fetch_dist_tags  # pylint: disable=import-outside-toplevel
        tags = fetch_dist_tags(Constants.DEPENDENCY_NAME, context.config.registry_url)
        if tags:
            lines.append("")
            lines.append("published:")
            lines.extend(f"  {tag}: {version}" for tag, version in sorted(tags.items()))
    print_lines()
    print_lines(lines + [""])
    return ExitCodes.SUCCESS.value


def _help(args, context):
    name = args.command if isinstance(args.command, str) else ""
    child = context.subparsers.get(name)
    if child is not None:
        child.print_help()
        print_lines()
        return ExitCodes.SUCCESS.value

    if name:
        print_lines(f"Unknown command: {name}")
        print_lines()
    print_lines(
        "To get started with Intern, run `intern init` to setup a "
        f'"{context.tests_dir}" directory and then run `intern` to start testing!'
    )
    print_lines()
    context.parser.print_help()
    print_lines()
    return ExitCodes.SUCCESS.value


def _unknown(args, context):
    print_lines(f"Unknown command: {args.name}")
    print_lines()
    context.parser.print_help()
    return ExitCodes.FATAL.value


def _unsupported(args, context):
    logger.error(
        "The %s command is not available for intern %s",
        args.subcommand,
        context.intern_version,
    )
    return ExitCodes.FATAL.value


def register_base_commands(registry: CommandRegistry, tests_dir: str = Constants.TESTS_DIR) -> CommandRegistry:
    """Populate ``registry`` with the version-independent commands."""
    registry.command("version", "Show versions of intern-cli and intern") \
        .option("-c, --check", "also show the versions published to the npm registry") \
        .set_action(_version)

    registry.command("help", "Get help for a command", "[command]").set_action(_help)

    browser_names = list(BROWSERS)
    registry.command(
        "init",
        "Setup a project for testing with Intern",
        help_text="\n".join([
            f'This command creates a "{tests_dir}" directory with a default Intern '
            "config file and some sample tests.",
            "",
            "Browser names:",
            "",
            f"  {', '.join(browser_names)}",
        ]),
    ).option(
        "-b, --browser <browser>",
        "browser to use for functional tests",
        lambda val: enum_arg(browser_names, val),
        Constants.DEFAULT_BROWSER,
    ).set_action(_unsupported)

    registry.command("run", "Run tests in Node or in a browser using WebDriver", "[args...]") \
        .option("-b, --bail", "quit after the first failing test") \
        .option("-g, --grep <regex>", "filter tests by ID") \
        .option("-l, --leaveRemoteOpen", "leave the remote browser open after tests finish") \
        .option("-p, --port <port>", "port that test proxy should serve on", int_arg) \
        .option("-I, --noInstrument", "disable instrumentation") \
        .option("--debug", "enable the Node debugger") \
        .option("--serveOnly", "start Intern's test server, but don't run any tests") \
        .option("--timeout <int>", "set the default timeout for async tests", int_arg) \
        .option("--tunnel <name>", "use the given tunnel for WebDriver tests") \
        .option("-w, --webdriver", "run WebDriver tests only") \
        .set_action(_unsupported)

    registry.command(
        "serve",
        "Start a simple web server for running unit tests in a browser on your system",
        "[args...]",
        help_text=(
            "When running WebDriver tests, Intern runs a local server to serve "
            "itself and the test files to the browser(s) running the tests.\n"
            "This server can also be used instead of a dedicated web server such "
            "as nginx or Apache for running unit tests locally."
        ),
    ).option("-c, --config <module ID|file>", f"config file to use (default is {tests_dir}/intern.js)") \
        .option("-o, --open", "open the test runner URL when the server starts") \
        .option("-p, --port <port>", "port to serve on", int_arg) \
        .option("-I, --noInstrument", "disable instrumentation") \
        .set_action(_unsupported)

    registry.command(Constants.CATCH_ALL_COMMAND, hidden=True).set_action(_unknown)
    return registry

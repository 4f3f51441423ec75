"""Command actions for Intern 3.x.

Intern 3 is configured with an AMD module (``tests/intern.js``) and started
through ``client.js`` (Node unit tests) or ``runner.js`` (WebDriver and the
test proxy), with ``key=value`` arguments.
"""

from __future__ import annotations

import argparse
import os
from typing import List

from common.console import print_lines
from constants import Constants, ExitCodes

from .runner import (
    browser_note,
    ensure_dir,
    node_command,
    require_intern_dir,
    run_node,
    write_if_missing,
)

MIN_VERSION = "3.0.0"
MAX_VERSION = "3.99.99"

_CONFIG_TEMPLATE = """\
define({{
	proxyPort: {port},
	proxyUrl: 'http://localhost:{port}/',

	environments: [
		{{ browserName: '{browser}' }}
	],

	tunnel: 'NullTunnel',

	suites: [ '{tests}/unit/all' ],
	functionalSuites: [ '{tests}/functional/all' ],

	excludeInstrumentation: /^(?:{tests}|node_modules)\\//
}});
"""

_SUITE_TEMPLATE = """\
define([
], function () {{
	// {kind} test modules for this project
}});
"""


def _config_module(context) -> str:
    return f"{context.tests_dir}/intern"


def _runner_args(args: argparse.Namespace, context) -> List[str]:
    config = getattr(args, "config", None) or _config_module(context)
    runner_args = [f"config={config}"]
    if getattr(args, "bail", False):
        runner_args.append("bail=true")
    if getattr(args, "grep", None):
        runner_args.append(f"grep={args.grep}")
    if getattr(args, "leaveRemoteOpen", False):
        runner_args.append("leaveRemoteOpen=true")
    if getattr(args, "port", None) is not None:
        runner_args.append(f"proxyPort={args.port}")
    if getattr(args, "noInstrument", False):
        runner_args.append("excludeInstrumentation=true")
    if getattr(args, "timeout", None) is not None:
        runner_args.append(f"defaultTimeout={args.timeout}")
    if getattr(args, "tunnel", None):
        runner_args.append(f"tunnel={args.tunnel}")
    runner_args.extend(getattr(args, "args", None) or [])
    return runner_args


def init(args: argparse.Namespace, context) -> int:
    """Create ``<tests>/intern.js`` and empty suite modules."""
    tests_dir = context.tests_dir
    browser = args.browser
    vlog = context.vlog

    ensure_dir(tests_dir, vlog)
    for kind in ("unit", "functional"):
        suite_dir = os.path.join(tests_dir, kind)
        ensure_dir(suite_dir, vlog)
        write_if_missing(os.path.join(suite_dir, "all.js"), _SUITE_TEMPLATE.format(kind=kind), vlog)

    config_path = os.path.join(tests_dir, "intern.js")
    write_if_missing(
        config_path,
        _CONFIG_TEMPLATE.format(port=Constants.DEFAULT_SERVER_PORT, browser=browser, tests=tests_dir),
        vlog,
    )

    print_lines()
    print_lines([
        f'Intern 3 has been configured in "{tests_dir}" using {context.browsers[browser]["name"]}.',
        *browser_note(context, browser),
        "",
        "Run `intern` to run the unit tests in Node, or `intern run -w` to",
        "run all tests with WebDriver.",
        "",
    ])
    return ExitCodes.SUCCESS.value


def run(args: argparse.Namespace, context) -> int:
    intern_dir = require_intern_dir(context)
    if getattr(args, "serveOnly", False):
        return serve(args, context)
    script = "runner.js" if getattr(args, "webdriver", False) else "client.js"
    cmd = node_command(
        os.path.join(intern_dir, script),
        _runner_args(args, context),
        debug=getattr(args, "debug", False),
    )
    return run_node(cmd, context.vlog)


def serve(args: argparse.Namespace, context) -> int:
    """Start the Intern 3 test proxy without running tests."""
    intern_dir = require_intern_dir(context)
    port = getattr(args, "port", None)
    if port is None:
        port = Constants.DEFAULT_SERVER_PORT
    config = getattr(args, "config", None) or _config_module(context)
    runner_args = _runner_args(args, context) + ["proxyOnly"]
    open_url = None
    if getattr(args, "open", False):
        open_url = f"http://localhost:{port}/__intern/client.html?config={config}"
    cmd = node_command(os.path.join(intern_dir, "runner.js"), runner_args, debug=getattr(args, "debug", False))
    return run_node(cmd, context.vlog, open_url=open_url)


def register(context) -> None:
    """Attach the Intern 3 actions to the registered commands."""
    commands = context.commands
    commands.get("init").set_action(init)
    commands.get("run").set_action(run)
    commands.get("serve").set_action(serve)

"""Command actions for Intern 4.x.

Intern 4 reads ``intern.json`` from the project root and is started through
``bin/intern.js``. This adapter also adds the Intern 4 specific ``run``
options.
"""

from __future__ import annotations

import argparse
import json
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

# Includes the 4.0.0 pre-releases.
MIN_VERSION = "4.0.0-0"
MAX_VERSION = "4.99.99"

CONFIG_FILE = "intern.json"


def _script(context) -> str:
    return os.path.join(require_intern_dir(context), "bin", "intern.js")


def _runner_args(args: argparse.Namespace) -> List[str]:
    runner_args = []
    if getattr(args, "config", None):
        runner_args.append(f"config={args.config}")
    if getattr(args, "bail", False):
        runner_args.append("bail")
    if getattr(args, "grep", None):
        runner_args.append(f"grep={args.grep}")
    if getattr(args, "leaveRemoteOpen", False):
        runner_args.append("leaveRemoteOpen")
    if getattr(args, "port", None) is not None:
        runner_args.append(f"serverPort={args.port}")
    if getattr(args, "noInstrument", False):
        runner_args.append("coverage=false")
    if getattr(args, "timeout", None) is not None:
        runner_args.append(f"defaultTimeout={args.timeout}")
    if getattr(args, "tunnel", None):
        runner_args.append(f"tunnel={args.tunnel}")
    if getattr(args, "node", False):
        runner_args.append("environments=node")
    if getattr(args, "webdriver", False):
        # Functional suites only ever run through WebDriver.
        runner_args.append("suites=")
    return runner_args


def build_config(tests_dir: str, browser: str) -> dict:
    return {
        "suites": f"{tests_dir}/unit/**/*.js",
        "functionalSuites": f"{tests_dir}/functional/**/*.js",
        "environments": ["node", {"browserName": browser}],
    }


def init(args: argparse.Namespace, context) -> int:
    """Create ``intern.json`` and the test directories."""
    tests_dir = context.tests_dir
    browser = args.browser
    vlog = context.vlog

    ensure_dir(tests_dir, vlog)
    ensure_dir(os.path.join(tests_dir, "unit"), vlog)
    ensure_dir(os.path.join(tests_dir, "functional"), vlog)
    write_if_missing(CONFIG_FILE, json.dumps(build_config(tests_dir, browser), indent=4) + "\n", vlog)

    print_lines()
    print_lines([
        f'Intern 4 has been configured in {CONFIG_FILE} using {context.browsers[browser]["name"]}.',
        *browser_note(context, browser),
        "",
        f'Add unit tests to "{tests_dir}/unit" and functional tests to',
        f'"{tests_dir}/functional", then run `intern`.',
        "",
    ])
    return ExitCodes.SUCCESS.value


def run(args: argparse.Namespace, context) -> int:
    runner_args = _runner_args(args)
    if getattr(args, "serveOnly", False):
        runner_args.append("serveOnly")
    runner_args.extend(getattr(args, "args", None) or [])
    cmd = node_command(_script(context), runner_args, debug=getattr(args, "debug", False))
    return run_node(cmd, context.vlog)


def serve(args: argparse.Namespace, context) -> int:
    """Start the Intern 4 server in serveOnly mode."""
    port = getattr(args, "port", None)
    if port is None:
        port = Constants.DEFAULT_SERVER_PORT
    runner_args = _runner_args(args) + ["serveOnly"]
    runner_args.extend(getattr(args, "args", None) or [])
    open_url = f"http://localhost:{port}/__intern/" if getattr(args, "open", False) else None
    cmd = node_command(_script(context), runner_args)
    return run_node(cmd, context.vlog, open_url=open_url)


def register(context) -> None:
    """Extend ``run`` with Intern 4 options and attach the actions."""
    commands = context.commands

    commands.get("run") \
        .option("-c, --config <file>", f"config file to use (default is {CONFIG_FILE})") \
        .option("-n, --node", "only run Node-based unit tests") \
        .set_action(run)
    commands.get("init") \
        .describe(f"Setup a project for testing with Intern 4 ({CONFIG_FILE})") \
        .set_action(init)
    commands.get("serve") \
        .describe_option("--config", f"config file to use (default is {CONFIG_FILE})") \
        .set_action(serve)

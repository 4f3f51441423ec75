"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FATAL = 1
    INTERRUPTED = 130


class InstallChannels(Enum):
    """Release channels offered by the install prompt.

    Args:
        Enum (string): npm dist-tag to install, or "no" to decline.
    """

    LATEST = "latest"
    NEXT = "next"
    NO = "no"


BROWSERS = {
    "chrome": {
        "name": "Chrome",
    },
    "firefox": {
        "name": "Firefox 47+",
    },
    "safari": {
        "name": "Safari",
        "note": (
            "Note that Safari currently requires that the Safari WebDriver "
            "extension be manually installed."
        ),
    },
    "internet explorer": {
        "name": "Internet Explorer",
    },
    "microsoftedge": {
        "name": "Microsoft Edge",
    },
}


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG_NAME = "intern"
    CLI_DIST_NAME = "intern-cli"
    DEPENDENCY_NAME = "intern"
    NODE_MODULES_DIR = "node_modules"
    PACKAGE_JSON_FILE = "package.json"
    CONFIG_FILE = ".interncli.yml"
    TESTS_DIR = "tests"
    DEFAULT_COMMAND = "run"
    DEFAULT_BROWSER = "chrome"
    PACKAGE_MANAGER = "npm"
    NODE_BINARY = "node"
    CATCH_ALL_COMMAND = "*"
    HELP_FLAGS = ("-h", "--help")
    VERSION_FLAG = "--version"
    VERBOSE_FLAGS = ("-v", "--verbose")
    DEFAULT_SERVER_PORT = 9000
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL = "WARNING"
    REQUEST_TIMEOUT = 10  # Timeout in seconds for registry lookups
    HTTP_RETRY_MAX = 2
    CLI_VERSION = "1.0.0"

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"

    ENV_CONFIG = "INTERN_CLI_CONFIG"
    ENV_LOG_LEVEL = "INTERN_CLI_LOG_LEVEL"
    ENV_PACKAGE_MANAGER = "INTERN_CLI_PACKAGE_MANAGER"

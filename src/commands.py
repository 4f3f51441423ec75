"""Command registry shared by the front-end and the version adapters.

Commands and their options are declared with commander-style flag strings
(``"-b, --browser <browser>"``). The registry is populated before argument
parsing, sorted once, then frozen.
"""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from constants import Constants
from errors import UnknownCommand

Action = Callable[[argparse.Namespace, Any], Optional[int]]

_FLAG_VALUE_RE = re.compile(r"^(?P<flags>[^<\[]*?)\s*(?P<value>[<\[].*[>\]])?\s*$")


@dataclass
class Option:
    """A single command option.

    ``transform`` doubles as validator: it receives the raw string and either
    returns the converted value or raises ``argparse.ArgumentTypeError``.
    """

    flags: str
    description: str = ""
    transform: Optional[Callable[[str], Any]] = None
    default: Any = None

    def __post_init__(self) -> None:
        match = _FLAG_VALUE_RE.match(self.flags.strip())
        names = [n.strip() for n in match.group("flags").split(",") if n.strip()] if match else []
        if not names or not all(n.startswith("-") for n in names):
            raise ValueError(f"Invalid option flags: {self.flags!r}")
        self.short: Optional[str] = next((n for n in names if not n.startswith("--")), None)
        self.long: Optional[str] = next((n for n in names if n.startswith("--")), None)
        self.value: Optional[str] = match.group("value")

    @property
    def names(self) -> List[str]:
        return [n for n in (self.short, self.long) if n]

    @property
    def dest(self) -> str:
        name = self.long or self.short or ""
        return name.lstrip("-").replace("-", "_")

    @property
    def takes_value(self) -> bool:
        return self.value is not None

    @property
    def value_required(self) -> bool:
        return bool(self.value) and self.value.startswith("<")


def _sort_key(option: Option):
    flags = option.flags.lower()
    return (flags.startswith("--"), flags)


def sort_options(options: Sequence[Option]) -> List[Option]:
    """Order options for help output.

    Flags without a leading ``--`` come first, then ``--`` flags; each group
    is ordered by lowercased flag text. Applying it twice changes nothing.
    """
    return sorted(options, key=_sort_key)


@dataclass
class Command:
    """A named command with its options and action."""

    name: str
    description: str = ""
    arguments: str = ""
    options: List[Option] = field(default_factory=list)
    action: Optional[Action] = None
    help_text: Optional[str] = None
    hidden: bool = False
    _frozen: bool = field(default=False, repr=False)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError(f"Command '{self.name}' can no longer be modified")

    def option(
        self,
        flags: str,
        description: str = "",
        transform: Optional[Callable[[str], Any]] = None,
        default: Any = None,
    ) -> "Command":
        """Append an option; returns self so declarations can be chained."""
        self._check_mutable()
        new = Option(flags, description, transform, default)
        clash = set(new.names) & {n for o in self.options for n in o.names}
        if clash:
            raise ValueError(f"Command '{self.name}' already has option {sorted(clash)[0]}")
        self.options.append(new)
        return self

    def set_action(self, action: Action) -> "Command":
        self._check_mutable()
        self.action = action
        return self

    def describe(self, description: str) -> "Command":
        self._check_mutable()
        self.description = description
        return self

    def find_option(self, name: str) -> Optional[Option]:
        return next((o for o in self.options if name in o.names), None)

    def describe_option(self, name: str, description: str) -> "Command":
        """Replace the help text of the option registered under ``name``."""
        self._check_mutable()
        option = self.find_option(name)
        if option is None:
            raise KeyError(f"Command '{self.name}' has no option {name}")
        option.description = description
        return self

    @property
    def usage_name(self) -> str:
        return f"{self.name} {self.arguments}".strip()

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen


class CommandRegistry:
    """Ordered mapping of command name to ``Command``.

    Owned by the front-end context; adapters register and extend commands
    through it until ``freeze`` is called.
    """

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._frozen = False
        self._sorted = False

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def visible(self) -> List[Command]:
        return [c for c in self._commands.values() if not c.hidden]

    def command(self, name: str, description: str = "", arguments: str = "", **kwargs: Any) -> Command:
        """Register and return a new command."""
        if self._frozen:
            raise RuntimeError("Command registry is frozen")
        if name in self._commands:
            raise ValueError(f"Command '{name}' is already registered")
        cmd = Command(name=name, description=description, arguments=arguments, **kwargs)
        self._commands[name] = cmd
        return cmd

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def lookup(self, name: str) -> Command:
        """Return the named command.

        Raises:
            UnknownCommand: If ``name`` is not registered or is the catch-all.
        """
        cmd = self._commands.get(name)
        if cmd is None or name == Constants.CATCH_ALL_COMMAND:
            raise UnknownCommand(name)
        return cmd

    @property
    def catch_all(self) -> Optional[Command]:
        return self._commands.get(Constants.CATCH_ALL_COMMAND)

    def sort_options(self) -> None:
        """Sort every command's options; only the first call has an effect."""
        if self._sorted:
            return
        for cmd in self._commands.values():
            cmd.options[:] = sort_options(cmd.options)
        self._sorted = True

    def freeze(self) -> None:
        for cmd in self._commands.values():
            cmd.freeze()
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen


def enum_arg(choices: Sequence[str], value: str) -> str:
    """Validate that ``value`` is one of ``choices``."""
    if value not in choices:
        raise argparse.ArgumentTypeError(
            f"'{value}' is not a valid option; must be one of: {', '.join(choices)}"
        )
    return value


def int_arg(value: str) -> int:
    """Validate and convert an integer option value."""
    try:
        return int(value, 10)
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid integer") from e

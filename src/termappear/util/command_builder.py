"""Build argv lists for external commands.

PUBLIC API:
  - CommandBuilder: Fluent argv builder with short/long flag rendering
"""

import shlex
from typing import Any

__all__ = ["CommandBuilder"]


class CommandBuilder:
    """Fluent builder for command lines.

    One-letter flags render as ``-x``, longer ones as ``--name``. A flag value
    of True renders the bare flag. Arguments always come after flags.

    Examples:
        CommandBuilder(["tmux", "list-panes"]).flags(a=True, F="#{pane_pid}").to_list()
        # ['tmux', 'list-panes', '-a', '-F', '#{pane_pid}']
    """

    def __init__(
        self,
        command: str | list[str],
        single_dash_long_flags: bool = False,
        dashdash_after_flags: bool = False,
    ):
        self._command = [command] if isinstance(command, str) else list(command)
        self._flags: dict[str, list[Any]] = {}
        self._argv: list[str] = []
        self.single_dash_long_flags = single_dash_long_flags
        self.dashdash_after_flags = dashdash_after_flags

    def flag(self, name: str, value: Any = True) -> "CommandBuilder":
        self._flags.setdefault(name, []).append(value)
        return self

    def flags(self, **flag_map: Any) -> "CommandBuilder":
        for name, value in flag_map.items():
            self.flag(name, value)
        return self

    def args(self, *args: Any) -> "CommandBuilder":
        self._argv.extend(str(a) for a in args)
        return self

    def to_list(self) -> list[str]:
        result = list(self._command)
        for name, values in self._flags.items():
            rendered = self._flag_name_to_arg(name)
            for value in values:
                if value is False or value is None:
                    continue
                result.append(rendered)
                if value is not True:
                    result.append(str(value))
        if self.dashdash_after_flags:
            result.append("--")
        result.extend(self._argv)
        return result

    def __str__(self) -> str:
        return shlex.join(self.to_list())

    def _flag_name_to_arg(self, name: str) -> str:
        name = name.replace("_", "-")
        if len(name) == 1 or self.single_dash_long_flags:
            return f"-{name}"
        return f"--{name}"

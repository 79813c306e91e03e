"""Format strings and output parsing for tmux introspection.

Records are requested one per line, fields separated by TAB, each field
rendered as ``key:value``. Values may themselves contain colons (paths), so
only the first colon splits key from value.

PUBLIC API:
  - format_string: Build a -F format string from a field map
  - parse_records: Parse list-* output into dicts
  - tmux_command: Start a CommandBuilder for a tmux subcommand
  - to_int: Coerce a tmux integer field
  - to_bool: Coerce a tmux zero/nonzero flag
"""

from collections.abc import Mapping

from ..util.command_builder import CommandBuilder

FIELD_SEPARATOR = "\t"


def format_string(fields: Mapping[str, str]) -> str:
    """Build a tmux -F format string.

    Args:
        fields: Map of our key to tmux format variable, e.g. {"pid": "pane_pid"}.
    """
    return FIELD_SEPARATOR.join(f"{key}:#{{{var}}}" for key, var in fields.items())


def parse_records(output: str) -> list[dict[str, str]]:
    """Parse tmux output produced with a format_string() format."""
    records = []
    for line in output.splitlines():
        if not line.strip():
            continue
        record = {}
        for pair in line.split(FIELD_SEPARATOR):
            key, _, value = pair.partition(":")
            record[key.strip()] = value
        records.append(record)
    return records


def tmux_command(subcommand: str) -> CommandBuilder:
    return CommandBuilder(["tmux", subcommand])


def to_int(value: str) -> int:
    return int(value) if value.strip() else 0


def to_bool(value: str) -> bool:
    return to_int(value) != 0

"""Relational join over heterogeneous record collections.

Records can be mappings, dataclasses, plain objects, or earlier join results.
Joining is analogous to an SQL inner join on one field; reads from a joined
record fall through its members in table order, so earlier tables shadow
later ones.

    panes = join("pid", process_tree, tmux.panes())
    panes[0].session      # from the tmux pane
    panes[0].name         # from the process info

PUBLIC API:
  - join: Inner-join tables on a shared field
  - Join: A joined record
  - FieldAccessible: Protocol for records read through get(field)
  - access: Read a field from any supported record
  - can_access: Check whether a record can expose a field
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from ..errors import JoinError

__all__ = ["join", "Join", "FieldAccessible", "access", "can_access"]


@runtime_checkable
class FieldAccessible(Protocol):
    """A record that exposes fields through a single typed accessor."""

    def get(self, field: str) -> Any | None: ...


def can_access(obj: Any, field: str) -> bool:
    """True if `field` can be read from `obj` by key or attribute."""
    if isinstance(obj, (Mapping, FieldAccessible)):
        return True
    return hasattr(obj, field)


def access(obj: Any, field: str) -> Any | None:
    """Read `field` from `obj`.

    Mappings and FieldAccessible records are read with get(); other objects by
    attribute.

    Raises:
        JoinError: If the record supports neither form of access for `field`.
    """
    if isinstance(obj, (Mapping, FieldAccessible)):
        return obj.get(field)
    if hasattr(obj, field):
        return getattr(obj, field)
    raise JoinError(f"cannot access {field!r} on {obj!r}")


class Join:
    """A union of records sharing one join value.

    Reading a field returns the first non-None value found by scanning the
    members in the order they were added.
    """

    def __init__(self, *members: Any):
        self._members = list(members)

    def push(self, member: Any) -> None:
        self._members.append(member)

    @property
    def members(self) -> tuple[Any, ...]:
        return tuple(self._members)

    @property
    def joined_count(self) -> int:
        return len(self._members)

    def get(self, field: str) -> Any | None:
        for member in self._members:
            if not can_access(member, field):
                continue
            value = access(member, field)
            if value is not None:
                return value
        return None

    def unjoin(self, predicate: Callable[[Any], bool]) -> Any | None:
        """Return the first member matching `predicate`, e.g. the typed pane record."""
        for member in self._members:
            if predicate(member):
                return member
        return None

    def __getitem__(self, field: str) -> Any | None:
        return self.get(field)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if not any(can_access(m, name) for m in self._members):
            raise AttributeError(f"Cannot access {name!r}")
        return self.get(name)

    def __repr__(self) -> str:
        return f"Join({', '.join(repr(m) for m in self._members)})"


def join(field: str, *tables: Iterable[Any]) -> list[Join]:
    """Join tables of records where their `field` values match.

    Only values present in every table produce a result. Results are ordered
    by first appearance (table order, then row order) and members within a
    result follow the same order. Rows whose value is None never join.

    Args:
        field: Attribute or key name to join on.
        *tables: Collections of records.

    Returns:
        List of Join records.

    Raises:
        JoinError: If a row cannot expose `field` at all.
    """
    by_value: dict[Any, Join] = {}
    seen_in: dict[Any, set[int]] = {}

    for index, table in enumerate(tables):
        for row in table:
            value = access(row, field)
            if value is None:
                continue
            if value not in by_value:
                by_value[value] = Join()
                seen_in[value] = set()
            by_value[value].push(row)
            seen_in[value].add(index)

    return [joined for value, joined in by_value.items() if len(seen_in[value]) == len(tables)]

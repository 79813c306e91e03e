"""Small building blocks shared by the termappear services.

PUBLIC API:
  - join: Inner-join heterogeneous record collections on one field
  - Join: A joined record reading through its members
  - Memoizer: Thread-safe per-argument cache
  - CommandBuilder: Fluent argv builder
"""

from .command_builder import CommandBuilder
from .join import FieldAccessible, Join, access, can_access, join
from .memoizer import Memoizer

__all__ = [
    "join",
    "Join",
    "FieldAccessible",
    "access",
    "can_access",
    "Memoizer",
    "CommandBuilder",
]

"""Typed views over tmux clients, sessions, windows and panes.

Every record is a fresh query result. Navigation methods (``session.windows()``,
``window.panes()``) query tmux again, so a record may be stale after tmux
state changes.

PUBLIC API:
  - TmuxClient: A terminal attached to a session
  - TmuxSession: A session; has many windows
  - TmuxWindow: A window; has many panes
  - TmuxPane: A pane running a process
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .core import to_bool, to_int

if TYPE_CHECKING:
    from .service import Tmux


@dataclass(frozen=True)
class TmuxClient:
    """A tmux client: a terminal rendering a session."""

    FORMAT: ClassVar[dict[str, str]] = {
        "tty": "client_tty",
        "term": "client_termname",
        "session": "client_session",
    }

    tty: str
    term: str
    session: str
    tmux: "Tmux" = field(repr=False, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, str], tmux: "Tmux") -> "TmuxClient":
        return cls(tty=record["tty"], term=record["term"], session=record["session"], tmux=tmux)


@dataclass(frozen=True)
class TmuxSession:
    """A tmux session."""

    FORMAT: ClassVar[dict[str, str]] = {
        "session": "session_name",
        "id": "session_id",
        "attached": "session_attached",
        "width": "session_width",
        "height": "session_height",
    }

    session: str
    id: str
    attached: int
    width: int
    height: int
    tmux: "Tmux" = field(repr=False, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, str], tmux: "Tmux") -> "TmuxSession":
        return cls(
            session=record["session"],
            id=record["id"],
            attached=to_int(record["attached"]),
            width=to_int(record["width"]),
            height=to_int(record["height"]),
            tmux=tmux,
        )

    @property
    def target(self) -> str:
        return self.session

    def windows(self) -> list["TmuxWindow"]:
        return [w for w in self.tmux.windows() if w.session == self.session]

    def clients(self) -> list[TmuxClient]:
        return [c for c in self.tmux.clients() if c.session == self.session]

    def new_window(self, **flags) -> "TmuxWindow":
        """Create a window after the last one in this session."""
        windows = self.windows()
        last = windows[-1].window if windows else -1
        return self.tmux.new_window(t=f"{self.target}:{last + 1}", **flags)


@dataclass(frozen=True)
class TmuxWindow:
    """A tmux window."""

    FORMAT: ClassVar[dict[str, str]] = {
        "session": "session_name",
        "window": "window_index",
        "id": "window_id",
        "active": "window_active",
    }

    session: str
    window: int
    id: str
    active: bool
    tmux: "Tmux" = field(repr=False, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, str], tmux: "Tmux") -> "TmuxWindow":
        return cls(
            session=record["session"],
            window=to_int(record["window"]),
            id=record["id"],
            active=to_bool(record["active"]),
            tmux=tmux,
        )

    @property
    def target(self) -> str:
        return f"{self.session}:{self.window}"

    def panes(self) -> list["TmuxPane"]:
        return [p for p in self.tmux.panes() if p.session == self.session and p.window == self.window]


@dataclass(frozen=True)
class TmuxPane:
    """A tmux pane.

    Attributes:
        id: tmux pane id (e.g. "%42").
        pid: PID of the process running in the pane.
        session: Session name.
        window: Window index.
        pane: Pane index.
        command_name: Command currently running in the pane.
        current_path: Working directory of the pane.
        active: Is this the active pane of its window.
    """

    FORMAT: ClassVar[dict[str, str]] = {
        "id": "pane_id",
        "pid": "pane_pid",
        "session": "session_name",
        "window": "window_index",
        "pane": "pane_index",
        "command_name": "pane_current_command",
        "current_path": "pane_current_path",
        "active": "pane_active",
    }

    id: str
    pid: int
    session: str
    window: int
    pane: int
    command_name: str
    current_path: str
    active: bool
    tmux: "Tmux" = field(repr=False, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, str], tmux: "Tmux") -> "TmuxPane":
        return cls(
            id=record["id"],
            pid=to_int(record["pid"]),
            session=record["session"],
            window=to_int(record["window"]),
            pane=to_int(record["pane"]),
            command_name=record["command_name"],
            current_path=record["current_path"],
            active=to_bool(record["active"]),
            tmux=tmux,
        )

    @property
    def target(self) -> str:
        """Target specifier for tmux commands (session:window.pane)."""
        return f"{self.session}:{self.window}.{self.pane}"

    def split(self, **flags) -> "TmuxPane":
        return self.tmux.split_window(t=self.target, **flags)

    def send_keys(self, *keys: str, literal: bool = False) -> None:
        self.tmux.send_keys(self.target, *keys, literal=literal)

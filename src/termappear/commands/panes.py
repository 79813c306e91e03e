"""Panes command - list tmux panes."""

from typing import Optional

from ..app import app
from ..errors import AppearError


@app.command(
    display="table",
    headers=["Pane", "ID", "PID", "Command", "Path", "Active"],
)
def panes(state, filter: Optional[str] = None):
    """List all tmux panes with their shell PID."""
    try:
        tmux_panes = state.instance().tmux.panes()
    except AppearError:
        return []

    results = []
    for pane in tmux_panes:
        if filter:
            searchable = f"{pane.target} {pane.command_name} {pane.current_path}".lower()
            if filter.lower() not in searchable:
                continue

        results.append(
            {
                "Pane": pane.target,
                "ID": pane.id,
                "PID": pane.pid,
                "Command": pane.command_name,
                "Path": pane.current_path,
                "Active": "*" if pane.active else "",
            }
        )
    return results

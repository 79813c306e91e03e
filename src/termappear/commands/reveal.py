"""Reveal command - bring a process's terminal to the front.

PUBLIC API:
  - reveal: Reveal the terminals hosting a PID
"""

from typing import Any

from ..app import app
from ..errors import AppearError


@app.command(
    display="markdown",
    fastmcp={"type": "tool", "description": "Reveal the terminal window, tab and tmux pane hosting a process"},
)
def reveal(state, pid: int) -> dict[str, Any]:
    """Reveal every terminal surface hosting a process.

    Args:
        state: Application state.
        pid: Process to reveal.

    Returns:
        Markdown formatted result with reveal status.
    """
    try:
        revealed = state.instance().reveal(pid)
    except AppearError as e:
        return {
            "elements": [{"type": "text", "content": f"Error: {e}"}],
            "frontmatter": {"error": str(e), "status": "error", "pid": pid},
        }

    message = f"Revealed process {pid}" if revealed else f"No terminal found for process {pid}"
    return {
        "elements": [{"type": "text", "content": message}],
        "frontmatter": {
            "action": "reveal",
            "status": "revealed" if revealed else "not_found",
            "pid": pid,
        },
    }

"""Tree command - show a process and its ancestors."""

from ..app import app
from ..errors import AppearError


@app.command(
    display="table",
    headers=["PID", "Parent", "Name", "Command"],
    fastmcp={"type": "tool", "description": "Show a process and its ancestors up to init"},
)
def tree(state, pid: int):
    """List a process and its ancestors, nearest first."""
    try:
        processes = state.instance().process_tree(pid)
    except AppearError as e:
        return [{"PID": pid, "Parent": "-", "Name": "-", "Command": f"Error: {e}"}]

    return [
        {
            "PID": p.pid,
            "Parent": p.parent_pid,
            "Name": p.name,
            "Command": " ".join(p.command),
        }
        for p in processes
    ]

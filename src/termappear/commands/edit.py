"""Edit command - open a file in a Neovim inside tmux and reveal it.

PUBLIC API:
  - edit: Open a file in the configured editor
"""

from typing import Any

from ..app import app
from ..editor import EDITORS
from ..errors import AppearError


@app.command(
    display="markdown",
    fastmcp={"type": "tool", "description": "Open a file in Neovim inside tmux and reveal it"},
)
def edit(state, filename: str, editor: str = "tmux-ide") -> dict[str, Any]:
    """Open a file in an editor and reveal the editor.

    Args:
        state: Application state.
        filename: File to open.
        editor: Editor driver name. Defaults to "tmux-ide".

    Returns:
        Markdown formatted result with edit status.
    """
    if editor not in EDITORS:
        return {
            "elements": [{"type": "text", "content": f"Error: unknown editor {editor!r}"}],
            "frontmatter": {"error": "Unknown editor", "status": "error", "available": sorted(EDITORS)},
        }

    instance = state.instance()
    driver = EDITORS[editor](
        instance.processes,
        instance.tmux,
        instance.runner,
        instance.reveal,
        instance.config.nvim_socket_dir,
    )

    try:
        revealed = driver.call(filename)
    except AppearError as e:
        return {
            "elements": [{"type": "text", "content": f"Error: {e}"}],
            "frontmatter": {"error": str(e), "status": "error", "file": filename},
        }

    return {
        "elements": [{"type": "text", "content": f"Opened {filename}"}],
        "frontmatter": {
            "action": "edit",
            "status": "revealed" if revealed else "opened",
            "file": filename,
            "editor": editor,
        },
    }

"""Interactive confirmation prompt."""

from typing import List, Optional

from rich.panel import Panel

from .console import console


def confirm(message: str, details: Optional[List[str]] = None, default: bool = False) -> bool:
    """Ask a yes/no question in an action panel.

    Ctrl+C or end of input count as "no".
    """
    content_lines = [f"[primary]{message}[/]"]
    if details:
        content_lines.append("")
        for detail in details:
            content_lines.append(f"  [muted]•[/] {detail}")
    content_lines.append("")
    if default:
        content_lines.append("  [highlight][Y][/] [primary]Yes[/]  [muted][n][/] [muted]No[/]")
    else:
        content_lines.append("  [muted][y][/] [muted]Yes[/]  [highlight][N][/] [primary]No[/]")
    console.print(
        Panel(
            "\n".join(content_lines),
            title="[highlight]─ ACTION REQUIRED [/]",
            border_style="highlight",
            padding=(1, 2),
        )
    )

    while True:
        try:
            response = console.input("  > ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            console.print()
            return False
        if response in ("y", "yes"):
            return True
        if response in ("n", "no"):
            return False
        if response == "":
            return default
        console.warning("Please enter Y or N")

"""Summary panel shown at the end of a run."""

from rich.panel import Panel

from printreset.models import CleanupSummary

from .console import console


def summary_panel(summary: CleanupSummary, title: str = "PRINTER RESET") -> None:
    if summary.declined:
        lines = ["[warning]Printer removal declined. No printers, drivers or ports were changed.[/]"]
    else:
        lines = [f"[muted]Registry backups:[/] {len(summary.backups)}"]
        if summary.user_level_only:
            lines.append("[muted]Scope:[/] user level only")
        else:
            lines.append(f"[muted]Printers removed:[/] {summary.printers_removed}")
            lines.append(f"[muted]Drivers removed:[/] {summary.drivers_removed}")
            lines.append(f"[muted]Ports removed:[/] {summary.ports_removed}")
            lines.append(
                f"[muted]All printers removed:[/] {'yes' if summary.removed_all_printers else 'no'}"
            )

    style = "success"
    failures = summary.failures
    if failures:
        style = "warning"
        lines.append("")
        lines.append(f"[warning]{len(failures)} item(s) could not be cleaned:[/]")
        for outcome in failures[:10]:
            lines.append(f"  [secondary]• {outcome.kind.value}: {outcome.name}[/]")
        if len(failures) > 10:
            lines.append(f"  [secondary]… and {len(failures) - 10} more[/]")

    console.print(
        Panel("\n".join(lines), title=f"[brand]─ {title} [/]", border_style=style, padding=(1, 2))
    )

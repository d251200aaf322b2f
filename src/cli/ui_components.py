"""CLI UI components (Rich).

Why separate:
- Keeps command logic apart from presentation details.
- Panels/tables are reused by `derive` and `doctor`.
"""

from __future__ import annotations

from pathlib import Path

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DerivationRequest


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in --quiet mode)."""

    title = Text("pwderive", style="bold cyan")
    subtitle = Text("Stateless passwords • PBKDF2 • Nothing stored", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_panel(
    *,
    request: DerivationRequest,
    password: str,
    export_path: Path | None = None,
) -> Panel:
    body = Text()
    body.append(password + "\n\n", style="bold green")
    body.append(f"Context: {request.context}\n", style="dim")
    body.append(f"Version: {request.version}\n", style="dim")
    body.append(f"Length: {request.length}\n", style="dim")
    body.append(
        "Classes: " + ", ".join(cls.value for cls in request.ordered_classes),
        style="dim",
    )
    if export_path is not None:
        body.append(f"\nExported to: {export_path}", style="magenta")

    return Panel(body, title=Text("Derived password", style="bold green"), border_style="green")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table

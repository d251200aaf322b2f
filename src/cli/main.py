"""pwderive command line.

The CLI is a thin collaborator of the core: it gathers inputs (secrets always
through hidden prompts), calls `derive` once and presents or exports the
result. It never keeps the secrets after the call returns.
"""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from adapters.json_exporter import export_record_to_dir
from cli import doctor
from cli.ui_components import build_result_panel, print_banner
from core.config import AppSettings, configure_logging
from core.domain.charsets import CharacterClass
from core.domain.errors import DerivationError, PwDeriveError
from core.domain.models import DerivationRequest, ExportRecord
from core.services.derivation_service import derive as derive_password

app = typer.Typer(
    no_args_is_help=True,
    help="Derive reproducible passwords from memorable secrets. Nothing is stored.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level (DEBUG, INFO, WARNING...).",
    ),
) -> None:
    settings = AppSettings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


def _resolve_selection(
    settings: AppSettings,
    overrides: dict[CharacterClass, bool | None],
) -> frozenset[CharacterClass]:
    defaults = settings.default_selection()
    chosen: set[CharacterClass] = set()
    for cls, flag in overrides.items():
        enabled = (cls in defaults) if flag is None else flag
        if enabled:
            chosen.add(cls)
    return frozenset(chosen)


@app.command()
def derive(
    context: str = typer.Argument(..., help="Site or application the password is for."),
    version: str | None = typer.Option(
        None, "--version", "-v", help="Version tag; bump it to rotate a password."
    ),
    length: int | None = typer.Option(None, "--length", "-l", help="Password length (8-128)."),
    uppercase: bool | None = typer.Option(None, "--uppercase/--no-uppercase", help="Include A-Z."),
    lowercase: bool | None = typer.Option(None, "--lowercase/--no-lowercase", help="Include a-z."),
    digits: bool | None = typer.Option(None, "--digits/--no-digits", help="Include 0-9."),
    special: bool | None = typer.Option(None, "--special/--no-special", help="Include punctuation."),
    pepper: str | None = typer.Option(
        None,
        "--pepper",
        help="Optional secret key. Prompted (hidden) when omitted.",
    ),
    export_dir: Path | None = typer.Option(
        None,
        "--export-dir",
        help="Write a JSON record (without secrets) into this directory.",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        help="Export into the configured export directory.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print only the password."),
) -> None:
    """Derive the password for CONTEXT."""

    settings = AppSettings()

    if not quiet:
        print_banner(_err_console)

    master_secret = typer.prompt("Master password", hide_input=True)
    if pepper is None:
        pepper = typer.prompt(
            "Secret key (optional)",
            default="",
            hide_input=True,
            show_default=False,
        )

    selection = _resolve_selection(
        settings,
        {
            CharacterClass.UPPERCASE: uppercase,
            CharacterClass.LOWERCASE: lowercase,
            CharacterClass.DIGITS: digits,
            CharacterClass.SPECIAL: special,
        },
    )

    try:
        request = DerivationRequest(
            master_secret=master_secret,
            pepper=pepper,
            context=context.strip(),
            version=(version if version is not None else settings.default_version).strip(),
            length=length if length is not None else settings.default_length,
            class_selection=selection,
        )
        password = derive_password(request)
    except DerivationError as exc:
        logger.error("Derivation failed: {}", exc)
        _err_console.print(f"[red]Error generating password:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except PwDeriveError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc

    target_dir = export_dir or (settings.export_dir if export else None)
    if export and target_dir is None:
        _err_console.print("[yellow]No export directory configured; skipping export.[/yellow]")

    written: Path | None = None
    if target_dir is not None:
        record = ExportRecord.from_request(request, password)
        written = export_record_to_dir(record=record, directory=target_dir)
        logger.info("Exported record to {}", written)

    if quiet:
        typer.echo(password)
        return

    _console.print(build_result_panel(request=request, password=password, export_path=written))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

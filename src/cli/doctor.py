"""Doctor command for environment diagnostics."""

from __future__ import annotations

import hashlib
import time

import cryptography
import typer
from rich.console import Console

from cli.ui_components import build_checks_table
from core.config import AppSettings, write_user_env_vars
from core.domain.charsets import CharacterClass
from core.domain.models import MAX_LENGTH, MIN_LENGTH, DerivationRequest
from core.services.derivation_service import derive
from core.services.key_derivation import (
    KEY_LENGTH,
    PBKDF2_ITERATIONS,
    derive_key,
    password_material,
    salt_material,
)

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and default settings.")

_console = Console()

_SELF_TEST = ("doctor-secret", "doctor-pepper", "example.com", "v1")


def check_known_answer() -> tuple[bool, str]:
    """Compare the backend against hashlib's PBKDF2 for a fixed input."""

    master, pepper, context, version = _SELF_TEST
    try:
        started = time.perf_counter()
        ours = derive_key(master, pepper, context, version)
        elapsed = time.perf_counter() - started
        reference = hashlib.pbkdf2_hmac(
            "sha256",
            password_material(master, pepper),
            salt_material(context, version),
            PBKDF2_ITERATIONS,
            KEY_LENGTH,
        )
    except Exception as exc:
        return False, str(exc)
    if bytes(ours) != reference:
        return False, "backend output differs from hashlib reference"
    return True, f"matches hashlib ({elapsed * 1000:.0f} ms)"


def check_determinism() -> tuple[bool, str]:
    master, pepper, context, version = _SELF_TEST
    request = DerivationRequest(
        master_secret=master,
        pepper=pepper,
        context=context,
        version=version,
        length=32,
        class_selection=frozenset(CharacterClass),
    )
    try:
        first = derive(request)
        second = derive(request)
    except Exception as exc:
        return False, str(exc)
    if first != second:
        return False, "two derivations differ"
    return True, "identical output on repeat"


@app.command()
def run() -> None:
    """Run baseline diagnostics."""

    settings = AppSettings()

    table = build_checks_table("pwderive Doctor")
    table.add_row("Crypto backend", "OK", f"cryptography {cryptography.__version__}")
    table.add_row("KDF", "OK", f"PBKDF2-HMAC-SHA256, {PBKDF2_ITERATIONS} iterations, {KEY_LENGTH} bytes")

    ok_kat, detail_kat = check_known_answer()
    table.add_row("Known answer", "OK" if ok_kat else "FAIL", detail_kat)

    ok_det, detail_det = check_determinism()
    table.add_row("Determinism", "OK" if ok_det else "FAIL", detail_det)

    classes = ", ".join(cls.value for cls in CharacterClass if cls in settings.default_selection())
    table.add_row("Default length", "OK", str(settings.default_length))
    table.add_row("Default version", "OK", settings.default_version)
    table.add_row("Default classes", "OK" if classes else "WARN", classes or "none selected")
    table.add_row("Export dir", "OK", str(settings.export_dir) if settings.export_dir else "not set")

    _console.print(table)

    if not (ok_kat and ok_det):
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup of defaults (stored in the user config .env).

    Secrets are never stored; only length, version, classes and export dir.
    """

    settings = AppSettings()

    length = typer.prompt("Default length", default=settings.default_length, type=int)
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise typer.BadParameter(f"length must be between {MIN_LENGTH} and {MAX_LENGTH}")
    version = typer.prompt("Default version", default=settings.default_version).strip()

    values: dict[str, str] = {
        "PWDERIVE_DEFAULT_LENGTH": str(length),
        "PWDERIVE_DEFAULT_VERSION": version or "v1",
    }
    enabled = settings.default_selection()
    for cls in CharacterClass:
        flag = typer.confirm(f"Include {cls.value}?", default=cls in enabled)
        values[f"PWDERIVE_DEFAULT_{cls.name}"] = "true" if flag else "false"
    if not any(values[f"PWDERIVE_DEFAULT_{cls.name}"] == "true" for cls in CharacterClass):
        raise typer.BadParameter("select at least one character class")

    export_dir = typer.prompt(
        "Export directory (empty for none)",
        default=str(settings.export_dir or ""),
        show_default=False,
    ).strip()
    if export_dir:
        values["PWDERIVE_EXPORT_DIR"] = export_dir

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved defaults to:[/green] {env_path}")

"""Tests for the JSON export adapter."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from adapters.json_exporter import build_export_filename, export_record_json, export_record_to_dir
from core.domain.charsets import CharacterClass
from core.domain.models import DerivationRequest, ExportRecord

WHEN = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def record():
    request = DerivationRequest(
        master_secret="super secret",
        pepper="pepper value",
        context="mail.example.com",
        length=12,
        class_selection=frozenset(CharacterClass),
    )
    return ExportRecord.from_request(request, "Ab1!Ab1!Ab1!", exported_at=WHEN)


@pytest.mark.parametrize(
    ("site", "expected"),
    [
        ("example", "password-example-2024-01-02T03-04-05.json"),
        ("my site.com", "password-my_site_com-2024-01-02T03-04-05.json"),
        ("Ünï/co:de", "password-_n__co_de-2024-01-02T03-04-05.json"),
        ("", "password--2024-01-02T03-04-05.json"),
    ],
)
def test_build_export_filename(site, expected):
    assert build_export_filename(site, WHEN) == expected


def test_filename_timestamp_is_utc():
    local = WHEN.astimezone(timezone(timedelta(hours=5)))
    assert build_export_filename("x", local) == "password-x-2024-01-02T03-04-05.json"


def test_export_record_json_writes_readable_file(tmp_path, record):
    out = export_record_json(record=record, output_path=tmp_path / "nested" / "record.json")

    text = out.read_text(encoding="utf-8")
    assert text.endswith("\n")
    data = json.loads(text)
    assert data["siteName"] == "mail.example.com"
    assert data["generatedPassword"] == "Ab1!Ab1!Ab1!"
    assert data["passwordLength"] == 12
    assert data["characterSets"]["numbers"] is True
    assert "super secret" not in text
    assert "pepper value" not in text


def test_export_record_to_dir_uses_generated_name(tmp_path, record):
    out = export_record_to_dir(record=record, directory=tmp_path)
    assert out.name == "password-mail_example_com-2024-01-02T03-04-05.json"
    assert out.exists()

"""Domain models.

Why two flavours:
- `DerivationRequest` is a frozen dataclass: it holds secrets for the duration
  of one `derive` call and is never serialised, so it only needs invariants.
- `ExportRecord` is a Pydantic v2 model because collaborators serialise it;
  it describes *what* a user may keep, which never includes the secrets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from core.domain.charsets import CharacterClass, canonical_order
from core.domain.errors import EmptySelectionError, InvalidInputError, InvalidLengthError

MIN_LENGTH = 8
MAX_LENGTH = 128
DEFAULT_VERSION = "v1"

EXPORT_NOTE = "Master password and secret key are NOT included for security reasons"


def validate_length(length: object) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidLengthError(length, MIN_LENGTH, MAX_LENGTH)
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise InvalidLengthError(length, MIN_LENGTH, MAX_LENGTH)
    return length


def validate_text(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(name, value)
    return value


def validate_selection(selection: Iterable["str | CharacterClass"] | None) -> frozenset[CharacterClass]:
    ordered = canonical_order(selection or ())
    if not ordered:
        raise EmptySelectionError()
    return frozenset(ordered)


@dataclass(frozen=True)
class DerivationRequest:
    """Inputs of one derivation.

    Construction fails with `InvalidInputError` (non-string secret, context or
    version), `InvalidLengthError` or `EmptySelectionError`, so a request that
    exists is always derivable. Only `pepper` may be None, meaning empty.
    """

    master_secret: str = field(repr=False)
    context: str
    length: int
    class_selection: frozenset[CharacterClass]
    pepper: str = field(default="", repr=False)
    version: str = DEFAULT_VERSION

    def __post_init__(self) -> None:
        validate_text("master_secret", self.master_secret)
        validate_text("context", self.context)
        validate_text("version", self.version)
        if self.pepper is not None:
            validate_text("pepper", self.pepper)
        validate_length(self.length)
        object.__setattr__(self, "class_selection", validate_selection(self.class_selection))
        object.__setattr__(self, "pepper", self.pepper or "")
        object.__setattr__(self, "version", self.version or DEFAULT_VERSION)

    @property
    def ordered_classes(self) -> tuple[CharacterClass, ...]:
        return canonical_order(self.class_selection)


class ExportRecord(BaseModel):
    """What the export collaborator may write to disk.

    Serialised with camelCase keys (`siteName`, `passwordLength`, ...) so files
    match the ones written by the browser version of the tool.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    site_name: str = Field(
        ...,
        description="Context (site/app) the password was derived for.",
    )
    version: str = Field(
        default=DEFAULT_VERSION,
        min_length=1,
        description="Version tag used in the salt.",
    )
    password_length: int = Field(
        ...,
        ge=MIN_LENGTH,
        le=MAX_LENGTH,
        description="Length of the generated password.",
    )
    character_sets: dict[str, bool] = Field(
        default_factory=dict,
        description="Selected classes, keyed uppercase/lowercase/numbers/special.",
    )
    generated_password: str = Field(
        ...,
        min_length=MIN_LENGTH,
        description="The derived password.",
    )
    export_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Moment of export (UTC).",
    )
    note: str = Field(default=EXPORT_NOTE)

    @classmethod
    def from_request(
        cls,
        request: DerivationRequest,
        password: str,
        *,
        exported_at: datetime | None = None,
    ) -> "ExportRecord":
        selection = request.class_selection
        return cls(
            site_name=request.context,
            version=request.version,
            password_length=request.length,
            character_sets={
                "uppercase": CharacterClass.UPPERCASE in selection,
                "lowercase": CharacterClass.LOWERCASE in selection,
                "numbers": CharacterClass.DIGITS in selection,
                "special": CharacterClass.SPECIAL in selection,
            },
            generated_password=password,
            export_date=exported_at or datetime.now(timezone.utc),
        )

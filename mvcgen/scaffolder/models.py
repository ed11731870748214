"""Pydantic v2 models describing the project to scaffold.

Defines the schema model consumed by every generator: field types, fields,
entities, the project-level options, and the ``GeneratedArtifact`` record
produced for each output file.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FieldType(str, Enum):
    """Closed set of field types an entity may declare."""
    STRING = "string"
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "bool"
    DATETIME = "datetime"

    @classmethod
    def parse(cls, declared: str | FieldType | None) -> FieldType:
        """Map a declared type string to a ``FieldType``.

        Matching is case-insensitive. Unrecognised values, including
        non-string ones such as a YAML ``1`` or ``yes``, fall back to
        ``STRING``; this is never an error.
        """
        if isinstance(declared, FieldType):
            return declared
        if declared is None:
            return cls.STRING
        return _DECLARED_TYPES.get(str(declared).strip().lower(), cls.STRING)


_DECLARED_TYPES: dict[str, FieldType] = {
    "int": FieldType.INTEGER,
    "integer": FieldType.INTEGER,
    "float": FieldType.FLOAT,
    "double": FieldType.FLOAT,
    "bool": FieldType.BOOLEAN,
    "boolean": FieldType.BOOLEAN,
    "datetime": FieldType.DATETIME,
    "date": FieldType.DATETIME,
    "string": FieldType.STRING,
    "text": FieldType.STRING,
}


# Entity and field names become PHP class, property and array key names.
IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


def _declared_string(raw: Any) -> str:
    if isinstance(raw, FieldType):
        return raw.value
    if raw is None or raw == "":
        return "string"
    return str(raw)


# ---------------------------------------------------------------------------
# Schema models
# ---------------------------------------------------------------------------

class FieldSpec(BaseModel):
    """One typed field of an entity.

    ``declared_type`` keeps the raw string the user typed (``text`` vs
    ``string`` both map to ``FieldType.STRING`` but render different inputs).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=IDENTIFIER_PATTERN, description="Field identifier")
    type: FieldType = Field(default=FieldType.STRING)
    declared_type: str = Field(default="", description="Raw declared type string")

    @model_validator(mode="before")
    @classmethod
    def _normalise_type(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("type", "string")
        declared = data.get("declared_type") or _declared_string(raw)
        return {
            **data,
            "type": FieldType.parse(raw),
            "declared_type": str(declared).strip().lower(),
        }


class EntitySpec(BaseModel):
    """An entity name plus its ordered field list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ..., pattern=IDENTIFIER_PATTERN, description="Entity name, PascalCase expected"
    )
    fields: list[FieldSpec] = Field(default_factory=list)


class ProjectSpec(BaseModel):
    """Everything the generator needs for one run.

    Built once by the front end (file loader or interactive prompts) and
    never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    entities: list[EntitySpec] = Field(default_factory=list)
    with_presentation_views: bool = Field(default=False)
    with_authentication: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Output record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeneratedArtifact:
    """A generated file: path relative to the project root, and its content."""

    relative_path: str
    content: str

"""Type and validation rule synthesis.

Maps each ``FieldType`` to its storage semantics (PHP property type, SQL
column, hydration cast), its HTML input affordance, and the ordered list of
validation rules a generated controller runs on form submissions.

Every rule knows how to render its PHP condition and message, and how to
evaluate a submitted value in Python with the same semantics as the PHP
functions it renders (``empty``, ``is_numeric``, ``filter_var``,
``strlen``). The Python side is what the rule tests exercise.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .models import FieldSpec, FieldType
from .naming import accessor_names


MAX_STRING_LENGTH = 255


# ---------------------------------------------------------------------------
# Storage / input semantics
# ---------------------------------------------------------------------------

class StorageKind(str, Enum):
    """Semantic storage category of a field."""
    NUMERIC = "numeric"
    TEXT = "text"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class TypeRules:
    """Everything derived from a field's type, independent of its name."""

    field_type: FieldType
    storage: StorageKind
    php_type: str
    sql_type: str
    input_type: str
    cast: str

    def php_cast(self, expr: str) -> str:
        """Render the hydration cast applied to *expr* (``$v`` in templates)."""
        return self.cast.format(v=expr)


_TYPE_RULES: dict[FieldType, TypeRules] = {
    FieldType.INTEGER: TypeRules(
        field_type=FieldType.INTEGER,
        storage=StorageKind.NUMERIC,
        php_type="int",
        sql_type="INT",
        input_type="number",
        cast="(int) {v}",
    ),
    FieldType.FLOAT: TypeRules(
        field_type=FieldType.FLOAT,
        storage=StorageKind.NUMERIC,
        php_type="float",
        sql_type="DOUBLE",
        input_type="number",
        cast="(float) {v}",
    ),
    FieldType.BOOLEAN: TypeRules(
        field_type=FieldType.BOOLEAN,
        storage=StorageKind.BOOLEAN,
        php_type="bool",
        sql_type="TINYINT(1)",
        input_type="checkbox",
        cast="filter_var({v}, FILTER_VALIDATE_BOOLEAN)",
    ),
    FieldType.DATETIME: TypeRules(
        field_type=FieldType.DATETIME,
        storage=StorageKind.TIMESTAMP,
        php_type="\\DateTimeInterface",
        sql_type="DATETIME",
        input_type="date",
        cast="{v} instanceof \\DateTimeInterface ? {v} : new \\DateTimeImmutable((string) {v})",
    ),
    FieldType.STRING: TypeRules(
        field_type=FieldType.STRING,
        storage=StorageKind.TEXT,
        php_type="string",
        sql_type=f"VARCHAR({MAX_STRING_LENGTH})",
        input_type="text",
        cast="(string) {v}",
    ),
}


def type_rules(field_type: FieldType, declared_type: str = "") -> TypeRules:
    """Return the storage and input semantics for a field type.

    A String field declared as ``text`` keeps string storage but is stored
    as ``TEXT`` and edited through a textarea.
    """
    rules = _TYPE_RULES[FieldType.parse(field_type)]
    if rules.field_type is FieldType.STRING and declared_type == "text":
        return TypeRules(
            field_type=rules.field_type,
            storage=rules.storage,
            php_type=rules.php_type,
            sql_type="TEXT",
            input_type="textarea",
            cast=rules.cast,
        )
    return rules


def rules_for_field(field: FieldSpec) -> TypeRules:
    """Shortcut for :func:`type_rules` on a ``FieldSpec``."""
    return type_rules(field.type, field.declared_type)


# ---------------------------------------------------------------------------
# PHP value semantics mirrored in Python
# ---------------------------------------------------------------------------

# is_numeric(): optional leading/trailing whitespace, sign, digits with an
# optional fraction (or a bare fraction), optional exponent. ASCII digits only.
_PHP_NUMERIC = re.compile(
    r"^[ \t\n\r\v\f]*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?[ \t\n\r\v\f]*$"
)

# Shape accepted by FILTER_VALIDATE_EMAIL for ordinary addresses.
_EMAIL = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@([A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)


def php_empty(value: str | None) -> bool:
    """``empty()`` for a submitted form value: missing, ``""`` and ``"0"``."""
    return value is None or value == "" or value == "0"


def php_is_numeric(value: str) -> bool:
    return bool(_PHP_NUMERIC.match(value))


def php_is_email(value: str) -> bool:
    return bool(_EMAIL.match(value))


# ---------------------------------------------------------------------------
# Validation rules
# ---------------------------------------------------------------------------

class RuleKind(str, Enum):
    """Kinds of validation a generated controller can apply."""
    REQUIRED = "required"
    NUMERIC = "numeric"
    EMAIL = "email"
    MAX_LENGTH = "max_length"


@dataclass(frozen=True)
class ValidationRule:
    """A single check on one submitted field."""

    kind: RuleKind
    field_name: str
    limit: int | None = None

    @property
    def message(self) -> str:
        name = self.field_name
        if self.kind is RuleKind.REQUIRED:
            return f"Field '{name}' is required"
        if self.kind is RuleKind.NUMERIC:
            return f"Field '{name}' must be a number"
        if self.kind is RuleKind.EMAIL:
            return f"Field '{name}' must be a valid email"
        return f"Field '{name}' must not exceed {self.limit} characters"

    def php_condition(self, source: str = "$input") -> str:
        """Render the PHP expression that is true when the rule is violated."""
        value = f"{source}['{self.field_name}']"
        if self.kind is RuleKind.REQUIRED:
            return f"empty({value})"
        if self.kind is RuleKind.NUMERIC:
            return f"!is_numeric({value})"
        if self.kind is RuleKind.EMAIL:
            return f"!filter_var({value}, FILTER_VALIDATE_EMAIL)"
        return f"strlen({value}) > {self.limit}"

    def is_violated(self, value: str | None) -> bool:
        """Evaluate the rule against a submitted value.

        Non-required rules only run after the required check passed, so they
        treat a missing value as not violating.
        """
        if self.kind is RuleKind.REQUIRED:
            return php_empty(value)
        if value is None:
            return False
        if self.kind is RuleKind.NUMERIC:
            return not php_is_numeric(value)
        if self.kind is RuleKind.EMAIL:
            return not php_is_email(value)
        return len(value.encode("utf-8")) > (self.limit or 0)


def validation_rules(field: FieldSpec) -> list[ValidationRule]:
    """Return the ordered rule chain for a field.

    Always ``required`` first; then ``numeric`` for Integer/Float, ``email``
    for String fields whose name contains ``email``, ``max_length`` for other
    String fields. Boolean and DateTime fields only carry ``required``.
    """
    chain = [ValidationRule(RuleKind.REQUIRED, field.name)]
    if field.type in (FieldType.INTEGER, FieldType.FLOAT):
        chain.append(ValidationRule(RuleKind.NUMERIC, field.name))
    elif field.type is FieldType.STRING:
        if "email" in field.name:
            chain.append(ValidationRule(RuleKind.EMAIL, field.name))
        else:
            chain.append(ValidationRule(RuleKind.MAX_LENGTH, field.name, MAX_STRING_LENGTH))
    return chain


def validate_submission(
    fields: list[FieldSpec], submitted: dict[str, str]
) -> list[str]:
    """Run every field's rule chain over *submitted*, like the generated code.

    Returns the ordered violation messages; at most one per field because the
    generated PHP is an ``if / elseif`` chain.
    """
    errors: list[str] = []
    for field in fields:
        value = submitted.get(field.name)
        for rule in validation_rules(field):
            if rule.is_violated(value):
                errors.append(rule.message)
                break
    return errors


# ---------------------------------------------------------------------------
# Template context
# ---------------------------------------------------------------------------

def field_context(field: FieldSpec) -> dict[str, object]:
    """Flatten everything the templates need to know about one field."""
    rules = rules_for_field(field)
    getter, setter = accessor_names(field.name)
    return {
        "name": field.name,
        "type": field.type.value,
        "declared_type": field.declared_type,
        "getter": getter,
        "setter": setter,
        "php_type": rules.php_type,
        "storage": rules.storage.value,
        "sql_type": rules.sql_type,
        "input_type": rules.input_type,
        "cast": rules.php_cast("$v"),
        "is_timestamp": rules.storage is StorageKind.TIMESTAMP,
        "is_boolean": rules.storage is StorageKind.BOOLEAN,
        "rules": [
            {"condition": rule.php_condition(), "message": rule.message}
            for rule in validation_rules(field)
        ],
    }

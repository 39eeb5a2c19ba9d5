"""Declarative input validation for assessment engines.

Every engine declares its inputs as an ordered list of ``FieldSpec``
entries plus an ordered list of ``CrossFieldRule`` checks. The
``InputValidator`` walks the field declarations in order, coerces each
raw value into its typed form, then runs the cross-field rules. The
first failure raises ``InputValidationError``; nothing is computed
from partially valid input.

Raw values may arrive as native Python values (library callers, JSON
bodies) or as strings (CLI ``key=value`` pairs, form fields), so
numeric, boolean, enum, map and set kinds all accept string forms.
Blank strings count as missing.

Example:
    validator = InputValidator(
        fields=(
            FieldSpec("fall_height", FieldKind.NUMBER, required=True,
                      minimum=0, exclusive_minimum=True, maximum=300),
        ),
    )
    values = validator.validate({"fall_height": "6"})
    assert values["fall_height"] == 6.0
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


class FieldKind(str, Enum):
    """Shape of a declared input field."""

    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    OPEN_ENUM = "open_enum"
    TEXT = "text"
    ENUM_MAP = "enum_map"
    ENUM_SET = "enum_set"


_CHOICE_KINDS = frozenset(
    {FieldKind.ENUM, FieldKind.OPEN_ENUM, FieldKind.ENUM_SET, FieldKind.ENUM_MAP}
)


class InputValidationError(ValueError):
    """Raised when an engine input fails validation.

    Attributes:
        field: Name of the offending input field.
        constraint: Which kind of check failed (required, type, range,
            choice or cross_field).
        message: Human-readable description of the failure.
        allowed: Allowed range or values, when the constraint has one.
    """

    def __init__(
        self,
        field: str,
        constraint: str,
        message: str,
        allowed: str | list[str] | None = None,
    ) -> None:
        self.field = field
        self.constraint = constraint
        self.message = message
        self.allowed = allowed
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for JSON responses."""
        result: dict[str, Any] = {
            "field": self.field,
            "constraint": self.constraint,
            "message": self.message,
        }
        if self.allowed is not None:
            result["allowed"] = self.allowed
        return result


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one engine input.

    Attributes:
        name: Input key.
        kind: Value shape, see ``FieldKind``.
        required: Whether the field must be supplied.
        minimum: Lower bound for numeric kinds.
        maximum: Upper bound for numeric kinds.
        exclusive_minimum: Lower bound excludes the bound itself.
        exclusive_maximum: Upper bound excludes the bound itself.
        choices: Enum class for ``ENUM``, ``OPEN_ENUM`` and ``ENUM_SET``
            kinds, and the key enum for ``ENUM_MAP``.
        value_choices: Value enum for ``ENUM_MAP``.
        default: Value used when an optional field is missing.
    """

    name: str
    kind: FieldKind
    required: bool = False
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    choices: type[Enum] | None = None
    value_choices: type[Enum] | None = None
    default: Any = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must not be empty")
        if self.kind in _CHOICE_KINDS:
            if self.choices is None:
                raise ValueError(f"{self.name}: {self.kind.value} fields need choices")
        if self.kind == FieldKind.ENUM_MAP and self.value_choices is None:
            raise ValueError(f"{self.name}: enum_map fields need value_choices")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"{self.name}: minimum must not exceed maximum")

    @property
    def range_text(self) -> str | None:
        """Interval notation for the numeric bounds, e.g. ``(0, 300]``."""
        if self.minimum is None and self.maximum is None:
            return None
        low = "(" if self.exclusive_minimum or self.minimum is None else "["
        high = ")" if self.exclusive_maximum or self.maximum is None else "]"
        low_value = "-inf" if self.minimum is None else _format_bound(self.minimum)
        high_value = "inf" if self.maximum is None else _format_bound(self.maximum)
        return f"{low}{low_value}, {high_value}{high}"


@dataclass(frozen=True)
class CrossFieldRule:
    """A check spanning several already-coerced fields.

    Attributes:
        field: Field reported in the error.
        predicate: Returns True when the values are acceptable.
        message: Error message on failure.
    """

    field: str
    predicate: Callable[[Mapping[str, Any]], bool]
    message: str


def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


class InputValidator:
    """Validates raw input mappings against ordered field declarations."""

    def __init__(
        self,
        fields: Iterable[FieldSpec],
        cross_checks: Iterable[CrossFieldRule] = (),
    ) -> None:
        self.fields: tuple[FieldSpec, ...] = tuple(fields)
        self.cross_checks: tuple[CrossFieldRule, ...] = tuple(cross_checks)
        names = [spec.name for spec in self.fields]
        if len(names) != len(set(names)):
            raise ValueError("field names must be unique")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def validate(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Coerce and check every declared field.

        Args:
            raw: Raw input mapping. Keys not declared are ignored.

        Returns:
            Dictionary of typed values keyed by field name, with defaults
            filled in for missing optional fields.

        Raises:
            InputValidationError: On the first failing check.
        """
        values: dict[str, Any] = {}
        for spec in self.fields:
            values[spec.name] = self._validate_field(spec, raw.get(spec.name))

        for rule in self.cross_checks:
            if not rule.predicate(values):
                logger.debug(f"Cross-field check failed on {rule.field}")
                raise InputValidationError(rule.field, "cross_field", rule.message)

        return values

    def _validate_field(self, spec: FieldSpec, value: Any) -> Any:
        if _is_missing(value) or (
            spec.kind in (FieldKind.ENUM_MAP, FieldKind.ENUM_SET)
            and spec.required
            and not value
        ):
            if spec.required:
                raise InputValidationError(
                    spec.name,
                    "required",
                    f"{spec.name} is required",
                    spec.range_text or self._choice_values(spec),
                )
            return self._default_for(spec)

        if spec.kind == FieldKind.NUMBER:
            return self._check_range(spec, self._coerce_number(spec, value))
        if spec.kind == FieldKind.INTEGER:
            return self._check_range(spec, self._coerce_integer(spec, value))
        if spec.kind == FieldKind.BOOLEAN:
            return self._coerce_boolean(spec, value)
        if spec.kind == FieldKind.ENUM:
            return self._coerce_choice(spec, self._enum_for(spec, spec.choices), value)
        if spec.kind == FieldKind.OPEN_ENUM:
            return self._coerce_open_choice(spec, value)
        if spec.kind == FieldKind.TEXT:
            return self._coerce_text(spec, value)
        if spec.kind == FieldKind.ENUM_MAP:
            return self._coerce_enum_map(spec, value)
        return self._coerce_enum_set(spec, value)

    def _default_for(self, spec: FieldSpec) -> Any:
        if spec.kind == FieldKind.ENUM_MAP:
            return dict(spec.default or {})
        if spec.kind == FieldKind.ENUM_SET:
            return frozenset(spec.default or ())
        return spec.default

    @staticmethod
    def _choice_values(spec: FieldSpec) -> list[str] | None:
        if spec.choices is None:
            return None
        return [member.value for member in spec.choices]

    def _type_error(self, spec: FieldSpec, expected: str) -> InputValidationError:
        return InputValidationError(
            spec.name,
            "type",
            f"{spec.name} must be {expected}",
            spec.range_text or self._choice_values(spec),
        )

    def _coerce_number(self, spec: FieldSpec, value: Any) -> float:
        if isinstance(value, bool):
            raise self._type_error(spec, "a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise self._type_error(spec, "a number") from None
        if not math.isfinite(number):
            raise self._type_error(spec, "a finite number")
        return number

    def _coerce_integer(self, spec: FieldSpec, value: Any) -> int:
        number = self._coerce_number(spec, value)
        if not number.is_integer():
            raise self._type_error(spec, "a whole number")
        return int(number)

    def _check_range(self, spec: FieldSpec, number: float) -> float:
        too_low = spec.minimum is not None and (
            number <= spec.minimum if spec.exclusive_minimum else number < spec.minimum
        )
        too_high = spec.maximum is not None and (
            number >= spec.maximum if spec.exclusive_maximum else number > spec.maximum
        )
        if too_low or too_high:
            raise InputValidationError(
                spec.name,
                "range",
                f"{spec.name} must be within {spec.range_text}, got {number:g}",
                spec.range_text,
            )
        return number

    def _coerce_boolean(self, spec: FieldSpec, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise self._type_error(spec, "true or false")

    @staticmethod
    def _enum_for(spec: FieldSpec, enum_cls: type[Enum] | None) -> type[Enum]:
        if enum_cls is None:
            raise ValueError(f"{spec.name}: {spec.kind.value} field declares no choices")
        return enum_cls

    def _coerce_choice(self, spec: FieldSpec, enum_cls: type[Enum], value: Any) -> Enum:
        if isinstance(value, enum_cls):
            return value
        candidate = value.strip() if isinstance(value, str) else value
        try:
            return enum_cls(candidate)
        except ValueError:
            raise InputValidationError(
                spec.name,
                "choice",
                f"{spec.name} must be one of: "
                + ", ".join(member.value for member in enum_cls)
                + f" (got {value!r})",
                [member.value for member in enum_cls],
            ) from None

    def _coerce_open_choice(self, spec: FieldSpec, value: Any) -> Enum | str:
        """Match a known member, or pass the normalized name through.

        Names are matched case-insensitively with hyphens read as
        underscores. Unknown names are left for the consuming table
        lookup to resolve, so they surface as configuration gaps rather
        than as input errors.
        """
        enum_cls = self._enum_for(spec, spec.choices)
        if isinstance(value, enum_cls):
            return value
        if not isinstance(value, str):
            raise self._type_error(spec, "text")
        key = value.strip().lower().replace("-", "_")
        try:
            return enum_cls(key)
        except ValueError:
            logger.debug(f"{spec.name}: passing through unlisted value {key!r}")
            return key

    def _coerce_text(self, spec: FieldSpec, value: Any) -> str:
        if not isinstance(value, str):
            raise self._type_error(spec, "text")
        return value.strip()

    def _coerce_enum_map(self, spec: FieldSpec, value: Any) -> dict[Enum, Enum]:
        if isinstance(value, str):
            pairs: list[tuple[str, str]] = []
            for item in value.split(","):
                key, sep, level = item.partition(":")
                if not sep:
                    raise self._type_error(spec, "a list of name:level pairs")
                pairs.append((key, level))
        elif isinstance(value, Mapping):
            pairs = list(value.items())
        else:
            raise self._type_error(spec, "a mapping")

        keys = self._enum_for(spec, spec.choices)
        levels = self._enum_for(spec, spec.value_choices)
        result: dict[Enum, Enum] = {}
        for key, level in pairs:
            result[self._coerce_choice(spec, keys, key)] = (
                self._coerce_choice(spec, levels, level)
            )
        # Canonical order follows the key enum's declaration order
        return {member: result[member] for member in keys if member in result}

    def _coerce_enum_set(self, spec: FieldSpec, value: Any) -> frozenset[Enum]:
        if isinstance(value, str):
            items: Iterable[Any] = [item for item in value.split(",") if item.strip()]
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = value
        else:
            raise self._type_error(spec, "a list")
        members = self._enum_for(spec, spec.choices)
        return frozenset(self._coerce_choice(spec, members, item) for item in items)


__all__ = [
    "CrossFieldRule",
    "FieldKind",
    "FieldSpec",
    "InputValidationError",
    "InputValidator",
]

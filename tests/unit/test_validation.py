"""Unit tests for declarative input validation.

These tests verify:
- Required fields, defaults and blank strings
- Numeric coercion and inclusive/exclusive range bounds
- Boolean, enum, enum map and enum set coercion from strings
- Cross-field rules run after field checks
- Error payloads carry field, constraint and allowed values
"""

from __future__ import annotations

import pytest

from worksafe.domain.services.validation import (
    CrossFieldRule,
    FieldKind,
    FieldSpec,
    InputValidationError,
    InputValidator,
)
from worksafe.domain.value_objects import (
    HazardSeverity,
    HazardType,
    Industry,
    Regulation,
    SurfaceType,
)


def _height_validator() -> InputValidator:
    return InputValidator(
        (
            FieldSpec(
                "fall_height", FieldKind.NUMBER, required=True,
                minimum=0, exclusive_minimum=True, maximum=300,
            ),
            FieldSpec("work_days", FieldKind.INTEGER, minimum=1, maximum=7, default=5),
        )
    )


class TestFieldSpec:
    """Tests for FieldSpec declarations."""

    def test_range_text_inclusive(self) -> None:
        spec = FieldSpec("humidity", FieldKind.NUMBER, minimum=0, maximum=100)
        assert spec.range_text == "[0, 100]"

    def test_range_text_exclusive_minimum(self) -> None:
        spec = FieldSpec(
            "fall_height", FieldKind.NUMBER, minimum=0, exclusive_minimum=True, maximum=300
        )
        assert spec.range_text == "(0, 300]"

    def test_range_text_open_upper(self) -> None:
        spec = FieldSpec("hours", FieldKind.NUMBER, minimum=0, exclusive_minimum=True)
        assert spec.range_text == "(0, inf)"

    def test_range_text_none_without_bounds(self) -> None:
        assert FieldSpec("flag", FieldKind.BOOLEAN).range_text is None

    def test_enum_field_requires_choices(self) -> None:
        with pytest.raises(ValueError, match="need choices"):
            FieldSpec("surface_type", FieldKind.ENUM)

    def test_enum_map_requires_value_choices(self) -> None:
        with pytest.raises(ValueError, match="value_choices"):
            FieldSpec("hazards", FieldKind.ENUM_MAP, choices=HazardType)

    def test_minimum_above_maximum_rejected(self) -> None:
        with pytest.raises(ValueError, match="minimum must not exceed maximum"):
            FieldSpec("x", FieldKind.NUMBER, minimum=10, maximum=1)

    def test_duplicate_field_names_rejected(self) -> None:
        spec = FieldSpec("x", FieldKind.NUMBER)
        with pytest.raises(ValueError, match="unique"):
            InputValidator((spec, spec))


class TestRequiredAndDefaults:
    """Tests for missing values."""

    def test_missing_required_field(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            _height_validator().validate({})

        assert exc_info.value.field == "fall_height"
        assert exc_info.value.constraint == "required"
        assert exc_info.value.allowed == "(0, 300]"

    def test_blank_string_counts_as_missing(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            _height_validator().validate({"fall_height": "  "})
        assert exc_info.value.constraint == "required"

    def test_default_filled_for_optional_field(self) -> None:
        values = _height_validator().validate({"fall_height": 6})
        assert values["work_days"] == 5

    def test_undeclared_keys_ignored(self) -> None:
        values = _height_validator().validate({"fall_height": 6, "colour": "red"})
        assert "colour" not in values


class TestNumbers:
    """Tests for numeric coercion and bounds."""

    def test_string_number_coerced(self) -> None:
        assert _height_validator().validate({"fall_height": "6.5"})["fall_height"] == 6.5

    def test_exclusive_minimum_rejects_bound(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            _height_validator().validate({"fall_height": 0})

        assert exc_info.value.constraint == "range"
        assert "(0, 300]" in exc_info.value.message

    def test_inclusive_maximum_accepts_bound(self) -> None:
        assert _height_validator().validate({"fall_height": 300})["fall_height"] == 300.0

    def test_above_maximum_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            _height_validator().validate({"fall_height": 300.1})

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            _height_validator().validate({"fall_height": "tall"})
        assert exc_info.value.constraint == "type"

    def test_boolean_is_not_a_number(self) -> None:
        with pytest.raises(InputValidationError):
            _height_validator().validate({"fall_height": True})

    def test_nan_rejected(self) -> None:
        with pytest.raises(InputValidationError):
            _height_validator().validate({"fall_height": float("nan")})

    def test_integer_field_rejects_fraction(self) -> None:
        with pytest.raises(InputValidationError) as exc_info:
            _height_validator().validate({"fall_height": 6, "work_days": 2.5})
        assert exc_info.value.field == "work_days"

    def test_integer_field_accepts_whole_float(self) -> None:
        values = _height_validator().validate({"fall_height": 6, "work_days": "3"})
        assert values["work_days"] == 3
        assert isinstance(values["work_days"], int)


class TestChoices:
    """Tests for boolean, enum, map and set kinds."""

    def test_boolean_strings(self) -> None:
        validator = InputValidator((FieldSpec("flag", FieldKind.BOOLEAN, default=False),))
        assert validator.validate({"flag": "yes"})["flag"] is True
        assert validator.validate({"flag": "false"})["flag"] is False
        assert validator.validate({"flag": 1})["flag"] is True

    def test_invalid_boolean(self) -> None:
        validator = InputValidator((FieldSpec("flag", FieldKind.BOOLEAN),))
        with pytest.raises(InputValidationError):
            validator.validate({"flag": "maybe"})

    def test_enum_coerced(self) -> None:
        validator = InputValidator(
            (FieldSpec("surface_type", FieldKind.ENUM, choices=SurfaceType),)
        )
        assert validator.validate({"surface_type": "water"})["surface_type"] == SurfaceType.WATER

    def test_enum_choice_error_lists_allowed(self) -> None:
        validator = InputValidator(
            (FieldSpec("surface_type", FieldKind.ENUM, choices=SurfaceType),)
        )
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate({"surface_type": "lava"})

        assert exc_info.value.constraint == "choice"
        assert "concrete" in exc_info.value.allowed

    def test_enum_map_from_string_in_canonical_order(self) -> None:
        validator = InputValidator(
            (
                FieldSpec(
                    "hazards", FieldKind.ENUM_MAP, required=True,
                    choices=HazardType, value_choices=HazardSeverity,
                ),
            )
        )
        hazards = validator.validate({"hazards": "fall:high,chemical:low"})["hazards"]

        assert list(hazards) == [HazardType.CHEMICAL, HazardType.FALL]
        assert hazards[HazardType.FALL] == HazardSeverity.HIGH

    def test_empty_required_enum_map_is_missing(self) -> None:
        validator = InputValidator(
            (
                FieldSpec(
                    "hazards", FieldKind.ENUM_MAP, required=True,
                    choices=HazardType, value_choices=HazardSeverity,
                ),
            )
        )
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate({"hazards": {}})
        assert exc_info.value.constraint == "required"

    def test_enum_map_bad_pair(self) -> None:
        validator = InputValidator(
            (
                FieldSpec(
                    "hazards", FieldKind.ENUM_MAP,
                    choices=HazardType, value_choices=HazardSeverity,
                ),
            )
        )
        with pytest.raises(InputValidationError):
            validator.validate({"hazards": "chemical"})

    def test_enum_set_from_list_and_string(self) -> None:
        validator = InputValidator(
            (FieldSpec("regulations", FieldKind.ENUM_SET, choices=Regulation),)
        )
        assert validator.validate({"regulations": ["osha", "dot"]})["regulations"] == frozenset(
            {Regulation.OSHA, Regulation.DOT}
        )
        assert validator.validate({"regulations": "rcra"})["regulations"] == frozenset(
            {Regulation.RCRA}
        )
        assert validator.validate({})["regulations"] == frozenset()

    def test_open_enum_matches_member(self) -> None:
        validator = InputValidator(
            (FieldSpec("industry", FieldKind.OPEN_ENUM, choices=Industry),)
        )
        assert validator.validate({"industry": "Oil-Gas"})["industry"] == Industry.OIL_GAS
        assert validator.validate({"industry": Industry.RETAIL})["industry"] == Industry.RETAIL

    def test_open_enum_passes_unlisted_name_through(self) -> None:
        validator = InputValidator(
            (FieldSpec("industry", FieldKind.OPEN_ENUM, choices=Industry),)
        )
        assert validator.validate({"industry": " Water-Utilities "})["industry"] == (
            "water_utilities"
        )

    def test_open_enum_rejects_non_text(self) -> None:
        validator = InputValidator(
            (FieldSpec("industry", FieldKind.OPEN_ENUM, choices=Industry),)
        )
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate({"industry": 3})
        assert exc_info.value.constraint == "type"
        assert "general" in exc_info.value.allowed

    def test_open_enum_requires_choices(self) -> None:
        with pytest.raises(ValueError, match="need choices"):
            FieldSpec("industry", FieldKind.OPEN_ENUM)

    def test_choices_guard_survives_optimized_mode(self) -> None:
        spec = FieldSpec("surface_type", FieldKind.TEXT)
        object.__setattr__(spec, "kind", FieldKind.ENUM)
        validator = InputValidator((spec,))

        with pytest.raises(ValueError, match="declares no choices") as exc_info:
            validator.validate({"surface_type": "water"})
        assert not isinstance(exc_info.value, InputValidationError)

    def test_enum_map_guard_on_missing_value_choices(self) -> None:
        spec = FieldSpec("hazards", FieldKind.ENUM_SET, choices=HazardType)
        object.__setattr__(spec, "kind", FieldKind.ENUM_MAP)
        validator = InputValidator((spec,))

        with pytest.raises(ValueError, match="declares no choices"):
            validator.validate({"hazards": {"fall": "high"}})


class TestCrossFieldRules:
    """Tests for cross-field rules."""

    def test_cross_field_failure(self) -> None:
        validator = InputValidator(
            (
                FieldSpec("dry_bulb", FieldKind.NUMBER, required=True),
                FieldSpec("wet_bulb", FieldKind.NUMBER, required=True),
            ),
            (
                CrossFieldRule(
                    "wet_bulb",
                    lambda values: values["wet_bulb"] <= values["dry_bulb"],
                    "wet_bulb cannot exceed dry_bulb",
                ),
            ),
        )
        with pytest.raises(InputValidationError) as exc_info:
            validator.validate({"dry_bulb": 20, "wet_bulb": 25})

        assert exc_info.value.field == "wet_bulb"
        assert exc_info.value.constraint == "cross_field"

    def test_error_to_dict(self) -> None:
        error = InputValidationError("x", "range", "x must be within [0, 1]", "[0, 1]")
        assert error.to_dict() == {
            "field": "x",
            "constraint": "range",
            "message": "x must be within [0, 1]",
            "allowed": "[0, 1]",
        }

    def test_error_to_dict_omits_missing_allowed(self) -> None:
        error = InputValidationError("x", "cross_field", "bad")
        assert "allowed" not in error.to_dict()

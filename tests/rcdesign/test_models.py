"""Tests for the pydantic models — defaults, constraints, aliases, units."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rcdesign.models import (
    LENGTH_FIELDS,
    AeroCoefficients,
    DesignParameters,
    PerformanceResult,
    ValidationWarning,
)


class TestDesignParametersDefaults:
    def test_defaults(self) -> None:
        params = DesignParameters()
        assert params.length_unit == "m"
        assert params.wing_span == 1.0
        assert params.wing_chord == 0.2
        assert params.airfoil == "semi-symmetrical"
        assert params.taper_ratio == 1.0
        assert params.tail_type == "conventional"
        assert params.winglet_type == "none"
        assert params.aileron_enable is False
        assert params.prop_blades == 2

    def test_is_delta(self) -> None:
        assert DesignParameters(airfoil="delta").is_delta
        assert not DesignParameters().is_delta


class TestDesignParametersConstraints:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("wing_span", 0.0),
            ("wing_chord", -0.1),
            ("taper_ratio", 0.0),
            ("taper_ratio", 1.5),
            ("sweep_angle", 61.0),
            ("sweep_angle", -46.0),
            ("prop_blades", 0),
            ("prop_blades", 7),
            ("total_weight", -1.0),
            ("fuselage_diameter", 0.0),
        ],
    )
    def test_rejects_out_of_range(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            DesignParameters(**{field: value})

    def test_rejects_unknown_literal(self) -> None:
        with pytest.raises(ValidationError):
            DesignParameters(airfoil="naca-0012")
        with pytest.raises(ValidationError):
            DesignParameters(length_unit="ft")

    def test_flight_condition_unbounded(self) -> None:
        params = DesignParameters(angle_of_attack=45.0, temperature=-300.0, altitude=80000.0)
        assert params.altitude == 80000.0

    def test_frozen(self) -> None:
        params = DesignParameters()
        with pytest.raises(ValidationError):
            params.wing_span = 2.0  # type: ignore[misc]


class TestCamelCase:
    def test_accepts_camel_case_input(self) -> None:
        params = DesignParameters.model_validate({"wingSpan": 1.5, "tailType": "v-tail"})
        assert params.wing_span == 1.5
        assert params.tail_type == "v-tail"

    def test_accepts_snake_case_input(self) -> None:
        assert DesignParameters(wing_span=1.5).wing_span == 1.5

    def test_dumps_camel_case(self) -> None:
        data = DesignParameters().model_dump(by_alias=True)
        assert "wingSpan" in data
        assert "angleOfAttack" in data
        assert "wing_span" not in data

    def test_output_models(self) -> None:
        assert AeroCoefficients(lift_coefficient=0.5, drag_coefficient=0.02).model_dump(
            by_alias=True
        ) == {"liftCoefficient": 0.5, "dragCoefficient": 0.02}
        warning = ValidationWarning(id="W01", message="x").model_dump(by_alias=True)
        assert warning == {"id": "W01", "level": "warn", "message": "x", "fields": []}

    def test_not_applicable_thrust_ratio(self) -> None:
        perf = PerformanceResult(
            air_density=1.225,
            wing_area=0.2,
            lift_force=1.0,
            drag_force=0.1,
            static_thrust=3.0,
            thrust_to_weight="N/A",
        )
        assert perf.model_dump(by_alias=True)["thrustToWeight"] == "N/A"

    def test_nan_serializes_as_null(self) -> None:
        perf = PerformanceResult(
            air_density=float("nan"),
            wing_area=0.2,
            lift_force=float("nan"),
            drag_force=float("nan"),
            static_thrust=float("nan"),
            thrust_to_weight=float("nan"),
        )
        assert '"airDensity":null' in perf.model_dump_json(by_alias=True)


class TestUnits:
    def test_metres_returns_same_object(self) -> None:
        params = DesignParameters()
        assert params.in_meters() is params

    @pytest.mark.parametrize("unit,factor", [("cm", 0.01), ("mm", 0.001), ("in", 0.0254)])
    def test_converts_every_length(self, unit: str, factor: float) -> None:
        params = DesignParameters(length_unit=unit)
        converted = params.in_meters()
        assert converted.length_unit == "m"
        for name in LENGTH_FIELDS:
            assert getattr(converted, name) == pytest.approx(getattr(params, name) * factor)

    def test_propeller_stays_in_inches(self) -> None:
        converted = DesignParameters(length_unit="mm", prop_diameter=10.0).in_meters()
        assert converted.prop_diameter == 10.0

    def test_angles_untouched(self) -> None:
        converted = DesignParameters(length_unit="cm", sweep_angle=20.0).in_meters()
        assert converted.sweep_angle == 20.0

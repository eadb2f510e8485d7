"""Pydantic models — shared contract between the core and its collaborators.

API Naming Contract:
  - Python code uses snake_case field names.
  - The frontend (renderer, charts, readouts) expects camelCase.
  - Every model inherits CamelModel, so model_dump(by_alias=True) produces
    camelCase keys and input is accepted in either form (populate_by_name).

DesignParameters is the only input.  It is frozen: one snapshot drives one
recompute, and the core never reads fields incrementally.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enum / Literal Types
# ---------------------------------------------------------------------------

AirfoilType = Literal["flat-bottom", "semi-symmetrical", "symmetrical", "delta"]
FuselageShape = Literal["boxy", "lofted"]
TailType = Literal["conventional", "t-tail", "v-tail"]
WingletType = Literal["none", "standard"]
WingPosition = Literal["high", "mid", "low"]
WingMaterial = Literal["foam", "balsa", "plastic"]
LengthUnit = Literal["m", "cm", "mm", "in"]

# Conversion factors to metres for every LengthUnit.
UNIT_CONVERSIONS: dict[str, float] = {
    "m": 1.0,
    "cm": 0.01,
    "mm": 0.001,
    "in": 0.0254,
}

# Airframe lengths expressed in DesignParameters.length_unit.  Propeller
# dimensions are always inches and are not part of this list.
LENGTH_FIELDS: tuple[str, ...] = (
    "wing_span",
    "wing_chord",
    "fuselage_length",
    "fuselage_diameter",
    "h_stab_span",
    "h_stab_chord",
    "v_stab_height",
    "v_stab_chord",
    "winglet_height",
    "aileron_length",
    "aileron_width",
    "aileron_position",
)

# Sentinel reported instead of a thrust-to-weight ratio when weight is zero.
NOT_APPLICABLE = "N/A"


# ---------------------------------------------------------------------------
# Base model for camelCase serialization
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    """Base for models serialized to the frontend with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


# ---------------------------------------------------------------------------
# DesignParameters: the per-recompute input snapshot
# ---------------------------------------------------------------------------

class DesignParameters(CamelModel):
    """Complete airframe design parameters. Flat structure, snake_case fields.

    Field constraints are the parameter-source validation: a snapshot that
    reaches the core has positive lengths and a taper ratio in (0, 1].
    Angle of attack, temperature and altitude are deliberately unbounded.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, frozen=True)

    # ── Units ─────────────────────────────────────────────────────────
    length_unit: LengthUnit = "m"

    # ── Wing ──────────────────────────────────────────────────────────
    wing_span: float = Field(default=1.0, gt=0)
    wing_chord: float = Field(default=0.2, gt=0)      # root chord
    airfoil: AirfoilType = "semi-symmetrical"
    sweep_angle: float = Field(default=0.0, ge=-45, le=60)   # deg
    taper_ratio: float = Field(default=1.0, gt=0, le=1.0)
    wing_position: WingPosition = "high"
    wing_material: WingMaterial = "foam"

    # ── Fuselage ──────────────────────────────────────────────────────
    fuselage_length: float = Field(default=0.8, gt=0)
    fuselage_diameter: float = Field(default=0.1, gt=0)
    fuselage_shape: FuselageShape = "lofted"

    # ── Tail ──────────────────────────────────────────────────────────
    tail_type: TailType = "conventional"
    h_stab_span: float = Field(default=0.35, gt=0)
    h_stab_chord: float = Field(default=0.1, gt=0)
    v_stab_height: float = Field(default=0.12, gt=0)
    v_stab_chord: float = Field(default=0.1, gt=0)

    # ── Winglets ──────────────────────────────────────────────────────
    winglet_type: WingletType = "none"
    winglet_height: float = Field(default=0.05, gt=0)
    winglet_cant_angle: float = Field(default=0.0, ge=-60, le=60)   # deg from vertical

    # ── Ailerons ──────────────────────────────────────────────────────
    aileron_enable: bool = False
    aileron_length: float = Field(default=0.2, gt=0)     # spanwise
    aileron_width: float = Field(default=0.04, gt=0)     # chordwise
    aileron_position: float = Field(default=0.05, ge=0)  # inset from the tip

    # ── Propulsion ────────────────────────────────────────────────────
    prop_diameter: float = Field(default=8.0, gt=0)   # inches
    prop_pitch: float = Field(default=4.0, gt=0)      # inches
    prop_blades: int = Field(default=2, ge=1, le=6)
    motor_rpm: float = Field(default=10000.0, ge=0)

    # ── Flight condition ──────────────────────────────────────────────
    airspeed: float = Field(default=50.0, ge=0)       # km/h
    temperature: float = 15.0                         # deg C
    altitude: float = 0.0                             # m
    angle_of_attack: float = 5.0                      # deg

    # ── Mass ──────────────────────────────────────────────────────────
    total_weight: float = Field(default=800.0, ge=0)  # grams
    cg_fraction: float = Field(default=0.3, ge=0.0, le=1.0)

    @property
    def is_delta(self) -> bool:
        return self.airfoil == "delta"

    def in_meters(self) -> DesignParameters:
        """Return a copy with every airframe length expressed in metres."""
        factor = UNIT_CONVERSIONS[self.length_unit]
        if self.length_unit == "m":
            return self
        update: dict[str, object] = {name: getattr(self, name) * factor for name in LENGTH_FIELDS}
        update["length_unit"] = "m"
        return self.model_copy(update=update)


# ---------------------------------------------------------------------------
# Derived outputs, recreated on every recompute
# ---------------------------------------------------------------------------

class AeroCoefficients(CamelModel):
    """Lift and total drag coefficients at the current angle of attack."""

    lift_coefficient: float
    drag_coefficient: float


class PerformanceResult(CamelModel):
    """Forces and ratios at the current flight condition (SI units)."""

    air_density: float        # kg/m^3
    wing_area: float          # m^2
    lift_force: float         # N
    drag_force: float         # N
    static_thrust: float      # N
    thrust_to_weight: Union[float, Literal["N/A"]]


class AoaSweepPoint(CamelModel):
    """One point of the lift/drag curve over angle of attack."""

    angle_of_attack: float
    lift_coefficient: float
    drag_coefficient: float
    lift_force: float
    drag_force: float


class SpeedSweepPoint(CamelModel):
    """One point of the lift/drag-vs-airspeed chart (airspeed in m/s)."""

    airspeed: float
    lift_force: float
    drag_force: float


class DerivedValues(CamelModel):
    """Read-only readouts computed alongside the performance result."""

    tip_chord: float           # m
    aspect_ratio: float
    mean_aero_chord: float     # m
    wing_loading: float        # g/dm^2
    wing_weight_g: float
    stall_angle: float         # deg


class ValidationWarning(CamelModel):
    """Non-blocking design warning."""

    id: str  # W01-W06
    level: Literal["warn"] = "warn"
    message: str
    fields: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# REST Response Types
# ---------------------------------------------------------------------------

class GenerationResult(CamelModel):
    """Response from POST /api/generate."""

    coefficients: AeroCoefficients
    performance: PerformanceResult
    derived: DerivedValues
    aoa_sweep: list[AoaSweepPoint] = Field(default_factory=list)
    speed_sweep: list[SpeedSweepPoint] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)


class AirfoilInfo(CamelModel):
    """Constants of one airfoil family (GET /api/airfoils)."""

    name: AirfoilType
    zero_lift_angle: float
    stall_angle: float
    thickness_ratio: float


class PreviewTrailer(CamelModel):
    """JSON trailer appended to a 0x01 mesh frame on /ws/preview.

    Non-finite floats (e.g. density above the model ceiling) serialize as
    null.
    """

    generation: int
    component_ranges: dict[str, list[int]]
    coefficients: AeroCoefficients
    performance: PerformanceResult
    derived: DerivedValues
    aoa_sweep: list[AoaSweepPoint] = Field(default_factory=list)
    speed_sweep: list[SpeedSweepPoint] = Field(default_factory=list)
    validation: list[ValidationWarning] = Field(default_factory=list)

"""Shared fixtures for rcdesign tests."""

from __future__ import annotations

import pytest

from rcdesign.models import DesignParameters


# ---------------------------------------------------------------------------
# Design Fixtures (used by geometry, performance & validation tests)
# ---------------------------------------------------------------------------


@pytest.fixture
def default_params() -> DesignParameters:
    """DesignParameters with all default values (1 m trainer)."""
    return DesignParameters()


@pytest.fixture
def tapered_params() -> DesignParameters:
    """Swept, tapered wing with winglets and ailerons."""
    return DesignParameters(
        wing_span=1.2,
        wing_chord=0.25,
        sweep_angle=20.0,
        taper_ratio=0.5,
        winglet_type="standard",
        winglet_height=0.06,
        winglet_cant_angle=15.0,
        aileron_enable=True,
    )


@pytest.fixture
def delta_params() -> DesignParameters:
    """Flying-wing style delta."""
    return DesignParameters(
        airfoil="delta",
        wing_span=1.0,
        wing_chord=1.0,
        fuselage_shape="boxy",
    )


@pytest.fixture
def vtail_params() -> DesignParameters:
    return DesignParameters(tail_type="v-tail", prop_blades=3)

"""Info routes — static tables the frontend needs to build its controls.

GET /api/airfoils lists every airfoil family with its zero-lift angle, stall
angle and thickness ratio, in the order the selector shows them.
"""

from __future__ import annotations

from fastapi import APIRouter

from rcdesign.airfoils import AIRFOILS
from rcdesign.models import AirfoilInfo

router = APIRouter(prefix="/api", tags=["info"])


@router.get("/airfoils", response_model=list[AirfoilInfo])
async def list_airfoils() -> list[AirfoilInfo]:
    return [
        AirfoilInfo(
            name=profile.name,
            zero_lift_angle=profile.zero_lift_angle,
            stall_angle=profile.stall_angle,
            thickness_ratio=profile.thickness_ratio,
        )
        for profile in AIRFOILS.values()
    ]

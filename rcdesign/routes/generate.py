"""POST /api/generate — REST fallback for the readouts.

Used when the WebSocket is unavailable.  Returns coefficients, performance,
sweeps, derived values and warnings.  Mesh data is not included in the REST
response (use the WebSocket for live preview).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response

from rcdesign.designer import compute_outputs
from rcdesign.models import DesignParameters, GenerationResult

logger = logging.getLogger("rcdesign.generate")

router = APIRouter(prefix="/api", tags=["generate"])


@router.post("/generate", response_model=GenerationResult)
async def generate(params: DesignParameters) -> Response:
    """Compute every readout for a design, without geometry.

    Serialized with model_dump_json so that non-finite values (density
    above the atmosphere model ceiling) come out as null instead of
    breaking the JSON encoder.
    """
    try:
        result = compute_outputs(params).to_result()
        return Response(
            content=result.model_dump_json(by_alias=True),
            media_type="application/json",
        )
    except Exception as exc:
        logger.exception("Generation failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

"""Recompute orchestrator -- one parameter snapshot in, one mesh set out.

``AirframeDesigner.update()`` runs the whole pipeline synchronously:

1. release the previous MeshSet (its buffers are dropped)
2. assemble the airframe into the four renderer components
3. compute coefficients, performance, sweeps, derived values, warnings
4. publish the new MeshSet to renderer sinks and DesignOutputs to
   readout sinks

Only one generation is ever current.  The designer is not thread-safe: the
WebSocket handler owns one per connection and never runs two updates at
once.  Calling ``update()`` again from inside a sink raises RuntimeError.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable

from rcdesign.geometry import MeshData, assemble_airframe, component_ranges, merge_meshes
from rcdesign.models import (
    AeroCoefficients,
    AoaSweepPoint,
    DerivedValues,
    DesignParameters,
    GenerationResult,
    PerformanceResult,
    SpeedSweepPoint,
    ValidationWarning,
)
from rcdesign.performance import (
    aoa_sweep,
    compute_coefficients,
    compute_derived_values,
    compute_performance,
    speed_sweep,
)
from rcdesign.validation import compute_warnings

logger = logging.getLogger("rcdesign.designer")


class DesignerState(str, enum.Enum):
    IDLE = "idle"
    RECOMPUTING = "recomputing"


@dataclass
class MeshSet:
    """The renderer components of one generation."""

    generation: int
    components: dict[str, MeshData] = field(default_factory=dict)
    released: bool = False

    def merged(self) -> MeshData:
        """All components concatenated in publish order."""
        return merge_meshes(list(self.components.values()))

    def ranges(self) -> dict[str, list[int]]:
        return component_ranges(self.components)

    def release(self) -> None:
        """Drop every buffer.  Idempotent."""
        self.components = {}
        self.released = True


@dataclass(frozen=True)
class DesignOutputs:
    """Readout values of one generation."""

    generation: int
    coefficients: AeroCoefficients
    performance: PerformanceResult
    derived: DerivedValues
    aoa_sweep: list[AoaSweepPoint]
    speed_sweep: list[SpeedSweepPoint]
    warnings: list[ValidationWarning]

    def to_result(self) -> GenerationResult:
        return GenerationResult(
            coefficients=self.coefficients,
            performance=self.performance,
            derived=self.derived,
            aoa_sweep=self.aoa_sweep,
            speed_sweep=self.speed_sweep,
            warnings=self.warnings,
        )


RendererSink = Callable[[MeshSet], None]
ReadoutSink = Callable[[DesignOutputs], None]


def compute_outputs(params: DesignParameters, generation: int = 0) -> DesignOutputs:
    """Every readout for *params*, no geometry.

    Used directly by POST /api/generate.
    """
    p = params.in_meters()
    performance = compute_performance(p)
    return DesignOutputs(
        generation=generation,
        coefficients=compute_coefficients(p),
        performance=performance,
        derived=compute_derived_values(p),
        aoa_sweep=aoa_sweep(p),
        speed_sweep=speed_sweep(p),
        warnings=compute_warnings(p, performance),
    )


class AirframeDesigner:
    """Owns the current mesh set and fans results out to subscribers."""

    def __init__(self) -> None:
        self._state = DesignerState.IDLE
        self._generation = 0
        self._meshes: MeshSet | None = None
        self._outputs: DesignOutputs | None = None
        self._renderers: list[RendererSink] = []
        self._readouts: list[ReadoutSink] = []

    @property
    def state(self) -> DesignerState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_meshes(self) -> MeshSet | None:
        return self._meshes

    @property
    def current_outputs(self) -> DesignOutputs | None:
        return self._outputs

    def subscribe_renderer(self, sink: RendererSink) -> None:
        self._renderers.append(sink)

    def subscribe_readouts(self, sink: ReadoutSink) -> None:
        self._readouts.append(sink)

    def update(self, params: DesignParameters) -> DesignOutputs:
        """Recompute everything for *params* and publish the results.

        Raises:
            RuntimeError: if called while a recompute is in progress.
        """
        if self._state is DesignerState.RECOMPUTING:
            raise RuntimeError("update() called during a recompute")

        self._state = DesignerState.RECOMPUTING
        try:
            if self._meshes is not None:
                self._meshes.release()
                self._meshes = None

            self._generation += 1
            generation = self._generation

            meshes = MeshSet(generation=generation, components=assemble_airframe(params))
            outputs = compute_outputs(params, generation)
            self._meshes = meshes
            self._outputs = outputs

            logger.debug(
                "Generation %d: %d faces, %d warnings",
                generation,
                sum(m.face_count for m in meshes.components.values()),
                len(outputs.warnings),
            )

            for renderer in self._renderers:
                renderer(meshes)
            for readout in self._readouts:
                readout(outputs)
            return outputs
        finally:
            self._state = DesignerState.IDLE

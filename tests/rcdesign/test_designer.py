"""Tests for the recompute orchestrator."""

from __future__ import annotations

import pytest

from rcdesign.designer import (
    AirframeDesigner,
    DesignerState,
    DesignOutputs,
    MeshSet,
    compute_outputs,
)
from rcdesign.geometry.engine import COMPONENTS
from rcdesign.models import DesignParameters


class TestAirframeDesigner:
    def test_starts_idle_and_empty(self) -> None:
        designer = AirframeDesigner()
        assert designer.state is DesignerState.IDLE
        assert designer.generation == 0
        assert designer.current_meshes is None
        assert designer.current_outputs is None

    def test_update_builds_all_components(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()
        outputs = designer.update(default_params)

        meshes = designer.current_meshes
        assert meshes is not None
        assert tuple(meshes.components) == COMPONENTS
        assert meshes.generation == outputs.generation == 1
        assert designer.state is DesignerState.IDLE
        assert len(outputs.aoa_sweep) == 31

    def test_publishes_to_sinks(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()
        rendered: list[MeshSet] = []
        readouts: list[DesignOutputs] = []
        designer.subscribe_renderer(rendered.append)
        designer.subscribe_readouts(readouts.append)

        designer.update(default_params)

        assert len(rendered) == 1 and len(readouts) == 1
        assert rendered[0] is designer.current_meshes
        assert readouts[0] is designer.current_outputs

    def test_state_is_recomputing_inside_sink(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()
        seen: list[DesignerState] = []
        designer.subscribe_readouts(lambda _: seen.append(designer.state))
        designer.update(default_params)
        assert seen == [DesignerState.RECOMPUTING]

    def test_previous_generation_released(
        self, default_params: DesignParameters, tapered_params: DesignParameters
    ) -> None:
        designer = AirframeDesigner()
        designer.update(default_params)
        first = designer.current_meshes
        assert first is not None

        designer.update(tapered_params)

        assert first.released
        assert first.components == {}
        current = designer.current_meshes
        assert current is not None and current is not first
        assert current.generation == 2
        assert not current.released

    def test_reentrant_update_raises(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()

        def nested(_: MeshSet) -> None:
            designer.update(default_params)

        designer.subscribe_renderer(nested)
        with pytest.raises(RuntimeError, match="during a recompute"):
            designer.update(default_params)
        assert designer.state is DesignerState.IDLE

    def test_failed_update_returns_to_idle(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()

        def broken(_: DesignOutputs) -> None:
            raise ValueError("sink failed")

        designer.subscribe_readouts(broken)
        with pytest.raises(ValueError):
            designer.update(default_params)
        assert designer.state is DesignerState.IDLE


class TestMeshSet:
    def test_merged_and_ranges_agree(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()
        designer.update(default_params)
        meshes = designer.current_meshes
        assert meshes is not None
        assert meshes.ranges()["propeller"][1] == meshes.merged().face_count

    def test_release_is_idempotent(self) -> None:
        meshes = MeshSet(generation=1)
        meshes.release()
        meshes.release()
        assert meshes.released


class TestComputeOutputs:
    def test_matches_designer(self, default_params: DesignParameters) -> None:
        designer = AirframeDesigner()
        from_designer = designer.update(default_params)
        standalone = compute_outputs(default_params)
        assert standalone.performance == from_designer.performance
        assert standalone.warnings == from_designer.warnings

    def test_to_result(self, default_params: DesignParameters) -> None:
        result = compute_outputs(default_params).to_result()
        assert len(result.speed_sweep) == 26
        assert [w.id for w in result.warnings] == ["W02"]

"""/ws/preview — WebSocket handler for the interactive 3D preview.

Connection lifecycle:
1. Client opens ws://host:8000/ws/preview
2. Client sends DesignParameters JSON on each parameter change
3. Server marks any in-flight recompute as superseded (last-write-wins)
4. Server sends a binary mesh frame (0x01) or an error frame (0x02)
5. On disconnect, pending work is dropped

Concurrency model:
- Each connection owns one AirframeDesigner.
- A task group runs two concurrent tasks: a reader and a generator.
- The reader receives messages, validates them, cancels the in-flight
  generation scope, and posts designs to a memory channel.
- The generator picks up the latest design and runs designer.update() in a
  worker thread, one at a time.
- A lock protects ws.send_bytes to prevent interleaved frames.
- `abandon_on_cancel` is NOT used; a running recompute always finishes,
  so the designer is never entered twice; its result is just discarded.
"""

from __future__ import annotations

import json
import logging
import struct

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from rcdesign.designer import AirframeDesigner, DesignOutputs, MeshSet
from rcdesign.geometry.engine import get_geometry_limiter
from rcdesign.models import DesignParameters, PreviewTrailer

logger = logging.getLogger("rcdesign.ws")

router = APIRouter()

# Maximum accepted WebSocket message size (bytes).  Larger messages are
# rejected with an error frame.
MAX_MESSAGE_SIZE = 64 * 1024  # 64 KB


def _build_error_frame(error: str, detail: str = "", field: str = "") -> bytes:
    """Build a 0x02 error binary frame."""
    payload: dict[str, str] = {"error": error}
    if detail:
        payload["detail"] = detail
    if field:
        payload["field"] = field
    json_bytes = json.dumps(payload).encode("utf-8")
    header = struct.pack("<I", 0x02)
    return header + json_bytes


def _build_mesh_response(meshes: MeshSet, outputs: DesignOutputs) -> bytes:
    """Merged mesh frame followed by the JSON trailer.

    Uses Pydantic alias_generator (by_alias=True) for snake_case -> camelCase
    conversion, see models.py CamelModel base class.
    """
    trailer = PreviewTrailer(
        generation=meshes.generation,
        component_ranges=meshes.ranges(),
        coefficients=outputs.coefficients,
        performance=outputs.performance,
        derived=outputs.derived,
        aoa_sweep=outputs.aoa_sweep,
        speed_sweep=outputs.speed_sweep,
        validation=outputs.warnings,
    ).model_dump_json(by_alias=True).encode("utf-8")
    return meshes.merged().to_binary_frame() + trailer


def _too_large_frame() -> bytes:
    return _build_error_frame(
        error="Message too large",
        detail=f"Maximum message size is {MAX_MESSAGE_SIZE} bytes",
    )


@router.websocket("/ws/preview")
async def preview_websocket(ws: WebSocket) -> None:
    """Handle a single WebSocket connection for real-time preview.

    Uses a task group with two concurrent tasks:
    - **reader**: receives WebSocket messages, validates them, cancels any
      in-flight generation scope, and sends parsed DesignParameters into a
      memory channel.
    - **generator**: consumes designs from the channel and runs the
      connection's AirframeDesigner in a worker thread.  Results (or errors)
      are sent back via the WebSocket.
    """
    await ws.accept()
    logger.info("WebSocket client connected")

    designer = AirframeDesigner()

    send_ch, recv_ch = anyio.create_memory_object_stream[DesignParameters](max_buffer_size=16)
    ws_lock = anyio.Lock()

    # Reader cancels it when a new message arrives; generator creates it
    # before starting work.
    generation_scope: anyio.CancelScope | None = None

    async def _send_frame(frame: bytes) -> None:
        async with ws_lock:
            await ws.send_bytes(frame)

    async def reader_task() -> None:
        """Read messages from the WebSocket and post validated designs."""
        nonlocal generation_scope
        try:
            while True:
                try:
                    raw = await ws.receive()
                except WebSocketDisconnect:
                    return

                if raw.get("type") == "websocket.disconnect":
                    return

                if raw.get("text") is not None:
                    text = raw["text"]
                elif raw.get("bytes") is not None:
                    raw_bytes = raw["bytes"]
                    if len(raw_bytes) > MAX_MESSAGE_SIZE:
                        await _send_frame(_too_large_frame())
                        continue
                    try:
                        text = raw_bytes.decode("utf-8")
                    except UnicodeDecodeError:
                        logger.warning("Received non-UTF-8 binary frame, ignoring")
                        await _send_frame(
                            _build_error_frame(
                                error="Invalid message format",
                                detail="Expected UTF-8 encoded JSON text",
                            )
                        )
                        continue
                else:
                    continue

                if len(text) > MAX_MESSAGE_SIZE:
                    await _send_frame(_too_large_frame())
                    continue

                try:
                    data = json.loads(text)
                except json.JSONDecodeError as exc:
                    logger.warning("Malformed JSON from WebSocket client: %s", exc)
                    await _send_frame(_build_error_frame(error="Invalid JSON", detail=str(exc)))
                    continue

                try:
                    params = DesignParameters.model_validate(data)
                except ValidationError as exc:
                    logger.warning("Pydantic validation error: %s", exc)
                    errors = exc.errors()
                    detail_parts = []
                    for err in errors[:5]:
                        loc = ".".join(str(part) for part in err["loc"])
                        detail_parts.append(f"{loc}: {err['msg']}")
                    first_field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else ""
                    await _send_frame(
                        _build_error_frame(
                            error="Validation error",
                            detail="; ".join(detail_parts),
                            field=first_field,
                        )
                    )
                    continue

                # The generator is blocked on run_sync, so only the reader
                # can mark its work superseded promptly.
                if generation_scope is not None:
                    generation_scope.cancel()

                try:
                    send_ch.send_nowait(params)
                except anyio.WouldBlock:
                    # Channel full: drop old entries and send newest
                    while True:
                        try:
                            recv_ch.receive_nowait()
                        except anyio.WouldBlock:
                            break
                    send_ch.send_nowait(params)
        finally:
            send_ch.close()

    async def generator_task() -> None:
        """Consume designs from the channel and recompute."""
        nonlocal generation_scope

        async for params in recv_ch:
            latest = params
            while True:
                try:
                    latest = recv_ch.receive_nowait()
                except anyio.WouldBlock:
                    break

            generation_scope = anyio.CancelScope()
            with generation_scope:
                try:
                    outputs = await anyio.to_thread.run_sync(
                        designer.update,
                        latest,
                        limiter=get_geometry_limiter(),
                        abandon_on_cancel=False,
                    )
                except Exception as gen_err:
                    if generation_scope.cancel_called:
                        continue
                    logger.warning("Recompute failed: %s", gen_err)
                    try:
                        await _send_frame(
                            _build_error_frame(
                                error="Geometry generation failed",
                                detail=str(gen_err),
                            )
                        )
                    except Exception:
                        return
                    continue

                if generation_scope.cancel_called:
                    continue

                meshes = designer.current_meshes
                if meshes is None or meshes.generation != outputs.generation:
                    continue

                try:
                    await _send_frame(_build_mesh_response(meshes, outputs))
                except Exception:
                    return

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(reader_task)
            tg.start_soon(generator_task)
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    except Exception:
        logger.exception("WebSocket error")
    finally:
        meshes = designer.current_meshes
        if meshes is not None:
            meshes.release()

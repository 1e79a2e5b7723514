"""Inbound frame decoding.

Frames on the streaming socket are JSON objects tagged by ``type``:

    {"type": "signal", "data": {...SignalEvent...}}
    {"type": "connection", "message": "..."}

The ``type`` tag is validated before ``data`` is interpreted. Anything
else is a MalformedFrame.
"""

import json
from dataclasses import dataclass
from typing import Union

from src.live_stream.config import FrameType
from src.live_stream.errors import MalformedFrame
from src.live_stream.models import SignalEvent


@dataclass(frozen=True)
class SignalFrame:
    signal: SignalEvent


@dataclass(frozen=True)
class ConnectionFrame:
    message: str


Frame = Union[SignalFrame, ConnectionFrame]


def decode_frame(raw: Union[str, bytes]) -> Frame:
    """Decode one raw socket message into a typed frame.

    Raises:
        MalformedFrame: not JSON (or nested too deeply), not an object,
            unknown ``type``, or a signal payload that fails validation.
    """
    try:
        message = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedFrame(f"Frame is not valid JSON: {exc}", raw) from exc

    if not isinstance(message, dict):
        raise MalformedFrame("Frame is not a JSON object", raw)

    try:
        frame_type = FrameType(message.get("type"))
    except ValueError as exc:
        raise MalformedFrame(f"Unknown frame type: {message.get('type')!r}", raw) from exc

    if frame_type == FrameType.SIGNAL:
        try:
            return SignalFrame(signal=SignalEvent.from_wire(message.get("data")))
        except ValueError as exc:
            raise MalformedFrame(f"Invalid signal payload: {exc}", raw) from exc

    return ConnectionFrame(message=str(message.get("message", "")))

# errchain/core/render.py
"""
Render - feed an error chain to a sink, fragment by fragment

Fragment order for a chain A -> B -> C:
    header, "A", ": ", "B", ": ", "C", trailer

The header and trailer are emitted once, around the whole chain. A
negative status from the sink stops the walk and is returned as is;
fragments already delivered stay delivered.
"""

from __future__ import annotations

import io
import logging
from typing import IO, Any, Callable, Optional

from .constants import RENDER_NO_SINK, RENDER_OK, RENDER_WRITE_FAILED, SEPARATOR
from .errors import ErrChainError
from .value import ErrorValue, iter_chain
from ..utils.text import to_utf8


logger = logging.getLogger(__name__)

# (context, fragment) -> status; negative aborts, None counts as 0
Sink = Callable[[Any, str], Optional[int]]


def render(
    header: Optional[str],
    e: Optional[ErrorValue],
    trailer: Optional[str],
    sink: Optional[Sink],
    context: Any = None,
) -> int:
    """
    Render an error chain through a sink.

    Args:
        header: Emitted before the first message (skipped if None)
        e: Outermost error; None renders the EMPTY sentinel
        trailer: Emitted once after the innermost message (skipped if None)
        sink: Called as sink(context, fragment)
        context: Passed unaltered to the sink

    Returns:
        The last status returned by the sink. Negative means the sink
        aborted the walk.
    """
    if sink is None:
        return RENDER_NO_SINK

    nodes = list(iter_chain(e))
    for node in nodes:
        if node.is_released:
            raise ErrChainError.use_after_release(node.message)

    def emit(fragment: str) -> int:
        rc = sink(context, fragment)
        return RENDER_OK if rc is None else rc

    rc = RENDER_OK
    prefix = header
    for node in nodes:
        if prefix is not None:
            rc = emit(prefix)
            if rc < 0:
                logger.debug(f"Sink aborted render with status {rc}")
                return rc
        rc = emit(node.message)
        if rc < 0:
            logger.debug(f"Sink aborted render with status {rc}")
            return rc
        prefix = SEPARATOR

    if trailer is not None:
        rc = emit(trailer)

    return rc


def _is_binary(stream: IO) -> bool:
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(stream, "mode", "")


def _stream_sink(stream: IO, fragment: str) -> int:
    data: Any = to_utf8(fragment) if _is_binary(stream) else fragment
    try:
        written = stream.write(data)
    except (OSError, ValueError) as e:
        logger.debug(f"Stream write failed during render: {e}")
        return RENDER_WRITE_FAILED
    return RENDER_OK if written is None else written


def render_to_stream(
    header: Optional[str],
    e: Optional[ErrorValue],
    trailer: Optional[str],
    stream: Optional[IO],
) -> int:
    """
    Render an error chain to a writable text or binary stream.

    Binary streams receive UTF-8, with escaped input bytes restored. Write
    failures (OSError, or ValueError on a closed stream) abort with a
    negative status.

    Returns:
        Non-negative on success, negative on failure.
    """
    if stream is None:
        return RENDER_NO_SINK
    return render(header, e, trailer, _stream_sink, stream)


def render_to_string(
    e: Optional[ErrorValue],
    header: Optional[str] = None,
    trailer: Optional[str] = None,
) -> str:
    """Render an error chain into a string"""
    parts: list[str] = []
    render(header, e, trailer, lambda ctx, fragment: ctx.append(fragment), parts)
    return "".join(parts)


__all__ = [
    "Sink",
    "render",
    "render_to_stream",
    "render_to_string",
]

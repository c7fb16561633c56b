"""
Trace Pad
- Turns press/move/release input into strokes for one target character
- Validates at every pen-lift and fires completion once
- Keeps live ink on a canvas in step with the captured points
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import config
from letter_templates import TemplateLibrary
from stroke_engine import (
    BREAK_MARKER,
    CanvasSize,
    Point,
    TraceVerdict,
    canvas_dimensions,
    dist,
    score_trace,
)

logger = logging.getLogger(__name__)

MOUSE_POINTER_ID = 0


def to_canvas(
    client_x: float,
    client_y: float,
    rect: Tuple[float, float, float, float],
    canvas_size: CanvasSize
) -> Point:
    """
    Map a device coordinate into canvas pixels.

    `rect` is the on-screen (left, top, width, height) of the surface; the
    canvas may be drawn scaled inside it.
    """
    left, top, rect_w, rect_h = rect
    width, height = canvas_dimensions(canvas_size)
    return Point(
        (client_x - left) * width / rect_w,
        (client_y - top) * height / rect_h,
    )


# ===============================
# Capture Session
# ===============================

class TraceSession:
    """Input captured for one target character."""

    def __init__(self, target: str, canvas_size: CanvasSize):
        canvas_dimensions(canvas_size)
        self.target = target
        self.canvas_size = canvas_size
        self.strokes: List[List[Point]] = []
        self.attempts = 0
        self.is_complete = False
        self.last_verdict: Optional[TraceVerdict] = None

    @property
    def point_count(self) -> int:
        return sum(len(s) for s in self.strokes)

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def last_point(self) -> Optional[Point]:
        if self.strokes and self.strokes[-1]:
            return self.strokes[-1][-1]
        return None

    def begin_stroke(self, point: Point):
        self.strokes.append([point])

    def add_point(self, point: Point):
        self.strokes[-1].append(point)

    def real_points(self) -> List[Point]:
        return [p for stroke in self.strokes for p in stroke]

    def flat_points(self) -> List[Point]:
        """All points in one list, with BREAK_MARKER between strokes."""
        out = []
        for stroke in self.strokes:
            if not stroke:
                continue
            if out:
                out.append(BREAK_MARKER)
            out.extend(stroke)
        return out

    def reset(self):
        self.strokes = []
        self.attempts = 0
        self.is_complete = False
        self.last_verdict = None


# ===============================
# Trace Pad
# ===============================

class TracePad:
    """
    Drawing surface state machine: idle -> drawing -> idle ... -> complete.

    Only one pointer draws at a time. The first pointer to press owns the
    stroke until it is released; events from any other pointer are
    ignored meanwhile. Once complete, input is ignored until clear() or a
    new target.
    """

    def __init__(
        self,
        target: str,
        canvas_size: CanvasSize = config.CANVAS_SIZE,
        on_complete: Optional[Callable[[], None]] = None,
        on_cue: Optional[Callable[[str], None]] = None,
        renderer=None,
        library: Optional[TemplateLibrary] = None
    ):
        self.session = TraceSession(target, canvas_size)
        self.on_complete = on_complete
        self.on_cue = on_cue
        self.renderer = renderer
        self.library = library
        self.canvas = renderer.new_canvas(canvas_size) if renderer else None
        self._active_pointer: Optional[int] = None
        self.redraw()

    # ----------------------------
    # Exposed state
    # ----------------------------

    @property
    def target(self) -> str:
        return self.session.target

    @property
    def canvas_size(self) -> CanvasSize:
        return self.session.canvas_size

    @property
    def is_drawing(self) -> bool:
        return self._active_pointer is not None

    @property
    def is_complete(self) -> bool:
        return self.session.is_complete

    @property
    def attempts(self) -> int:
        return self.session.attempts

    @property
    def point_count(self) -> int:
        return self.session.point_count

    @property
    def last_verdict(self) -> Optional[TraceVerdict]:
        return self.session.last_verdict

    def points(self) -> List[Point]:
        return self.session.flat_points()

    # ----------------------------
    # Input events
    # ----------------------------

    def press(self, x: float, y: float, pointer_id: int = MOUSE_POINTER_ID) -> bool:
        """Start a stroke. Returns False when the press is ignored."""
        if self.session.is_complete:
            return False
        if self._active_pointer is not None:
            logger.debug("Ignoring press from pointer %s while %s is drawing",
                         pointer_id, self._active_pointer)
            return False

        self._active_pointer = pointer_id
        point = Point(float(x), float(y))
        self.session.begin_stroke(point)
        if self.renderer:
            self.renderer.draw_start_dot(self.canvas, point)
        return True

    def move(self, x: float, y: float, pointer_id: int = MOUSE_POINTER_ID) -> bool:
        """Extend the active stroke. Returns True when a point was added."""
        if self._active_pointer is None:
            logger.debug("Move from pointer %s with no active stroke", pointer_id)
            return False
        if pointer_id != self._active_pointer:
            return False
        if self.session.is_complete:
            return False

        point = Point(float(x), float(y))
        last = self.session.last_point
        if dist(last, point) <= config.MOVE_THRESHOLD:
            return False

        self.session.add_point(point)
        if self.renderer:
            self.renderer.draw_segment(self.canvas, last, point)
        return True

    def release(self, pointer_id: int = MOUSE_POINTER_ID) -> Optional[TraceVerdict]:
        """
        End the active stroke and validate everything traced so far.
        Returns the verdict, or None if no stroke was active for the pointer.
        """
        if self._active_pointer is None:
            logger.debug("Release from pointer %s with no active stroke", pointer_id)
            return None
        if pointer_id != self._active_pointer:
            return None
        self._active_pointer = None

        session = self.session
        verdict = score_trace(session.strokes, session.target,
                              session.canvas_size, self.library)
        session.last_verdict = verdict

        if verdict.accepted:
            self._complete()
        elif verdict.point_count > config.ATTEMPT_MIN_POINTS:
            session.attempts += 1
            logger.debug("%r attempt %d rejected (%s)", session.target,
                         session.attempts, verdict.method)
        return verdict

    def cancel(self, pointer_id: int = MOUSE_POINTER_ID) -> Optional[TraceVerdict]:
        return self.release(pointer_id)

    def leave(self, pointer_id: int = MOUSE_POINTER_ID) -> Optional[TraceVerdict]:
        return self.release(pointer_id)

    def _complete(self):
        session = self.session
        if session.is_complete:
            return
        session.is_complete = True
        logger.info("Trace of %r accepted after %d stroke(s)",
                    session.target, session.stroke_count)

        if self.renderer:
            self.renderer.draw_complete(self.canvas)
        if self.on_cue:
            self.on_cue(session.target)
        if self.on_complete:
            self.on_complete()

    # ----------------------------
    # Session control
    # ----------------------------

    def clear(self):
        """Discard all strokes, attempts and completion; redraw the guide."""
        self.session.reset()
        self._active_pointer = None
        self.redraw()

    def set_target(self, target: str, canvas_size: Optional[CanvasSize] = None):
        """Switch character (and optionally size); starts a fresh session on change."""
        canvas_size = self.session.canvas_size if canvas_size is None else canvas_size
        if target == self.session.target and canvas_size == self.session.canvas_size:
            return
        resized = canvas_size != self.session.canvas_size
        self.session = TraceSession(target, canvas_size)
        self._active_pointer = None
        if self.renderer and resized:
            self.canvas = self.renderer.new_canvas(canvas_size)
        self.redraw()

    def redraw(self):
        """Repaint guide, replay every stroke and the completion glyph."""
        if not self.renderer:
            return
        self.renderer.draw_guide(self.canvas, self.session.target, self.library)
        self.renderer.replay_strokes(self.canvas, self.session.flat_points())
        if self.session.is_complete:
            self.renderer.draw_complete(self.canvas)

    def status_message(self) -> str:
        """Retry text adapted to the attempt count."""
        session = self.session
        if session.is_complete:
            key = "complete"
        elif session.attempts > 1:
            key = "retry_more"
        elif session.attempts == 1:
            key = "retry_first"
        elif session.point_count > 0:
            key = "tracing"
        else:
            key = "idle"
        return config.get_config(f"FEEDBACK_MESSAGES.{key}", "").format(points=session.point_count)


def trace_strokes(
    pad: TracePad,
    strokes: Sequence[Sequence[Tuple[float, float]]],
    pointer_id: int = MOUSE_POINTER_ID
) -> Optional[TraceVerdict]:
    """Feed whole strokes through the pad as press/move/release events."""
    verdict = None
    for stroke in strokes:
        if not stroke:
            continue
        x, y = stroke[0]
        if not pad.press(x, y, pointer_id):
            break
        for x, y in stroke[1:]:
            pad.move(x, y, pointer_id)
        verdict = pad.release(pointer_id)
    return verdict

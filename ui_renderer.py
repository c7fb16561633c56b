"""
UI and Rendering Layer
- Guide overlay: dashed grid, faint target glyph, optional waypoint dots
- Live ink, start dot and completion glyph on the pad canvas
- App window composition with status bar
"""

import logging
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

import config
from letter_templates import DEFAULT_LIBRARY, TemplateLibrary, waypoints_to_pixels
from stroke_engine import CanvasSize, Point, TraceVerdict, canvas_dimensions, is_break

logger = logging.getLogger(__name__)


def _px(pt) -> Tuple[int, int]:
    return int(round(pt[0])), int(round(pt[1]))


class TraceRenderer:
    """Draws a trace pad onto BGR numpy canvases."""

    def __init__(self, colors: Optional[dict] = None, show_waypoints: bool = config.SHOW_WAYPOINTS):
        self.colors = dict(config.UI_COLORS)
        if colors:
            self.colors.update(colors)
        self.show_waypoints = show_waypoints
        self.ink_thickness = config.INK_THICKNESS

    def new_canvas(self, canvas_size: CanvasSize) -> np.ndarray:
        width, height = canvas_dimensions(canvas_size)
        canvas = np.zeros((int(height), int(width), 3), dtype=np.uint8)
        canvas[:] = self.colors["background"]
        return canvas

    # ----------------------------
    # Guide overlay
    # ----------------------------

    def _dashed_line(self, canvas, start, end, color, dash=4, gap=4, thickness=1):
        start = np.array(start, dtype=np.float32)
        end = np.array(end, dtype=np.float32)
        length = float(np.linalg.norm(end - start))
        if length < 1e-6:
            return
        direction = (end - start) / length
        pos = 0.0
        while pos < length:
            a = start + direction * pos
            b = start + direction * min(pos + dash, length)
            cv2.line(canvas, _px(a), _px(b), color, thickness)
            pos += dash + gap

    def _draw_glyph(self, canvas, target: str):
        """Faint filled glyph with a thicker outline, centered."""
        h, w = canvas.shape[:2]
        scale = config.GUIDE_SCALE_MULTI if len(target) > 1 else config.GUIDE_SCALE_SINGLE
        font = cv2.FONT_HERSHEY_DUPLEX

        (tw, th), _ = cv2.getTextSize(target, font, 1.0, 1)
        if tw == 0 or th == 0:
            logger.debug("Nothing to draw for guide %r", target)
            return
        font_scale = min(h * scale / th, w * 0.9 / tw)
        outline = max(2, int(font_scale * 1.5)) + config.GUIDE_THICKNESS
        fill = max(1, outline - config.GUIDE_THICKNESS)
        (tw, th), _ = cv2.getTextSize(target, font, font_scale, fill)
        org = ((w - tw) // 2, (h + th) // 2)

        cv2.putText(canvas, target, org, font, font_scale,
                    self.colors["guide_outline"], outline, cv2.LINE_AA)
        cv2.putText(canvas, target, org, font, font_scale,
                    self.colors["guide_fill"], fill, cv2.LINE_AA)

    def draw_guide(self, canvas: np.ndarray, target: str,
                   library: Optional[TemplateLibrary] = None) -> np.ndarray:
        """Wipe the canvas and draw the static guide for `target`."""
        h, w = canvas.shape[:2]
        canvas[:] = self.colors["background"]

        self._dashed_line(canvas, (0, h / 2), (w, h / 2), self.colors["grid"])
        self._dashed_line(canvas, (w / 2, 0), (w / 2, h), self.colors["grid"])

        self._draw_glyph(canvas, target)

        if self.show_waypoints:
            if library is None:
                library = DEFAULT_LIBRARY
            waypoints = library.lookup(target)
            if waypoints:
                for pt in waypoints_to_pixels(waypoints, (w, h)):
                    cv2.circle(canvas, pt, config.WAYPOINT_DOT_RADIUS,
                               self.colors["waypoint"], -1, cv2.LINE_AA)
        return canvas

    # ----------------------------
    # Ink
    # ----------------------------

    def draw_start_dot(self, canvas: np.ndarray, point: Point) -> np.ndarray:
        cv2.circle(canvas, _px(point), config.START_DOT_RADIUS,
                   self.colors["ink"], -1, cv2.LINE_AA)
        return canvas

    def draw_segment(self, canvas: np.ndarray, start: Point, end: Point) -> np.ndarray:
        """Draw only the newest piece of ink."""
        cv2.line(canvas, _px(start), _px(end), self.colors["ink"],
                 self.ink_thickness, cv2.LINE_AA)
        return canvas

    def replay_strokes(self, canvas: np.ndarray, points: Sequence[Point]) -> np.ndarray:
        """
        Redraw a flattened point list. Break markers start a new polyline,
        so no ink joins the end of one stroke to the start of the next.
        """
        stroke = []
        for pt in list(points) + [None]:
            if pt is not None and not is_break(pt):
                stroke.append(_px(pt))
                continue
            if len(stroke) == 1:
                self.draw_start_dot(canvas, stroke[0])
            elif len(stroke) > 1:
                cv2.polylines(canvas, [np.array(stroke, dtype=np.int32)], False,
                              self.colors["ink"], self.ink_thickness, cv2.LINE_AA)
            stroke = []
        return canvas

    def draw_complete(self, canvas: np.ndarray) -> np.ndarray:
        """Check mark badge in the middle of the pad."""
        h, w = canvas.shape[:2]
        half = max(8, min(w, h) // 6)
        cx, cy = w // 2, h // 2
        cv2.rectangle(canvas, (cx - half, cy - half), (cx + half, cy + half),
                      self.colors["complete_bg"], -1)
        thickness = max(2, half // 5)
        mark = [
            (cx - half // 2, cy),
            (cx - half // 8, cy + half // 2 - half // 8),
            (cx + half // 2, cy - half // 2 + half // 8),
        ]
        cv2.polylines(canvas, [np.array(mark, dtype=np.int32)], False,
                      self.colors["complete_mark"], thickness, cv2.LINE_AA)
        return canvas

    # ----------------------------
    # Window
    # ----------------------------

    def draw_progress_bar(
        self,
        canvas: np.ndarray,
        progress: float,
        x: int,
        y: int,
        width: int = 120,
        height: int = 14
    ) -> np.ndarray:
        """Draw progress bar (0.0 to 1.0)."""
        progress = max(0.0, min(1.0, progress))
        cv2.rectangle(canvas, (x, y), (x + width, y + height), self.colors["border"], -1)
        filled = int(width * progress)
        cv2.rectangle(canvas, (x, y), (x + filled, y + height), self.colors["complete_bg"], -1)
        cv2.rectangle(canvas, (x, y), (x + width, y + height), self.colors["text_dim"], 1)
        return canvas

    def compose_window(
        self,
        pad_canvas: np.ndarray,
        title: str,
        status: str,
        complete: bool = False,
        verdict: Optional[TraceVerdict] = None
    ) -> np.ndarray:
        """Pad canvas with a border on top of a status bar."""
        h, w = pad_canvas.shape[:2]
        frame = np.zeros((h + config.STATUS_BAR_HEIGHT, w, 3), dtype=np.uint8)
        frame[:] = self.colors["background"]
        frame[:h] = pad_canvas

        border = self.colors["border_complete"] if complete else self.colors["border"]
        cv2.rectangle(frame, (0, 0), (w - 1, h - 1), border, 4)

        cv2.putText(frame, title, (12, h + 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7,
                    self.colors["text"], 2, cv2.LINE_AA)
        cv2.putText(frame, status, (12, h + 62), cv2.FONT_HERSHEY_SIMPLEX, 0.5,
                    self.colors["text_dim"], 1, cv2.LINE_AA)

        if verdict is not None and verdict.method == "waypoints":
            self.draw_progress_bar(frame, verdict.hit_ratio, w - 132, h + 18)
        return frame

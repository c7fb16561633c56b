"""
Letter Trace Pad - Main Application

Trace the faint guide character with the mouse (or a pinch gesture in
front of the camera). Lift and touch down again to add strokes; the pad
checks the whole trace after every stroke and marks it complete once the
shape is close enough.

Keys: C clear, N next, P previous, W toggle waypoints, Q quit.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

import cv2

import config
from letter_templates import available_characters
from trace_pad import MOUSE_POINTER_ID, TracePad, to_canvas
from ui_renderer import TraceRenderer

logger = logging.getLogger(__name__)


class TraceApp:
    def __init__(self, characters: List[str], canvas_size: int = config.CANVAS_SIZE,
                 use_camera: bool = False):
        if not characters:
            raise ValueError("no characters to practice")
        self.characters = characters
        self.index = 0
        self.canvas_size = canvas_size

        self.renderer = TraceRenderer()
        self.pad = TracePad(
            characters[0],
            canvas_size,
            on_complete=self.on_complete,
            on_cue=self.on_cue,
            renderer=self.renderer,
        )
        self.completed = 0
        self.complete_time: Optional[float] = None

        self.cap = None
        self.hand = None
        self.pinch = None
        if use_camera:
            self._open_camera()

    def _open_camera(self):
        from hand_input import HandLandmarkerSource, PinchPointer

        self.cap = cv2.VideoCapture(config.CAMERA_INDEX)
        if not self.cap.isOpened():
            logger.error("Camera failed to initialize. Check camera permissions in system settings.")
            sys.exit(1)
        self.hand = HandLandmarkerSource()
        self.pinch = PinchPointer(self.pad)

    # ----------------------------
    # Pad callbacks
    # ----------------------------

    def on_complete(self):
        self.completed += 1
        self.complete_time = time.time()
        logger.info("Completed %d character(s)", self.completed)

    def on_cue(self, character: str):
        # Audio/haptics belong to the host; a terminal bell stands in here
        sys.stdout.write("\a")
        sys.stdout.flush()

    # ----------------------------
    # Character management
    # ----------------------------

    def select_character(self, index: int):
        self.index = index % len(self.characters)
        self.complete_time = None
        target = self.characters[self.index]
        if target == self.pad.target:
            # Same character again (e.g. a single-character drill)
            self.pad.clear()
        else:
            self.pad.set_target(target)
        logger.debug("Target is now %r", self.pad.target)

    # ----------------------------
    # Input handling
    # ----------------------------

    def on_mouse(self, event, x, y, flags, param=None):
        # The pad occupies the top-left of the window at 1:1 scale
        pt = to_canvas(x, y, (0, 0, self.canvas_size, self.canvas_size), self.canvas_size)
        if event == cv2.EVENT_LBUTTONDOWN:
            self.pad.press(pt.x, pt.y, MOUSE_POINTER_ID)
        elif event == cv2.EVENT_MOUSEMOVE:
            if flags & cv2.EVENT_FLAG_LBUTTON:
                self.pad.move(pt.x, pt.y, MOUSE_POINTER_ID)
            elif self.pad.is_drawing:
                # Button-up happened outside the window
                self.pad.release(MOUSE_POINTER_ID)
        elif event == cv2.EVENT_LBUTTONUP:
            self.pad.release(MOUSE_POINTER_ID)

    def process_camera(self):
        ret, frame = self.cap.read()
        if not ret:
            logger.warning("Failed to read frame")
            return
        frame = cv2.flip(frame, 1)
        self.pinch.update(self.hand.detect(frame))

    def handle_key(self, key: int) -> bool:
        """Handle keyboard input. Returns False to quit."""
        keys = config.KEYBOARD_LAYOUT
        if key == ord(keys["clear"]):
            self.complete_time = None
            self.pad.clear()
        elif key == ord(keys["next"]):
            self.select_character(self.index + 1)
        elif key == ord(keys["previous"]):
            self.select_character(self.index - 1)
        elif key == ord(keys["waypoints"]):
            self.renderer.show_waypoints = not self.renderer.show_waypoints
            self.pad.redraw()
        elif key == ord(keys["quit"]):
            return False
        return True

    # ----------------------------
    # Main loop
    # ----------------------------

    def render(self):
        title = f"Trace: {self.pad.target}   ({self.index + 1}/{len(self.characters)})"
        return self.renderer.compose_window(
            self.pad.canvas,
            title,
            self.pad.status_message(),
            complete=self.pad.is_complete,
            verdict=self.pad.last_verdict,
        )

    def run(self):
        cv2.namedWindow(config.WINDOW_TITLE, cv2.WINDOW_AUTOSIZE)
        cv2.setMouseCallback(config.WINDOW_TITLE, self.on_mouse)

        running = True
        while running:
            if self.cap is not None:
                self.process_camera()

            if self.complete_time is not None:
                if time.time() - self.complete_time >= config.AUTO_ADVANCE_DELAY:
                    self.select_character(self.index + 1)

            cv2.imshow(config.WINDOW_TITLE, self.render())

            key = cv2.waitKey(15) & 0xFF
            if key != 255:
                running = self.handle_key(key)

        if self.cap is not None:
            self.cap.release()
            self.hand.close()
        cv2.destroyAllWindows()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=config.APP_NAME)
    parser.add_argument("chars", nargs="*",
                        help="characters to practice (default: every template)")
    parser.add_argument("--size", type=int, default=config.CANVAS_SIZE,
                        help="canvas size in pixels")
    parser.add_argument("--camera", action="store_true",
                        help="draw with a pinch gesture in front of the camera")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if (args.debug or config.DEBUG_MODE) else logging.INFO,
        format=config.LOG_FORMAT,
    )
    if args.size <= 0:
        logger.error("Canvas size must be positive, got %d", args.size)
        return 2

    characters = args.chars or config.PRACTICE_CHARACTERS or available_characters()
    app = TraceApp(characters, args.size, use_camera=args.camera)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

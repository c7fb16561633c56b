"""
Camera Hand Input
- Index/thumb pinch acts as "pen down" for the trace pad
- MediaPipe HandLandmarker (Tasks API) for landmark detection
"""

import logging
import os
import urllib.request
from typing import Optional, Sequence

import numpy as np

import config
from stroke_engine import canvas_dimensions

logger = logging.getLogger(__name__)

INDEX_FINGER_TIP = 8
THUMB_TIP = 4

HAND_POINTER_ID = 1

MODELS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "models")
MODEL_PATH = os.path.join(MODELS_DIR, "hand_landmarker.task")


def pinch_distance(landmarks: Sequence) -> float:
    """Normalized distance between index fingertip and thumb tip."""
    tip = landmarks[INDEX_FINGER_TIP]
    thumb = landmarks[THUMB_TIP]
    return float(np.hypot(tip.x - thumb.x, tip.y - thumb.y))


class PinchPointer:
    """
    Drives a TracePad from per-frame hand landmarks.

    Pinch start presses, pinch hold moves, and losing the pinch or the
    hand releases. Landmarks are normalized to the camera frame, which is
    mapped straight onto the pad canvas.
    """

    def __init__(self, pad, threshold: float = config.PINCH_THRESHOLD_NORM,
                 pointer_id: int = HAND_POINTER_ID):
        self.pad = pad
        self.threshold = threshold
        self.pointer_id = pointer_id
        self.down = False

    def update(self, landmarks: Optional[Sequence]) -> Optional[str]:
        """Feed one frame; returns the pad event sent, if any."""
        pinched = landmarks is not None and pinch_distance(landmarks) < self.threshold

        if not pinched:
            if self.down:
                self.down = False
                self.pad.release(self.pointer_id)
                return "release"
            return None

        w, h = canvas_dimensions(self.pad.canvas_size)
        tip = landmarks[INDEX_FINGER_TIP]
        x, y = tip.x * w, tip.y * h

        if not self.down:
            self.down = self.pad.press(x, y, self.pointer_id)
            return "press" if self.down else None

        self.pad.move(x, y, self.pointer_id)
        return "move"


def ensure_model(path: str = MODEL_PATH, url: str = config.HAND_MODEL_URL) -> str:
    """Download the hand_landmarker model if it is not on disk yet."""
    if os.path.exists(path):
        return path
    os.makedirs(os.path.dirname(path), exist_ok=True)
    logger.info("Downloading hand_landmarker model...")
    urllib.request.urlretrieve(url, path)
    logger.info("Model downloaded to %s", path)
    return path


class HandLandmarkerSource:
    """Runs MediaPipe HandLandmarker over BGR camera frames."""

    def __init__(self, model_path: Optional[str] = None):
        import cv2
        import mediapipe as mp
        from mediapipe.tasks import python
        from mediapipe.tasks.python import vision

        self._cv2 = cv2
        self._mp = mp
        base_options = python.BaseOptions(model_asset_path=model_path or ensure_model())
        options = vision.HandLandmarkerOptions(
            base_options=base_options,
            num_hands=1,
            min_hand_detection_confidence=config.HAND_DETECTION_CONFIDENCE,
            min_hand_presence_confidence=config.HAND_TRACKING_CONFIDENCE,
            running_mode=vision.RunningMode.VIDEO
        )
        self.landmarker = vision.HandLandmarker.create_from_options(options)
        self.frame_count = 0

    def detect(self, frame: np.ndarray) -> Optional[Sequence]:
        """Landmarks of the first hand in a (mirrored) BGR frame, or None."""
        rgb = self._cv2.cvtColor(frame, self._cv2.COLOR_BGR2RGB)
        mp_image = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=rgb)

        self.frame_count += 1
        timestamp_ms = self.frame_count * 33
        result = self.landmarker.detect_for_video(mp_image, timestamp_ms)
        if result.hand_landmarks:
            return result.hand_landmarks[0]
        return None

    def close(self):
        self.landmarker.close()

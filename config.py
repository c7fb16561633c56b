"""
Configuration file for Letter Trace Pad
Tracing tolerances, input filtering, colors and feedback text
"""

# ===============================
# WINDOW & DISPLAY
# ===============================

# Square drawing surface (pixels)
CANVAS_SIZE = 400

# Status bar drawn under the canvas in the app window
STATUS_BAR_HEIGHT = 80

WINDOW_TITLE = "Letter Trace Pad"

# Seconds to show the completed trace before moving on (demo app)
AUTO_ADVANCE_DELAY = 2.5

# Colors (B, G, R in OpenCV)
UI_COLORS = {
    "background": (250, 248, 246),
    "grid": (200, 200, 200),
    "guide_outline": (246, 190, 188),
    "guide_fill": (250, 232, 230),
    "waypoint": (180, 180, 240),
    "ink": (241, 102, 99),
    "complete_bg": (120, 190, 90),
    "complete_mark": (255, 255, 255),
    "border": (210, 210, 210),
    "border_complete": (120, 190, 90),
    "text": (60, 60, 60),
    "text_dim": (150, 150, 150),
}

# ===============================
# INPUT CAPTURE
# ===============================

# Minimum pixel movement to register a new point
MOVE_THRESHOLD = 2

# Rejected traces with more real points than this count as an attempt
ATTEMPT_MIN_POINTS = 10

# Camera pinch drawing (hand_input.py)
CAMERA_INDEX = 0
HAND_DETECTION_CONFIDENCE = 0.7
HAND_TRACKING_CONFIDENCE = 0.7
PINCH_THRESHOLD_NORM = 0.06
HAND_MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)

# ===============================
# SHAPE VALIDATION
# ===============================

# Normalized distance a trace point must come within to hit a waypoint
WAYPOINT_RADIUS = 0.18

# Fewer real points than this can never be accepted
MIN_TRACE_POINTS = 10

# Bounding-box area / canvas area needed when no template exists
MIN_COVERAGE_RATIO = 0.12

# ===============================
# RENDERING
# ===============================

INK_THICKNESS = 10
START_DOT_RADIUS = 5
GUIDE_THICKNESS = 4
WAYPOINT_DOT_RADIUS = 4

# Show waypoint dots over the guide glyph
SHOW_WAYPOINTS = False

# Glyph height as a fraction of canvas size
GUIDE_SCALE_SINGLE = 0.65
GUIDE_SCALE_MULTI = 0.5

# ===============================
# FEEDBACK MESSAGES
# ===============================

FEEDBACK_MESSAGES = {
    "idle": "Use finger or mouse to trace",
    "tracing": "Tracing... ({points} points)",
    "retry_first": "Try again - follow the guide closely",
    "retry_more": "Trace the whole letter shape carefully!",
    "complete": "Great tracing!",
}

# ===============================
# KEYBOARD LAYOUT
# ===============================

KEYBOARD_LAYOUT = {
    "clear": "c",
    "next": "n",
    "previous": "p",
    "waypoints": "w",
    "quit": "q",
}

# Characters cycled through by the demo app (empty = every template)
PRACTICE_CHARACTERS = []

# ===============================
# DEBUG & DEVELOPMENT
# ===============================

# Enable debug output
DEBUG_MODE = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

APP_NAME = "Letter Trace Pad"
APP_VERSION = "1.0.0"


def get_config(key: str, default=None):
    """Get configuration value by key."""
    parts = key.split(".")
    obj = globals()

    for part in parts:
        if isinstance(obj, dict):
            obj = obj.get(part, default)
        else:
            return default

    return obj if obj is not None else default


if __name__ == "__main__":
    print("Letter Trace Pad Configuration")
    print("=" * 50)
    print(f"Canvas: {CANVAS_SIZE}x{CANVAS_SIZE}")
    print(f"Waypoint radius: {WAYPOINT_RADIUS}")
    print(f"Min trace points: {MIN_TRACE_POINTS}")
    print(f"Min coverage: {MIN_COVERAGE_RATIO}")
    print(f"Move threshold: {MOVE_THRESHOLD}px")
    print(f"Debug Mode: {DEBUG_MODE}")

"""
Letter Template Library
- Waypoints for every letter, digit and short token the pad can teach
- Case-folding lookup with an explicit "absent" result
- Immutable for the life of the process
"""

import logging
import random
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Waypoint = Tuple[float, float]
Waypoints = Tuple[Waypoint, ...]

# ===============================
# Waypoint Table
# ===============================

# Key positions along the natural stroke path, normalized to the unit
# square (x right, y down). Listed in drawing order, but only coverage is
# checked.
LETTER_WAYPOINTS: Dict[str, Waypoints] = {
    # Uppercase
    "A": (
        (0.5, 0.15),
        (0.35, 0.5),
        (0.2, 0.85),
        (0.65, 0.5),
        (0.8, 0.85),
        (0.35, 0.55),
        (0.65, 0.55),
    ),
    "B": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.6, 0.25),
        (0.65, 0.4),
        (0.65, 0.65),
        (0.6, 0.8),
    ),
    "C": (
        (0.7, 0.25),
        (0.5, 0.15),
        (0.25, 0.35),
        (0.2, 0.5),
        (0.25, 0.7),
        (0.5, 0.85),
        (0.7, 0.75),
    ),
    "D": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.55, 0.85),
        (0.75, 0.5),
        (0.55, 0.15),
    ),
    "E": (
        (0.7, 0.15),
        (0.25, 0.15),
        (0.25, 0.5),
        (0.6, 0.5),
        (0.25, 0.85),
        (0.7, 0.85),
    ),
    "F": (
        (0.7, 0.15),
        (0.25, 0.15),
        (0.25, 0.5),
        (0.55, 0.5),
        (0.25, 0.85),
    ),
    "G": (
        (0.7, 0.25),
        (0.5, 0.15),
        (0.2, 0.5),
        (0.5, 0.85),
        (0.75, 0.65),
        (0.55, 0.55),
    ),
    "H": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.75, 0.5),
        (0.75, 0.15),
        (0.75, 0.85),
    ),
    "I": (
        (0.5, 0.15),
        (0.5, 0.5),
        (0.5, 0.85),
    ),
    "J": (
        (0.55, 0.15),
        (0.55, 0.5),
        (0.55, 0.7),
        (0.4, 0.85),
        (0.25, 0.75),
    ),
    "K": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.7, 0.15),
        (0.5, 0.35),
        (0.7, 0.85),
        (0.5, 0.65),
    ),
    "L": (
        (0.3, 0.15),
        (0.3, 0.5),
        (0.3, 0.85),
        (0.5, 0.85),
        (0.7, 0.85),
    ),
    "M": (
        (0.15, 0.85),
        (0.15, 0.15),
        (0.5, 0.55),
        (0.85, 0.15),
        (0.85, 0.85),
    ),
    "N": (
        (0.2, 0.85),
        (0.2, 0.15),
        (0.5, 0.5),
        (0.8, 0.85),
        (0.8, 0.15),
    ),
    "O": (
        (0.5, 0.15),
        (0.2, 0.35),
        (0.2, 0.65),
        (0.5, 0.85),
        (0.8, 0.65),
        (0.8, 0.35),
    ),
    "P": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.6, 0.15),
        (0.7, 0.3),
        (0.6, 0.5),
    ),
    "Q": (
        (0.5, 0.15),
        (0.2, 0.5),
        (0.5, 0.85),
        (0.8, 0.5),
        (0.7, 0.8),
        (0.8, 0.95),
    ),
    "R": (
        (0.25, 0.15),
        (0.25, 0.5),
        (0.25, 0.85),
        (0.6, 0.15),
        (0.7, 0.3),
        (0.65, 0.85),
    ),
    "S": (
        (0.7, 0.25),
        (0.5, 0.15),
        (0.3, 0.3),
        (0.5, 0.5),
        (0.7, 0.65),
        (0.5, 0.85),
        (0.3, 0.75),
    ),
    "T": (
        (0.2, 0.15),
        (0.5, 0.15),
        (0.8, 0.15),
        (0.5, 0.5),
        (0.5, 0.85),
    ),
    "U": (
        (0.2, 0.15),
        (0.2, 0.65),
        (0.5, 0.85),
        (0.8, 0.65),
        (0.8, 0.15),
    ),
    "V": (
        (0.2, 0.15),
        (0.35, 0.5),
        (0.5, 0.85),
        (0.65, 0.5),
        (0.8, 0.15),
    ),
    "W": (
        (0.1, 0.15),
        (0.3, 0.85),
        (0.5, 0.4),
        (0.7, 0.85),
        (0.9, 0.15),
    ),
    "X": (
        (0.2, 0.15),
        (0.5, 0.5),
        (0.8, 0.85),
        (0.8, 0.15),
        (0.2, 0.85),
    ),
    "Y": (
        (0.2, 0.15),
        (0.5, 0.5),
        (0.8, 0.15),
        (0.5, 0.7),
        (0.5, 0.85),
    ),
    "Z": (
        (0.2, 0.15),
        (0.5, 0.15),
        (0.8, 0.15),
        (0.5, 0.5),
        (0.2, 0.85),
        (0.5, 0.85),
        (0.8, 0.85),
    ),


    # Lowercase
    "a": (
        (0.65, 0.35),
        (0.45, 0.3),
        (0.3, 0.5),
        (0.45, 0.85),
        (0.65, 0.6),
        (0.65, 0.85),
    ),
    "b": (
        (0.3, 0.15),
        (0.3, 0.5),
        (0.3, 0.85),
        (0.55, 0.85),
        (0.65, 0.6),
        (0.5, 0.38),
    ),
    "c": (
        (0.65, 0.4),
        (0.45, 0.3),
        (0.3, 0.55),
        (0.45, 0.85),
        (0.65, 0.75),
    ),
    "d": (
        (0.65, 0.15),
        (0.65, 0.5),
        (0.65, 0.85),
        (0.45, 0.85),
        (0.3, 0.6),
        (0.45, 0.38),
    ),
    "e": (
        (0.3, 0.55),
        (0.65, 0.55),
        (0.65, 0.4),
        (0.45, 0.3),
        (0.3, 0.7),
        (0.5, 0.85),
    ),
    "f": (
        (0.6, 0.2),
        (0.45, 0.15),
        (0.38, 0.35),
        (0.38, 0.6),
        (0.38, 0.85),
        (0.25, 0.45),
        (0.55, 0.45),
    ),
    "g": (
        (0.65, 0.35),
        (0.45, 0.3),
        (0.3, 0.55),
        (0.45, 0.78),
        (0.65, 0.6),
        (0.65, 0.9),
        (0.45, 0.98),
    ),
    "h": (
        (0.3, 0.15),
        (0.3, 0.5),
        (0.3, 0.85),
        (0.5, 0.38),
        (0.65, 0.55),
        (0.65, 0.85),
    ),
    "i": (
        (0.5, 0.4),
        (0.5, 0.6),
        (0.5, 0.85),
    ),
    "j": (
        (0.55, 0.4),
        (0.55, 0.7),
        (0.45, 0.9),
        (0.3, 0.85),
    ),
    "k": (
        (0.3, 0.15),
        (0.3, 0.5),
        (0.3, 0.85),
        (0.6, 0.35),
        (0.6, 0.85),
    ),
    "l": (
        (0.5, 0.15),
        (0.5, 0.5),
        (0.5, 0.85),
    ),
    "m": (
        (0.15, 0.85),
        (0.15, 0.38),
        (0.35, 0.35),
        (0.42, 0.6),
        (0.42, 0.85),
        (0.62, 0.35),
        (0.75, 0.6),
        (0.85, 0.85),
    ),
    "n": (
        (0.25, 0.85),
        (0.25, 0.38),
        (0.5, 0.35),
        (0.7, 0.55),
        (0.7, 0.85),
    ),
    "o": (
        (0.5, 0.3),
        (0.3, 0.5),
        (0.3, 0.7),
        (0.5, 0.85),
        (0.7, 0.7),
        (0.7, 0.5),
    ),
    "p": (
        (0.3, 0.38),
        (0.3, 0.65),
        (0.3, 0.95),
        (0.5, 0.35),
        (0.65, 0.5),
        (0.5, 0.75),
    ),
    "q": (
        (0.6, 0.38),
        (0.4, 0.3),
        (0.3, 0.55),
        (0.45, 0.78),
        (0.6, 0.6),
        (0.6, 0.95),
    ),
    "r": (
        (0.35, 0.38),
        (0.35, 0.6),
        (0.35, 0.85),
        (0.55, 0.38),
        (0.65, 0.42),
    ),
    "s": (
        (0.6, 0.38),
        (0.45, 0.3),
        (0.3, 0.42),
        (0.5, 0.55),
        (0.65, 0.68),
        (0.5, 0.85),
        (0.3, 0.78),
    ),
    "t": (
        (0.5, 0.15),
        (0.5, 0.4),
        (0.5, 0.65),
        (0.5, 0.85),
        (0.3, 0.4),
        (0.7, 0.4),
    ),
    "u": (
        (0.3, 0.38),
        (0.3, 0.65),
        (0.5, 0.85),
        (0.65, 0.65),
        (0.65, 0.38),
        (0.65, 0.85),
    ),
    "v": (
        (0.25, 0.35),
        (0.38, 0.6),
        (0.5, 0.85),
        (0.62, 0.6),
        (0.75, 0.35),
    ),
    "w": (
        (0.12, 0.35),
        (0.3, 0.85),
        (0.5, 0.5),
        (0.7, 0.85),
        (0.88, 0.35),
    ),
    "x": (
        (0.25, 0.35),
        (0.5, 0.6),
        (0.75, 0.85),
        (0.75, 0.35),
        (0.25, 0.85),
    ),
    "y": (
        (0.25, 0.35),
        (0.5, 0.6),
        (0.75, 0.35),
        (0.4, 0.85),
        (0.3, 0.95),
    ),
    "z": (
        (0.25, 0.35),
        (0.5, 0.35),
        (0.75, 0.35),
        (0.5, 0.6),
        (0.25, 0.85),
        (0.5, 0.85),
        (0.75, 0.85),
    ),


    # Digits
    "0": (
        (0.5, 0.15),
        (0.25, 0.35),
        (0.25, 0.65),
        (0.5, 0.85),
        (0.75, 0.65),
        (0.75, 0.35),
    ),
    "1": (
        (0.5, 0.15),
        (0.5, 0.5),
        (0.5, 0.85),
    ),
    "2": (
        (0.3, 0.3),
        (0.5, 0.15),
        (0.7, 0.3),
        (0.5, 0.5),
        (0.3, 0.85),
        (0.7, 0.85),
    ),
    "3": (
        (0.3, 0.2),
        (0.55, 0.15),
        (0.65, 0.3),
        (0.45, 0.48),
        (0.65, 0.65),
        (0.5, 0.85),
        (0.3, 0.8),
    ),
    "4": (
        (0.55, 0.15),
        (0.2, 0.6),
        (0.5, 0.6),
        (0.75, 0.6),
        (0.6, 0.85),
    ),
    "5": (
        (0.7, 0.15),
        (0.3, 0.15),
        (0.3, 0.48),
        (0.6, 0.45),
        (0.7, 0.6),
        (0.5, 0.85),
        (0.3, 0.78),
    ),
    "6": (
        (0.6, 0.18),
        (0.35, 0.25),
        (0.25, 0.5),
        (0.35, 0.85),
        (0.6, 0.8),
        (0.65, 0.6),
        (0.45, 0.5),
    ),
    "7": (
        (0.25, 0.15),
        (0.5, 0.15),
        (0.75, 0.15),
        (0.6, 0.5),
        (0.45, 0.85),
    ),
    "8": (
        (0.5, 0.15),
        (0.3, 0.25),
        (0.5, 0.5),
        (0.7, 0.7),
        (0.5, 0.85),
        (0.3, 0.7),
        (0.7, 0.3),
    ),
    "9": (
        (0.5, 0.2),
        (0.3, 0.3),
        (0.3, 0.45),
        (0.6, 0.4),
        (0.65, 0.6),
        (0.55, 0.85),
    ),
    "10": (
        # one
        (0.2, 0.15),
        (0.2, 0.5),
        (0.2, 0.85),
        # zero
        (0.55, 0.15),
        (0.42, 0.5),
        (0.55, 0.85),
        (0.7, 0.5),
    ),
}


# ===============================
# Template Library
# ===============================

class TemplateLibrary:
    """Read-only map from character to waypoints."""

    def __init__(self, templates: Mapping[str, Iterable[Sequence[float]]]):
        frozen = {}
        for char, waypoints in templates.items():
            frozen[char] = tuple((float(x), float(y)) for x, y in waypoints)
        self._templates = MappingProxyType(frozen)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, character) -> bool:
        return self.lookup(character) is not None

    @property
    def templates(self) -> Mapping[str, Waypoints]:
        return self._templates

    def lookup(self, character: str) -> Optional[Waypoints]:
        """
        Waypoints for `character`, or None when no usable template exists.

        Exact key first, then the uppercase form only if the exact key is
        missing. An empty waypoint list counts as absent.
        """
        if not isinstance(character, str):
            raise TypeError(f"character must be str, got {type(character).__name__}")

        if character in self._templates:
            waypoints = self._templates[character]
        else:
            waypoints = self._templates.get(character.upper())

        if not waypoints:
            logger.debug("No template for %r", character)
            return None
        return waypoints

    def has_template(self, character: str) -> bool:
        return self.lookup(character) is not None

    def characters(self) -> List[str]:
        """Keys with at least one waypoint, sorted."""
        return sorted(c for c, wps in self._templates.items() if wps)

    def get_character_by_index(self, idx: int) -> Optional[str]:
        chars = self.characters()
        if 0 <= idx < len(chars):
            return chars[idx]
        return None

    def get_random_character(self) -> str:
        return random.choice(self.characters())


DEFAULT_LIBRARY = TemplateLibrary(LETTER_WAYPOINTS)


def lookup(character: str) -> Optional[Waypoints]:
    """Look up `character` in the default library."""
    return DEFAULT_LIBRARY.lookup(character)


def has_template(character: str) -> bool:
    return DEFAULT_LIBRARY.has_template(character)


def available_characters() -> List[str]:
    return DEFAULT_LIBRARY.characters()


def waypoints_to_pixels(waypoints: Iterable[Waypoint], canvas_size) -> List[Tuple[int, int]]:
    """Map normalized waypoints onto a canvas of `canvas_size` (int or (w, h))."""
    if isinstance(canvas_size, (tuple, list)):
        width, height = canvas_size
    else:
        width = height = canvas_size
    return [(int(round(x * width)), int(round(y * height))) for x, y in waypoints]


if __name__ == "__main__":
    chars = available_characters()
    print(f"Loaded {len(chars)} templates")
    for char in chars:
        print(f"  {char!r}: {len(lookup(char))} waypoints")

"""Musical key conversions for Spotify pitch-class/mode pairs."""

UNDETECTED = -1

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Wheel position per pitch class, C first.
_CAMELOT_MAJOR = (8, 3, 10, 5, 12, 7, 2, 9, 4, 11, 6, 1)
_CAMELOT_MINOR = (5, 12, 7, 2, 9, 4, 11, 6, 1, 8, 3, 10)

_MODE_NAMES = {0: "minor", 1: "major"}


def _is_detected(pitch_class: int, mode: int) -> bool:
    return 0 <= pitch_class < len(NOTE_NAMES) and mode in _MODE_NAMES


def to_camelot(pitch_class: int, mode: int) -> str | None:
    """Return the Camelot label (e.g. ``8A``) or None when undetected."""
    if not _is_detected(pitch_class, mode):
        return None
    if mode == 1:
        return f"{_CAMELOT_MAJOR[pitch_class]}A"
    return f"{_CAMELOT_MINOR[pitch_class]}B"


def to_regular_key(pitch_class: int, mode: int) -> str | None:
    """Return a note name with mode, such as ``C# minor``."""
    if not _is_detected(pitch_class, mode):
        return None
    return f"{NOTE_NAMES[pitch_class]} {_MODE_NAMES[mode]}"

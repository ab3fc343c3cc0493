"""Hard failures raised inside a rig build pass.

Soft problems (unresolved joint names, chains too short to mesh) are
logged and recorded on the build result instead of raised.
"""

from pathlib import Path


class ConfigUnavailableError(OSError):
    """The limb config file is missing or cannot be read; the whole pass aborts."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Rig config unavailable: {path} ({reason})")
        self.path = Path(path)
        self.reason = reason


class RingSizeMismatchError(ValueError):
    """Two adjacent rings in one limb have different point counts."""

    def __init__(self, limb: str, ring_index: int, expected: int, got: int):
        super().__init__(
            f"Limb {limb!r}: ring {ring_index} has {got} points, expected {expected}"
        )
        self.limb = limb
        self.ring_index = ring_index
        self.expected = expected
        self.got = got

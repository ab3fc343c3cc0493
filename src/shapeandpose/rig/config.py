"""Limb configuration records.

Document layout::

    {"limbs": [
        {"name": "left_arm",
         "joints": ["shoulder_L",
                    {"name": "elbow_L", "scale": 1.0,
                     "vertices": [{"x": 0.05, "y": 0, "z": 0}, ...]},
                    {"name": "wrist_L", "radius": 0.03, "divisions": 8}]}
    ]}

A joint entry is either a bare node name or an object. Objects without
vertices get a procedural circle ring.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from shapeandpose.constants import (
    DEFAULT_JOINT_SCALE,
    DEFAULT_RING_DIVISIONS,
    DEFAULT_RING_RADIUS,
    MIN_RING_DIVISIONS,
)
from shapeandpose.core.config_loader import load_json
from shapeandpose.rig.errors import ConfigUnavailableError


@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    z: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Vertex:
        try:
            return cls(float(data["x"]), float(data["y"]), float(data["z"]))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Vertex needs numeric x, y, z: {data!r}") from e


@dataclass(frozen=True)
class JointConfig:
    """Ring settings for one skeleton node, matched by name."""
    name: str
    scale: float = DEFAULT_JOINT_SCALE
    vertices: tuple[Vertex, ...] = ()
    radius: float = DEFAULT_RING_RADIUS
    divisions: int = DEFAULT_RING_DIVISIONS

    def __post_init__(self):
        if not self.name:
            raise ValueError("Joint entry has an empty name")
        if self.radius <= 0:
            raise ValueError(f"Joint {self.name!r}: radius must be positive, got {self.radius}")
        if self.vertices and len(self.vertices) < MIN_RING_DIVISIONS:
            raise ValueError(
                f"Joint {self.name!r}: explicit ring needs >= {MIN_RING_DIVISIONS} vertices, "
                f"got {len(self.vertices)}"
            )
        if self.divisions < MIN_RING_DIVISIONS:
            raise ValueError(
                f"Joint {self.name!r}: divisions must be >= {MIN_RING_DIVISIONS}, "
                f"got {self.divisions}"
            )

    @property
    def is_explicit(self) -> bool:
        return len(self.vertices) > 0

    @classmethod
    def from_entry(cls, entry: str | dict[str, Any]) -> JointConfig:
        """Parse a joint entry: a bare name string or a joint object."""
        if isinstance(entry, str):
            return cls(name=entry)
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ValueError(f"Joint entry must be a name or an object with 'name': {entry!r}")
        verts = entry.get("vertices") or []
        if not isinstance(verts, list):
            raise ValueError(f"Joint {entry['name']!r}: 'vertices' must be an array")
        try:
            return cls(
                name=entry["name"],
                scale=float(entry.get("scale", DEFAULT_JOINT_SCALE)),
                vertices=tuple(Vertex.from_dict(v) for v in verts),
                radius=float(entry.get("radius", DEFAULT_RING_RADIUS)),
                divisions=int(entry.get("divisions", DEFAULT_RING_DIVISIONS)),
            )
        except (TypeError, OverflowError) as e:
            raise ValueError(f"Joint {entry['name']!r}: bad field type: {e}") from e


@dataclass(frozen=True)
class LimbConfig:
    name: str
    joints: tuple[JointConfig, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LimbConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Limb entry must be an object: {data!r}")
        joints = data.get("joints") or []
        if not isinstance(joints, list):
            raise ValueError(f"Limb {data.get('name')!r}: 'joints' must be an array")
        return cls(
            name=str(data.get("name", "")),
            joints=tuple(JointConfig.from_entry(j) for j in joints),
        )


@dataclass(frozen=True)
class RigConfig:
    """Ordered limbs for one build pass."""
    limbs: tuple[LimbConfig, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RigConfig:
        if not isinstance(data, dict) or not isinstance(data.get("limbs"), list):
            raise ValueError("Rig config must be an object with a 'limbs' array")
        return cls(limbs=tuple(LimbConfig.from_dict(limb) for limb in data["limbs"]))

    @property
    def joint_names(self) -> list[str]:
        return [j.name for limb in self.limbs for j in limb.joints]


def load_rig_config(path: Path) -> RigConfig:
    """Read and parse a limb config document.

    Raises ConfigUnavailableError when the file is missing, unreadable or
    not valid JSON, and ValueError when the document lacks the expected
    fields.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigUnavailableError(path, "file not found")
    try:
        data = load_json(path)
    except json.JSONDecodeError as e:
        raise ConfigUnavailableError(path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigUnavailableError(path, str(e)) from e
    return RigConfig.from_dict(data)

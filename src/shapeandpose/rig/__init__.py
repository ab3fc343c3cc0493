"""Skeleton-driven tube mesh generation."""

from shapeandpose.rig.config import JointConfig, LimbConfig, RigConfig, Vertex, load_rig_config
from shapeandpose.rig.errors import ConfigUnavailableError, RingSizeMismatchError
from shapeandpose.rig.skeleton import SkeletonNodeRecord, SkeletonSnapshot
from shapeandpose.rig.builder import BuildResult, build_rig
from shapeandpose.rig.checksum import compute_rig_checksum
from shapeandpose.rig.controller import RigController, RigState, poll_rigs

__all__ = [
    "BuildResult",
    "ConfigUnavailableError",
    "JointConfig",
    "LimbConfig",
    "RigConfig",
    "RigController",
    "RigState",
    "RingSizeMismatchError",
    "SkeletonNodeRecord",
    "SkeletonSnapshot",
    "Vertex",
    "build_rig",
    "compute_rig_checksum",
    "load_rig_config",
    "poll_rigs",
]

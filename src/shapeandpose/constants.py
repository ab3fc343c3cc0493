"""Shared constants and paths for ShapeAndPose."""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
CONFIG_DIR = ASSETS_DIR / "config"
DEFAULT_RIG_CONFIG = CONFIG_DIR / "human_01.json"

# Procedural ring defaults (per joint, overridable in config)
DEFAULT_RING_RADIUS = 0.05
DEFAULT_RING_DIVISIONS = 8
MIN_RING_DIVISIONS = 3

# Explicit ring vertex multiplier when a joint entry omits "scale"
DEFAULT_JOINT_SCALE = 1.0

# Rig checksum fold
CHECKSUM_SEED = 17
CHECKSUM_PRIME = 31
CHECKSUM_MASK = (1 << 64) - 1

# Name given to the combined mesh handed to the host
BODY_MESH_NAME = "body_mesh"

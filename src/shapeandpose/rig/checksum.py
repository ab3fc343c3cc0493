"""Order-sensitive pose checksum used to skip rebuilds when nothing moved.

Not a cryptographic hash: collisions are possible but vanishingly rare for
real pose changes.
"""

from typing import Union

import numpy as np

from shapeandpose.constants import CHECKSUM_MASK, CHECKSUM_PRIME, CHECKSUM_SEED
from shapeandpose.core.scene_graph import SceneNode
from shapeandpose.rig.skeleton import SkeletonSnapshot


def _fold(h: int, value: int) -> int:
    return (h * CHECKSUM_PRIME + value) & CHECKSUM_MASK


def _hash_vector(v: np.ndarray) -> int:
    """Fold the IEEE-754 bit patterns of the components (-0.0 folds as 0.0)."""
    bits = (np.asarray(v, dtype=np.float64) + 0.0).view(np.uint64)
    h = CHECKSUM_SEED
    for b in bits:
        h = _fold(h, int(b))
    return h


def _node_checksum(snapshot: SkeletonSnapshot, index: int) -> int:
    rec = snapshot[index]
    h = CHECKSUM_SEED
    h = _fold(h, _hash_vector(rec.position))
    h = _fold(h, _hash_vector(rec.rotation))
    h = _fold(h, _hash_vector(rec.scale))
    for child in rec.children:
        h = _fold(h, _node_checksum(snapshot, child))
    return h


def compute_rig_checksum(skeleton: Union[SkeletonSnapshot, SceneNode, None]) -> int:
    """Depth-first fold of every node's world position, rotation and scale.

    Accepts a snapshot or a live root (captured first). ``None`` gives the
    seed value.
    """
    if skeleton is None:
        return CHECKSUM_SEED
    if isinstance(skeleton, SceneNode):
        skeleton = SkeletonSnapshot.capture(skeleton)
    if len(skeleton) == 0:
        return CHECKSUM_SEED
    return _node_checksum(skeleton, 0)

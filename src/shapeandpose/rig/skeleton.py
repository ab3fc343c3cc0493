"""Read-only, index-addressed copy of a skeleton taken once per build pass.

Nodes are flattened depth-first into an arena; parent/child links are
indices. Every stage after capture (checksum, joint lookup, ring
transforms) reads the snapshot, never the live ``SceneNode`` tree, so a
pass sees one consistent pose even if the host moves bones mid-build.
"""

from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import ContextManager, Iterator, Optional

from shapeandpose.core.math_utils import (
    Mat4, Quat, Vec3, mat4_compose, mat4_decompose, mat4_identity,
)
from shapeandpose.core.scene_graph import SceneNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkeletonNodeRecord:
    """World-space pose and topology of one skeleton node."""
    index: int
    name: str
    position: Vec3
    rotation: Quat
    scale: Vec3
    world_matrix: Mat4
    parent: Optional[int]
    children: tuple[int, ...]


class SkeletonSnapshot:
    """Arena of ``SkeletonNodeRecord`` in depth-first (pre-order) order.

    Index 0 is the root. ``index_of`` maps a name to the first node with
    that name in depth-first order.
    """

    def __init__(self, records: list[SkeletonNodeRecord]):
        self._records = records
        self._by_name: dict[str, int] = {}
        for rec in records:
            if rec.name in self._by_name:
                logger.debug("Duplicate skeleton node name %r; keeping first match", rec.name)
                continue
            self._by_name[rec.name] = rec.index

    @classmethod
    def capture(
        cls,
        root: SceneNode,
        lock: Optional[ContextManager] = None,
    ) -> SkeletonSnapshot:
        """Copy world transforms and child ordering from a live tree.

        World matrices are composed here from each node's local TRS, so
        the live tree's cached matrices are neither trusted nor written.
        If *lock* is given the whole copy happens while holding it.
        """
        with lock if lock is not None else nullcontext():
            if root.parent is not None:
                base = root.parent.compute_world_matrix()
            else:
                base = mat4_identity()
            records: list[SkeletonNodeRecord] = []
            cls._capture_node(root, None, base, records)
        return cls(records)

    @classmethod
    def _capture_node(
        cls,
        node: SceneNode,
        parent: Optional[int],
        parent_world: Mat4,
        records: list[SkeletonNodeRecord],
    ) -> int:
        index = len(records)
        world = parent_world @ mat4_compose(node.position, node.quaternion, node.scale)
        # Placeholder so children get indices after their parent
        records.append(None)  # type: ignore[arg-type]
        child_ids = [
            cls._capture_node(child, index, world, records) for child in node.children
        ]

        position, rotation, scale = mat4_decompose(world)
        records[index] = SkeletonNodeRecord(
            index=index,
            name=node.name,
            position=position,
            rotation=rotation,
            scale=scale,
            world_matrix=world,
            parent=parent,
            children=tuple(child_ids),
        )
        return index

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SkeletonNodeRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> SkeletonNodeRecord:
        return self._records[index]

    @property
    def root(self) -> SkeletonNodeRecord:
        return self._records[0]

    def index_of(self, name: str) -> Optional[int]:
        return self._by_name.get(name)

    def find(self, name: str) -> Optional[SkeletonNodeRecord]:
        index = self._by_name.get(name)
        return self._records[index] if index is not None else None

"""Keeps a body mesh in sync with a posed skeleton.

``RigController`` has two entry points, both safe to call from a host
frame or editor tick:

- ``initialize_rig()`` always rebuilds (e.g. from an "Initialize Rig"
  button).
- ``update_rig()`` snapshots the skeleton, compares its checksum with the
  last successful build, and rebuilds only when the pose changed.

Every rebuild is a full rebuild. A failed pass never replaces the mesh
already on the owner node and never raises into the caller.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import ContextManager, Iterable, Optional

from shapeandpose.constants import BODY_MESH_NAME, DEFAULT_RIG_CONFIG
from shapeandpose.core.events import EventBus, EventType
from shapeandpose.core.material import default_body_material
from shapeandpose.core.mesh import MeshInstance
from shapeandpose.core.scene_graph import SceneNode
from shapeandpose.rig.builder import BuildResult, build_rig
from shapeandpose.rig.checksum import compute_rig_checksum
from shapeandpose.rig.config import load_rig_config
from shapeandpose.rig.errors import ConfigUnavailableError
from shapeandpose.rig.skeleton import SkeletonSnapshot

logger = logging.getLogger(__name__)


class RigState(Enum):
    IDLE = auto()    # no mesh built yet
    BUILT = auto()   # mesh on owner, checksum recorded


class RigController:
    """Builds the body mesh for *skeleton_root* onto *mesh_owner*."""

    def __init__(
        self,
        skeleton_root: Optional[SceneNode],
        mesh_owner: SceneNode,
        config_path: Path = DEFAULT_RIG_CONFIG,
        event_bus: Optional[EventBus] = None,
        lock: Optional[ContextManager] = None,
    ) -> None:
        self.skeleton_root = skeleton_root
        self.mesh_owner = mesh_owner
        self.config_path = Path(config_path)
        self.event_bus = event_bus
        self.lock = lock

        self.state: RigState = RigState.IDLE
        self.checksum: Optional[int] = None
        self.last_result: Optional[BuildResult] = None
        self.build_count: int = 0
        self._last_error: Optional[str] = None

    @property
    def body_mesh(self) -> Optional[MeshInstance]:
        return self.mesh_owner.mesh if self.state is RigState.BUILT else None

    # ── Entry points ──────────────────────────────────────────────────

    def initialize_rig(self) -> bool:
        """Rebuild unconditionally. Returns True if a new mesh was produced."""
        snapshot = self._capture()
        if snapshot is None:
            return False
        return self._rebuild(snapshot, compute_rig_checksum(snapshot))

    def update_rig(self) -> bool:
        """Rebuild if the skeleton changed since the last successful build.

        Returns True if a new mesh was produced.
        """
        snapshot = self._capture()
        if snapshot is None:
            return False
        checksum = compute_rig_checksum(snapshot)
        if self.state is RigState.BUILT and checksum == self.checksum:
            self._publish(EventType.RIG_UNCHANGED, checksum=checksum)
            return False
        return self._rebuild(snapshot, checksum)

    # ── Internals ─────────────────────────────────────────────────────

    def _capture(self) -> Optional[SkeletonSnapshot]:
        if self.skeleton_root is None:
            logger.error("Rig has no source skeleton; nothing to build")
            return None
        return SkeletonSnapshot.capture(self.skeleton_root, lock=self.lock)

    def _rebuild(self, snapshot: SkeletonSnapshot, checksum: int) -> bool:
        # ValueError covers malformed config documents and a singular owner matrix
        try:
            config = load_rig_config(self.config_path)
            result = build_rig(config, snapshot, self.mesh_owner.compute_world_matrix())
        except (ConfigUnavailableError, ValueError) as e:
            return self._fail(e)

        self._attach_mesh(result)

        self._last_error = None
        self.last_result = result
        self.checksum = checksum
        self.state = RigState.BUILT
        self.build_count += 1
        logger.info(
            "Rig rebuilt: %d vertices, %d triangles (%d limb(s) skipped)",
            result.vertex_count, result.triangle_count, len(result.skipped_limbs),
        )
        self._publish(
            EventType.RIG_BUILT,
            checksum=checksum,
            vertex_count=result.vertex_count,
            triangle_count=result.triangle_count,
        )
        return True

    def _fail(self, error: Exception) -> bool:
        # Retried every tick until it succeeds; report each distinct error once
        message = str(error)
        if message == self._last_error:
            logger.debug("Rig build still failing: %s", error)
        elif self.state is RigState.BUILT:
            logger.error("Rig rebuild failed, keeping previous mesh: %s", error)
        else:
            logger.error("Rig build failed: %s", error)
        self._last_error = message
        self._publish(EventType.RIG_BUILD_FAILED, error=error)
        return False

    def _attach_mesh(self, result: BuildResult) -> None:
        """Hand the combined geometry to the owner node, keeping its material."""
        previous = self.mesh_owner.mesh
        material = previous.material if previous is not None else default_body_material()
        self.mesh_owner.mesh = MeshInstance(
            name=BODY_MESH_NAME,
            geometry=result.geometry,
            material=material,
        )

    def _publish(self, event_type: EventType, **data) -> None:
        """Notify subscribers. A raising handler is logged, never propagated."""
        if self.event_bus is None:
            return
        try:
            self.event_bus.publish(event_type, **data)
        except Exception as e:
            logger.warning("Rig event handler failed for %s: %s", event_type.name, e)


def poll_rigs(controllers: Iterable[RigController]) -> int:
    """Run ``update_rig`` on every controller; returns how many rebuilt."""
    return sum(1 for controller in controllers if controller.update_rig())

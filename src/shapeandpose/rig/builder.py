"""One full build pass: config + skeleton snapshot -> combined body geometry.

Stages run in order: resolve joints, generate rings (done while
resolving), move rings into mesh-local space, stitch each limb, combine.
Nothing here touches the live scene; the controller decides what to do
with the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from shapeandpose.core.math_utils import Mat4
from shapeandpose.core.mesh import BufferGeometry
from shapeandpose.rig.config import RigConfig
from shapeandpose.rig.errors import RingSizeMismatchError
from shapeandpose.rig.joint_resolver import LimbChain, resolve_limb_chains
from shapeandpose.rig.limb_mesh import build_limb_geometry
from shapeandpose.rig.mesh_combiner import combine_geometries
from shapeandpose.rig.skeleton import SkeletonSnapshot
from shapeandpose.rig.space_transform import SpaceTransformer

logger = logging.getLogger(__name__)


@dataclass
class LimbBuild:
    name: str
    joint_count: int
    geometry: BufferGeometry | None = None
    skip_reason: str | None = None


@dataclass
class BuildResult:
    """Everything a pass produced. ``geometry`` is the combined body mesh."""
    geometry: BufferGeometry
    chains: list[LimbChain]
    limbs: list[LimbBuild]
    unresolved: list[tuple[str, str]] = field(default_factory=list)

    @property
    def skipped_limbs(self) -> list[LimbBuild]:
        return [limb for limb in self.limbs if limb.geometry is None]

    @property
    def vertex_count(self) -> int:
        return self.geometry.vertex_count

    @property
    def triangle_count(self) -> int:
        return self.geometry.triangle_count


def build_limb(chain: LimbChain, space: SpaceTransformer) -> LimbBuild:
    """Mesh one chain. Degenerate chains and ring mismatches yield no geometry."""
    limb = LimbBuild(name=chain.name, joint_count=len(chain))
    if not chain.has_geometry:
        limb.skip_reason = "degenerate"
        logger.debug("Limb %r has %d resolved joint(s); no geometry", chain.name, len(chain))
        return limb

    rings = [space.to_mesh_local(joint.node, joint.ring) for joint in chain.joints]
    try:
        limb.geometry = build_limb_geometry(rings, limb_name=chain.name)
    except RingSizeMismatchError as e:
        logger.error("Skipping limb %r: %s", chain.name, e)
        limb.skip_reason = "ring_size_mismatch"
    return limb


def build_rig(
    config: RigConfig,
    snapshot: SkeletonSnapshot,
    mesh_owner_world: Mat4,
) -> BuildResult:
    resolved = resolve_limb_chains(config, snapshot)
    space = SpaceTransformer(mesh_owner_world)

    limbs = [build_limb(chain, space) for chain in resolved.chains]
    combined = combine_geometries(limb.geometry for limb in limbs if limb.geometry is not None)

    logger.debug(
        "Built rig: %d limb(s), %d meshed, %d vertices, %d triangles",
        len(limbs), sum(1 for limb in limbs if limb.geometry is not None),
        combined.vertex_count, combined.triangle_count,
    )
    return BuildResult(
        geometry=combined,
        chains=resolved.chains,
        limbs=limbs,
        unresolved=resolved.unresolved,
    )

"""Bind limb config entries to skeleton nodes.

Each limb becomes a ``LimbChain`` of ``ResolvedJoint`` records in config
order. Names are looked up in the snapshot's name index; a name with no
matching node is dropped from its chain with a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from shapeandpose.rig.config import JointConfig, LimbConfig, RigConfig
from shapeandpose.rig.ring_generator import generate_ring
from shapeandpose.rig.skeleton import SkeletonNodeRecord, SkeletonSnapshot

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ResolvedJoint:
    """A skeleton node bound to its joint config and local-space ring."""
    node: SkeletonNodeRecord
    config: JointConfig
    ring: NDArray[np.float64]
    # Resolved joints sitting on immediate skeleton children of this node
    children: list[ResolvedJoint] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def index(self) -> int:
        return self.node.index

    @property
    def divisions(self) -> int:
        return len(self.ring)


@dataclass
class LimbChain:
    name: str
    joints: list[ResolvedJoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.joints)

    @property
    def has_geometry(self) -> bool:
        return len(self.joints) >= 2


@dataclass
class ResolveResult:
    chains: list[LimbChain]
    unresolved: list[tuple[str, str]] = field(default_factory=list)  # (limb, joint name)


def resolve_limb(
    limb: LimbConfig,
    snapshot: SkeletonSnapshot,
    unresolved: list[tuple[str, str]],
) -> LimbChain:
    chain = LimbChain(name=limb.name)
    for joint_cfg in limb.joints:
        record = snapshot.find(joint_cfg.name)
        if record is None:
            logger.warning("Joint not found: %s (limb %r)", joint_cfg.name, limb.name)
            unresolved.append((limb.name, joint_cfg.name))
            continue
        chain.joints.append(
            ResolvedJoint(node=record, config=joint_cfg, ring=generate_ring(joint_cfg))
        )
    return chain


def assign_direct_children(chains: list[LimbChain], snapshot: SkeletonSnapshot) -> None:
    """Link each resolved joint to resolved joints on its immediate skeleton children.

    Any chain in the pass counts. When one node appears in several chains
    the first resolved joint for it is used.
    """
    by_index: dict[int, ResolvedJoint] = {}
    for chain in chains:
        for joint in chain.joints:
            by_index.setdefault(joint.index, joint)

    for chain in chains:
        for joint in chain.joints:
            joint.children = [
                by_index[child] for child in snapshot[joint.index].children
                if child in by_index
            ]


def resolve_limb_chains(config: RigConfig, snapshot: SkeletonSnapshot) -> ResolveResult:
    """One chain per configured limb, in config order."""
    unresolved: list[tuple[str, str]] = []
    chains = [resolve_limb(limb, snapshot, unresolved) for limb in config.limbs]
    assign_direct_children(chains, snapshot)
    return ResolveResult(chains=chains, unresolved=unresolved)

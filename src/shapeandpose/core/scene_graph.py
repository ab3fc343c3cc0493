"""Host-side transform hierarchy that skeletons and mesh owners live in.

The rig pipeline only ever reads these nodes (via ``SkeletonSnapshot``),
except for the ``mesh`` slot of the node chosen to own the body mesh.
"""

from typing import Optional

from shapeandpose.core.math_utils import (
    Mat4, Vec3, Quat,
    mat4_identity, mat4_compose, quat_identity, vec3,
)
from shapeandpose.core.mesh import MeshInstance


class SceneNode:
    """A named node with a local TRS transform.

    World matrix = parent.world_matrix @ local_matrix.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.parent: Optional["SceneNode"] = None
        self.children: list["SceneNode"] = []

        # Local transform
        self.position: Vec3 = vec3()
        self.quaternion: Quat = quat_identity()
        self.scale: Vec3 = vec3(1, 1, 1)

        self.local_matrix: Mat4 = mat4_identity()
        self.world_matrix: Mat4 = mat4_identity()

        # Mesh attached by whoever owns this node (e.g. the rig controller)
        self.mesh: Optional[MeshInstance] = None

        self._matrix_dirty: bool = True

    def __repr__(self) -> str:
        return f"SceneNode({self.name!r}, children={len(self.children)})"

    def add(self, child: "SceneNode") -> "SceneNode":
        """Append a child node. Removes it from its previous parent if any."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        child._matrix_dirty = True
        return self

    def remove(self, child: "SceneNode") -> "SceneNode":
        if child in self.children:
            self.children.remove(child)
            child.parent = None
        return self

    def set_position(self, x: float, y: float, z: float) -> "SceneNode":
        self.position = vec3(x, y, z)
        self._matrix_dirty = True
        return self

    def set_quaternion(self, q: Quat) -> "SceneNode":
        self.quaternion = q.copy()
        self._matrix_dirty = True
        return self

    def set_scale(self, x: float, y: float, z: float) -> "SceneNode":
        self.scale = vec3(x, y, z)
        self._matrix_dirty = True
        return self

    def update_local_matrix(self) -> None:
        self.local_matrix = mat4_compose(self.position, self.quaternion, self.scale)
        self._matrix_dirty = False

    def update_world_matrix(self, force: bool = False) -> None:
        """Recursively update world matrices for this node and all descendants."""
        if self._matrix_dirty or force:
            self.update_local_matrix()

        if self.parent is not None:
            self.world_matrix = self.parent.world_matrix @ self.local_matrix
        else:
            self.world_matrix = self.local_matrix.copy()

        for child in self.children:
            child.update_world_matrix(force=force)

    def compute_world_matrix(self) -> Mat4:
        """World matrix from the current local TRS of this node and its ancestors.

        Unlike ``update_world_matrix`` this neither relies on nor writes the
        cached matrices.
        """
        m = mat4_compose(self.position, self.quaternion, self.scale)
        node = self.parent
        while node is not None:
            m = mat4_compose(node.position, node.quaternion, node.scale) @ m
            node = node.parent
        return m

    def find(self, name: str) -> Optional["SceneNode"]:
        """Find first descendant (depth-first, self included) with given name."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def get_world_position(self) -> Vec3:
        return self.world_matrix[:3, 3].copy()

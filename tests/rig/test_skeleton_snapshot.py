"""Tests for SkeletonSnapshot capture."""

import threading

import numpy as np

from shapeandpose.core.math_utils import quat_from_axis_angle, vec3
from shapeandpose.core.scene_graph import SceneNode
from shapeandpose.rig.skeleton import SkeletonSnapshot


def test_capture_depth_first_indices(arm_skeleton):
    snap = SkeletonSnapshot.capture(arm_skeleton)
    assert [rec.name for rec in snap] == ["root", "shoulder", "elbow", "wrist"]
    assert snap.root.parent is None
    assert snap[1].parent == 0
    assert snap[1].children == (2,)
    assert snap[3].children == ()


def test_world_positions(arm_skeleton):
    snap = SkeletonSnapshot.capture(arm_skeleton)
    np.testing.assert_array_almost_equal(snap.find("wrist").position, [0.2, 0.85, 0.0])


def test_world_rotation_and_scale_inherited():
    root = SceneNode("root")
    root.set_quaternion(quat_from_axis_angle(vec3(0, 0, 1), np.pi / 2))
    root.set_scale(2, 2, 2)
    child = SceneNode("child")
    child.set_position(1, 0, 0)
    root.add(child)
    snap = SkeletonSnapshot.capture(root)
    rec = snap.find("child")
    np.testing.assert_array_almost_equal(rec.position, [0, 2, 0])
    np.testing.assert_array_almost_equal(rec.scale, [2, 2, 2])


def test_snapshot_isolated_from_later_mutation(arm_skeleton):
    snap = SkeletonSnapshot.capture(arm_skeleton)
    arm_skeleton.find("elbow").set_position(5, 5, 5)
    np.testing.assert_array_almost_equal(snap.find("elbow").position, [0.2, 1.1, 0.0])


def test_capture_does_not_write_host_matrices(arm_skeleton):
    SkeletonSnapshot.capture(arm_skeleton)
    np.testing.assert_array_equal(arm_skeleton.find("wrist").world_matrix, np.eye(4))


def test_duplicate_names_first_depth_first_match():
    root = SceneNode("root")
    a = SceneNode("a")
    dup_deep = SceneNode("dup")
    dup_deep.set_position(1, 0, 0)
    dup_late = SceneNode("dup")
    dup_late.set_position(2, 0, 0)
    root.add(a)
    a.add(dup_deep)
    root.add(dup_late)
    snap = SkeletonSnapshot.capture(root)
    np.testing.assert_array_almost_equal(snap.find("dup").position, [1, 0, 0])


def test_index_of_missing_name(arm_skeleton):
    snap = SkeletonSnapshot.capture(arm_skeleton)
    assert snap.index_of("tail") is None
    assert snap.find("tail") is None


def test_capture_under_lock(arm_skeleton):
    lock = threading.Lock()
    snap = SkeletonSnapshot.capture(arm_skeleton, lock=lock)
    assert len(snap) == 4
    assert not lock.locked()


def test_subtree_root_uses_parent_transform():
    scene = SceneNode("scene")
    scene.set_position(10, 0, 0)
    skel = SceneNode("hips")
    skel.set_position(0, 1, 0)
    scene.add(skel)
    snap = SkeletonSnapshot.capture(skel)
    np.testing.assert_array_almost_equal(snap.root.position, [10, 1, 0])

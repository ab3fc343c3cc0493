"""Tests for a full build pass."""

import logging

import numpy as np

from shapeandpose.core.math_utils import mat4_compose, mat4_identity, quat_identity, vec3
from shapeandpose.rig.builder import build_rig
from shapeandpose.rig.config import RigConfig
from shapeandpose.rig.skeleton import SkeletonSnapshot


def _build(skeleton, data, owner=None):
    return build_rig(
        RigConfig.from_dict(data),
        SkeletonSnapshot.capture(skeleton),
        mat4_identity() if owner is None else owner,
    )


def test_three_joint_arm_counts(arm_skeleton, arm_config):
    result = _build(arm_skeleton, arm_config)
    assert result.vertex_count == 24
    assert result.triangle_count == 32
    assert result.skipped_limbs == []


def test_rings_centred_on_joints(arm_skeleton, arm_config):
    result = _build(arm_skeleton, arm_config)
    pos = result.geometry.positions.reshape(3, 8, 3).astype(np.float64)
    centres = pos.mean(axis=1)
    np.testing.assert_array_almost_equal(
        centres, [[0.2, 1.4, 0.0], [0.2, 1.1, 0.0], [0.2, 0.85, 0.0]], decimal=6
    )
    radii = np.linalg.norm(pos - centres[:, np.newaxis, :], axis=2)
    np.testing.assert_allclose(radii, 0.05, rtol=1e-5)


def test_owner_transform_moves_mesh_into_local_space(arm_skeleton, arm_config):
    owner = mat4_compose(vec3(0.2, 1.4, 0.0), quat_identity(), vec3(1, 1, 1))
    result = _build(arm_skeleton, arm_config, owner=owner)
    first_ring = result.geometry.positions.reshape(3, 8, 3)[0]
    np.testing.assert_array_almost_equal(first_ring.mean(axis=0), [0, 0, 0], decimal=6)


def test_missing_joint_gives_shorter_tube(arm_skeleton, caplog):
    data = {"limbs": [{"name": "arm", "joints": ["shoulder", "missing_bone", "wrist"]}]}
    with caplog.at_level(logging.WARNING):
        result = _build(arm_skeleton, data)
    assert len(result.chains[0]) == 2
    assert result.vertex_count == 16
    assert result.triangle_count == 16
    assert result.unresolved == [("arm", "missing_bone")]
    assert "missing_bone" in caplog.text


def test_degenerate_limb_contributes_nothing(arm_skeleton):
    data = {"limbs": [
        {"name": "stub", "joints": ["shoulder", "nowhere"]},
        {"name": "arm", "joints": ["shoulder", "elbow", "wrist"]},
    ]}
    result = _build(arm_skeleton, data)
    assert [limb.skip_reason for limb in result.limbs] == ["degenerate", None]
    assert result.vertex_count == 24


def test_ring_size_mismatch_skips_only_that_limb(arm_skeleton, caplog):
    square = [{"x": 1, "y": 0, "z": 0}, {"x": 0, "y": 0, "z": 1},
              {"x": -1, "y": 0, "z": 0}, {"x": 0, "y": 0, "z": -1}]
    data = {"limbs": [
        {"name": "bad", "joints": ["shoulder", {"name": "elbow", "scale": 0.05, "vertices": square}]},
        {"name": "good", "joints": ["elbow", "wrist"]},
    ]}
    with caplog.at_level(logging.ERROR, logger="shapeandpose.rig.builder"):
        result = _build(arm_skeleton, data)
    assert [limb.skip_reason for limb in result.limbs] == ["ring_size_mismatch", None]
    assert result.vertex_count == 16
    assert "bad" in caplog.text


def test_explicit_rings_of_equal_size_mesh(arm_skeleton):
    square = [{"x": 1, "y": 0, "z": 0}, {"x": 0, "y": 0, "z": 1},
              {"x": -1, "y": 0, "z": 0}, {"x": 0, "y": 0, "z": -1}]
    data = {"limbs": [{"name": "arm", "joints": [
        {"name": "shoulder", "scale": 0.1, "vertices": square},
        {"name": "elbow", "radius": 0.05, "divisions": 4},
    ]}]}
    result = _build(arm_skeleton, data)
    assert result.vertex_count == 8
    first = result.geometry.positions.reshape(-1, 3)[0]
    np.testing.assert_array_almost_equal(first, [0.3, 1.4, 0.0], decimal=6)


def test_multiple_limbs_combined_in_order(arm_skeleton):
    data = {"limbs": [
        {"name": "upper", "joints": ["shoulder", "elbow"]},
        {"name": "lower", "joints": ["elbow", "wrist"]},
    ]}
    result = _build(arm_skeleton, data)
    assert result.vertex_count == 32
    assert result.triangle_count == 32
    assert result.geometry.indices.max() < result.vertex_count
    pos = result.geometry.positions.reshape(-1, 3)
    # Second limb starts with the elbow ring
    np.testing.assert_array_almost_equal(pos[16:24].mean(axis=0), [0.2, 1.1, 0.0], decimal=6)


def test_empty_config_gives_empty_mesh(arm_skeleton):
    result = _build(arm_skeleton, {"limbs": []})
    assert result.vertex_count == 0
    assert result.limbs == []

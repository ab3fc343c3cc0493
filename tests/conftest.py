"""Shared skeleton and config fixtures for rig tests."""

import json

import pytest

from shapeandpose.core.scene_graph import SceneNode


def make_arm_skeleton() -> SceneNode:
    """root -> shoulder -> elbow -> wrist, hanging straight down along -Y."""
    root = SceneNode("root")
    shoulder = SceneNode("shoulder")
    shoulder.set_position(0.2, 1.4, 0.0)
    elbow = SceneNode("elbow")
    elbow.set_position(0.0, -0.3, 0.0)
    wrist = SceneNode("wrist")
    wrist.set_position(0.0, -0.25, 0.0)
    root.add(shoulder)
    shoulder.add(elbow)
    elbow.add(wrist)
    return root


ARM_CONFIG = {
    "limbs": [
        {
            "name": "arm",
            "joints": [
                {"name": "shoulder", "radius": 0.05, "divisions": 8},
                {"name": "elbow", "radius": 0.05, "divisions": 8},
                {"name": "wrist", "radius": 0.05, "divisions": 8},
            ],
        }
    ]
}


@pytest.fixture
def arm_skeleton():
    return make_arm_skeleton()


@pytest.fixture
def write_config(tmp_path):
    """Write a config dict to a JSON file and return its path."""
    def _write(data, name="rig.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path
    return _write


@pytest.fixture
def arm_config_path(write_config):
    return write_config(ARM_CONFIG)


@pytest.fixture
def skeleton_factory():
    return make_arm_skeleton


@pytest.fixture
def arm_config():
    return json.loads(json.dumps(ARM_CONFIG))

"""Headless rig build report: load a skeleton + limb config, print mesh stats.

Usage::

    # Default human skeleton and config from assets/config:
    python -m tools.rig_report

    # Custom files, pose a joint first, emit JSON:
    python -m tools.rig_report --skeleton my_skel.json --config my_rig.json \\
        --rotate elbow_L 0 0 45 --json

Skeleton files are a nested tree of
``{"name", "position"?, "rotation_deg"?, "scale"?, "children"?}`` objects,
with ``rotation_deg`` as XYZ Euler angles in degrees.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from shapeandpose.constants import CONFIG_DIR, DEFAULT_RIG_CONFIG
from shapeandpose.core.config_loader import load_json
from shapeandpose.core.math_utils import deg_to_rad, quat_from_euler
from shapeandpose.core.scene_graph import SceneNode
from shapeandpose.rig.controller import RigController

logger = logging.getLogger(__name__)

DEFAULT_SKELETON = CONFIG_DIR / "human_01_skeleton.json"


def build_skeleton(data: dict[str, Any]) -> SceneNode:
    """Create a SceneNode tree from a nested skeleton description."""
    node = SceneNode(data["name"])
    node.set_position(*data.get("position", (0.0, 0.0, 0.0)))
    if "rotation_deg" in data:
        rx, ry, rz = (deg_to_rad(a) for a in data["rotation_deg"])
        node.set_quaternion(quat_from_euler(rx, ry, rz, "XYZ"))
    if "scale" in data:
        node.set_scale(*data["scale"])
    for child in data.get("children", []):
        node.add(build_skeleton(child))
    return node


def load_skeleton(path: Path) -> SceneNode:
    return build_skeleton(load_json(path))


def rig_report(controller: RigController) -> dict[str, Any]:
    """Summarise the controller's last build as plain data."""
    result = controller.last_result
    if result is None:
        return {"state": controller.state.name, "limbs": []}
    return {
        "state": controller.state.name,
        "checksum": controller.checksum,
        "vertex_count": result.vertex_count,
        "triangle_count": result.triangle_count,
        "unresolved": [f"{limb}/{joint}" for limb, joint in result.unresolved],
        "limbs": [
            {
                "name": limb.name,
                "joints": limb.joint_count,
                "vertices": limb.geometry.vertex_count if limb.geometry else 0,
                "triangles": limb.geometry.triangle_count if limb.geometry else 0,
                "skipped": limb.skip_reason,
            }
            for limb in result.limbs
        ],
    }


def _print_table(report: dict[str, Any]) -> None:
    print(f"State: {report['state']}")
    if not report["limbs"]:
        return
    print(f"{'limb':<16} {'joints':>6} {'verts':>7} {'tris':>7}  note")
    print("-" * 48)
    for limb in report["limbs"]:
        note = limb["skipped"] or ""
        print(f"{limb['name']:<16} {limb['joints']:>6} {limb['vertices']:>7} "
              f"{limb['triangles']:>7}  {note}")
    print("-" * 48)
    print(f"{'total':<16} {'':>6} {report['vertex_count']:>7} {report['triangle_count']:>7}")
    if report["unresolved"]:
        print(f"Unresolved joints: {', '.join(report['unresolved'])}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a body mesh headlessly and report stats")
    parser.add_argument("--skeleton", type=Path, default=DEFAULT_SKELETON,
                        help="Skeleton tree JSON")
    parser.add_argument("--config", type=Path, default=DEFAULT_RIG_CONFIG,
                        help="Limb config JSON")
    parser.add_argument("--rotate", nargs=4, action="append", default=[],
                        metavar=("JOINT", "X", "Y", "Z"),
                        help="Set a joint's XYZ Euler rotation (degrees) before building")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    root = load_skeleton(args.skeleton)
    for joint, *angles in args.rotate:
        node = root.find(joint)
        if node is None:
            parser.error(f"Unknown joint: {joint!r}")
        rx, ry, rz = (deg_to_rad(float(a)) for a in angles)
        node.set_quaternion(quat_from_euler(rx, ry, rz, "XYZ"))

    owner = SceneNode("body")
    controller = RigController(root, owner, config_path=args.config)
    controller.initialize_rig()

    report = rig_report(controller)
    if args.json:
        print(json.dumps(report, indent=2))
    else:
        _print_table(report)
    return 0 if controller.last_result is not None else 1


if __name__ == "__main__":
    sys.exit(main())

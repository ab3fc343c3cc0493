"""Tests for tube stitching."""

import numpy as np
import pytest

from shapeandpose.rig.errors import RingSizeMismatchError
from shapeandpose.rig.limb_mesh import build_limb_geometry, tube_indices
from shapeandpose.rig.ring_generator import procedural_ring


def _rings(count, divisions, spacing=1.0):
    base = procedural_ring(0.5, divisions)
    return [base + [0.0, -k * spacing, 0.0] for k in range(count)]


@pytest.mark.parametrize("ring_count,divisions", [(2, 3), (3, 8), (5, 12)])
def test_vertex_and_triangle_counts(ring_count, divisions):
    geom = build_limb_geometry(_rings(ring_count, divisions))
    assert geom.vertex_count == ring_count * divisions
    assert geom.triangle_count == (ring_count - 1) * divisions * 2


def test_ring_k_occupies_its_index_block():
    rings = _rings(3, 4)
    geom = build_limb_geometry(rings)
    pos = geom.positions.reshape(-1, 3)
    for k, ring in enumerate(rings):
        np.testing.assert_array_almost_equal(pos[k * 4:(k + 1) * 4], ring)


def test_quad_decomposition_and_seam():
    idx = tube_indices(2, 4).reshape(-1, 3).tolist()
    # First quad (i=0)
    assert idx[0] == [0, 4, 5]
    assert idx[1] == [0, 5, 1]
    # Last quad closes the seam back to index 0 of each ring
    assert idx[-2] == [3, 7, 4]
    assert idx[-1] == [3, 4, 0]


def test_indices_in_range():
    geom = build_limb_geometry(_rings(4, 8))
    assert geom.indices.max() < geom.vertex_count


def test_fewer_than_two_rings_gives_no_mesh():
    assert build_limb_geometry([]) is None
    assert build_limb_geometry(_rings(1, 8)) is None


def test_ring_size_mismatch_raises():
    rings = [procedural_ring(0.5, 8), procedural_ring(0.5, 6) + [0, -1, 0]]
    with pytest.raises(RingSizeMismatchError) as exc:
        build_limb_geometry(rings, limb_name="arm")
    assert exc.value.limb == "arm"
    assert exc.value.ring_index == 1
    assert (exc.value.expected, exc.value.got) == (8, 6)


def test_normals_point_consistently_across_tube():
    # Rings stacked down -Y with CCW winding (seen from +Y) get outward normals
    geom = build_limb_geometry(_rings(3, 16))
    pos = geom.positions.reshape(-1, 3)
    nrm = geom.normals.reshape(-1, 3)
    radial = pos.copy()
    radial[:, 1] = 0.0
    dots = np.einsum("ij,ij->i", nrm, radial)
    assert np.all(dots > 0) or np.all(dots < 0)
    np.testing.assert_allclose(np.linalg.norm(nrm, axis=1), 1.0, rtol=1e-5)

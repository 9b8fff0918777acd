"""
Shared fixtures for UV Channel Transfer tests.
"""

import numpy as np
import pytest

from uv_channel_transfer.core.mesh import MeshData
from uv_channel_transfer.scene import MeshSlot, MeshSlotKind, SceneObject


def make_mesh(name="Mesh", vertex_count=3, triangles=None, uv_channels=None, normals=None):
    """Mesh with vertices laid out on the X axis."""
    vertices = np.zeros((vertex_count, 3))
    vertices[:, 0] = np.arange(vertex_count)
    if triangles is None:
        triangles = [0, 1, 2] if vertex_count >= 3 else []
    return MeshData(
        name=name,
        vertices=vertices,
        triangles=triangles,
        uv_channels=uv_channels or [],
        normals=normals,
    )


def mesh_object(name, mesh, skinned=False):
    """Scene object exposing ``mesh`` through a single component."""
    if skinned:
        return SceneObject(
            name=name,
            skinned_mesh_renderer=MeshSlot(MeshSlotKind.SKINNED_MESH_RENDERER, mesh),
        )
    return SceneObject(name=name, mesh_filter=MeshSlot(MeshSlotKind.MESH_FILTER, mesh))


@pytest.fixture
def triangle_uvs():
    return [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]


@pytest.fixture
def source_mesh(triangle_uvs):
    return make_mesh(
        name="Source",
        uv_channels=[triangle_uvs, [], [(0.25, 0.25), (0.75, 0.25), (0.5, 0.75)]],
    )


@pytest.fixture
def target_mesh():
    return make_mesh(
        name="Body",
        uv_channels=[[], [(0.1, 0.1), (0.2, 0.1), (0.1, 0.2)]],
        normals=[(0, 0, 1)] * 3,
    )

"""
Mesh Store - Saves and loads mesh assets as compressed numpy archives.
"""

import os
import zipfile
from pathlib import Path
from typing import Union
import numpy as np

from ..utils.logger import get_logger, OperationContext
from ..utils.error_handler import MeshStoreError
from ..core.mesh import MeshData, UV_CHANNEL_COUNT


MESH_ASSET_SUFFIX = ".npz"
FORMAT_VERSION = 1

PathLike = Union[str, os.PathLike]


def asset_path(path: PathLike) -> Path:
    """Path with the mesh asset suffix appended when missing."""
    path = Path(path)
    if path.suffix.lower() != MESH_ASSET_SUFFIX:
        path = path.with_name(path.name + MESH_ASSET_SUFFIX)
    return path


class MeshStore:
    """
    Persists MeshData as ``.npz`` mesh assets.

    Archive keys: ``format_version``, ``name``, ``vertices``, ``triangles``,
    ``uv0``..``uv3`` and, when present, ``normals`` and ``tangents``.
    """

    def __init__(self):
        self.logger = get_logger("uv_channel_transfer.store")

    def save(self, mesh: MeshData, file_path: PathLike) -> Path:
        """
        Save a mesh asset.

        Args:
            mesh: Mesh to save
            file_path: Output path (``.npz`` is appended when missing)

        Returns:
            Path actually written

        Raises:
            MeshStoreError: If the file cannot be written
        """
        path = asset_path(file_path)

        with OperationContext(self.logger, "mesh_save", f"Saving {path}"):
            arrays = {
                "format_version": np.array(FORMAT_VERSION),
                "name": np.array(mesh.name),
                "vertices": mesh.vertices,
                "triangles": mesh.triangles,
            }
            for channel in range(UV_CHANNEL_COUNT):
                arrays[f"uv{channel}"] = mesh.get_uv(channel)
            if mesh.normals is not None:
                arrays["normals"] = mesh.normals
            if mesh.tangents is not None:
                arrays["tangents"] = mesh.tangents

            try:
                if path.parent and not path.parent.exists():
                    path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "wb") as f:
                    np.savez_compressed(f, **arrays)
            except OSError as e:
                raise MeshStoreError(
                    f"Failed to save mesh file: {e}",
                    error_code=1003,
                    file_path=str(path)
                )

            self.logger.info(
                f"Saved mesh '{mesh.name}': {mesh.vertex_count} vertices, "
                f"{mesh.triangle_count} triangles"
            )
            return path

    def load(self, file_path: PathLike) -> MeshData:
        """
        Load a mesh asset.

        Args:
            file_path: Path to a mesh asset (``.npz`` is appended when missing)

        Returns:
            The loaded MeshData

        Raises:
            MeshStoreError: If the file is missing, unreadable or malformed
        """
        path = asset_path(file_path)
        if not path.exists():
            raise MeshStoreError(
                f"Mesh file not found: {path}",
                error_code=1001,
                file_path=str(path)
            )

        with OperationContext(self.logger, "mesh_load", f"Loading {path}"):
            try:
                with np.load(path, allow_pickle=False) as data:
                    arrays = {key: data[key] for key in data.files}
            except (OSError, ValueError, zipfile.BadZipFile) as e:
                raise MeshStoreError(
                    f"Failed to read mesh file: {e}",
                    error_code=1002,
                    file_path=str(path)
                )

            missing = [key for key in ("name", "vertices", "triangles") if key not in arrays]
            if missing:
                raise MeshStoreError(
                    f"Invalid mesh file, missing: {', '.join(missing)}",
                    error_code=1004,
                    file_path=str(path)
                )

            try:
                mesh = MeshData(
                    name=str(arrays["name"]),
                    vertices=arrays["vertices"],
                    triangles=arrays["triangles"],
                    uv_channels=[
                        arrays.get(f"uv{channel}") for channel in range(UV_CHANNEL_COUNT)
                    ],
                    normals=arrays.get("normals"),
                    tangents=arrays.get("tangents"),
                )
            except ValueError as e:
                raise MeshStoreError(
                    f"Invalid mesh file: {e}",
                    error_code=1004,
                    file_path=str(path)
                )

            self.logger.info(
                f"Loaded mesh '{mesh.name}': {mesh.vertex_count} vertices, "
                f"{mesh.triangle_count} triangles"
            )
            return mesh

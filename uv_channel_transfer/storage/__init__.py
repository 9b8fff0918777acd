"""
Storage module for mesh assets.
"""

from .mesh_store import MeshStore, asset_path

__all__ = ["MeshStore", "asset_path"]

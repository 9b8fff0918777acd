"""
UV Channel Transfer - copy a UV channel between meshes of equal vertex count
and preview mesh UV layouts as small raster images.
"""

__version__ = "1.0.0"
__author__ = "UV Channel Transfer Team"

from .core.mesh import MeshData
from .core.rasterizer import render, render_mesh_preview, PreviewImage, RasterStyle
from .core.transfer import transfer, TransferResult
from .tool import UVTransferTool, ToolConfig

__all__ = [
    "MeshData",
    "render",
    "render_mesh_preview",
    "PreviewImage",
    "RasterStyle",
    "transfer",
    "TransferResult",
    "UVTransferTool",
    "ToolConfig",
]

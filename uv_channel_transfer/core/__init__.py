"""
Core module: mesh model, UV preview rasterizer and UV channel transfer.
"""

from .mesh import MeshData, UV_CHANNEL_COUNT, is_supported_channel
from .rasterizer import (
    render,
    render_mesh_preview,
    PreviewImage,
    PreviewConfig,
    RasterStyle,
    DEFAULT_RESOLUTION,
)
from .transfer import transfer, TransferResult
from .validator import UVValidator, ValidationResult

__all__ = [
    "MeshData",
    "UV_CHANNEL_COUNT",
    "is_supported_channel",
    "render",
    "render_mesh_preview",
    "PreviewImage",
    "PreviewConfig",
    "RasterStyle",
    "DEFAULT_RESOLUTION",
    "transfer",
    "TransferResult",
    "UVValidator",
    "ValidationResult",
]

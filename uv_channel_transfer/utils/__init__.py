"""
Utility modules for logging, error handling and math operations.
"""

from .logger import setup_logger, get_logger, OperationContext
from .error_handler import (
    UVTransferError,
    MeshStoreError,
    ValidationError,
    TransferError,
    VertexCountMismatch,
    ChannelMissing,
    UnsupportedChannel,
    NoMeshError,
    ConfigError,
    ErrorHandler,
)
from .math_utils import (
    uv_to_pixel,
    bresenham_line,
    clipped_line,
    calculate_uv_distance,
    uv_bounds,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "OperationContext",
    "UVTransferError",
    "MeshStoreError",
    "ValidationError",
    "TransferError",
    "VertexCountMismatch",
    "ChannelMissing",
    "UnsupportedChannel",
    "NoMeshError",
    "ConfigError",
    "ErrorHandler",
    "uv_to_pixel",
    "bresenham_line",
    "clipped_line",
    "calculate_uv_distance",
    "uv_bounds",
]

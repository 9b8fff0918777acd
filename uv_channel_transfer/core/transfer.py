"""
UV Channel Transfer - Copies one UV channel between meshes of equal vertex count.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..utils.logger import get_logger
from ..utils.error_handler import (
    TransferError,
    VertexCountMismatch,
    ChannelMissing,
    UnsupportedChannel,
)
from .mesh import MeshData, is_supported_channel


logger = get_logger("uv_channel_transfer.transfer")


@dataclass
class TransferResult:
    """Result of a UV channel transfer."""
    success: bool
    channel: object
    source_vertices: int
    target_vertices: int
    mesh: Optional[MeshData] = None
    error: Optional[TransferError] = None
    warnings: List[TransferError] = field(default_factory=list)

    @property
    def channel_copied(self) -> bool:
        return self.success and not self.warnings

    def unwrap(self) -> MeshData:
        """Return the resulting mesh or raise the carried error."""
        if not self.success:
            raise self.error
        return self.mesh


def transfer(source: MeshData, target: MeshData, channel: int) -> TransferResult:
    """
    Copy one UV channel from ``source`` onto a copy of ``target``.

    Neither input mesh is modified. A missing source channel is a soft
    failure: the result succeeds, carries a ``ChannelMissing`` warning and
    returns the target copy with that channel untouched.

    Args:
        source: Mesh providing the UV data
        target: Mesh receiving the UV data
        channel: UV channel index (0-3)

    Returns:
        TransferResult holding the new target mesh, or the error
    """
    result = TransferResult(
        success=False,
        channel=channel,
        source_vertices=source.vertex_count,
        target_vertices=target.vertex_count,
    )

    if source.vertex_count != target.vertex_count:
        result.error = VertexCountMismatch(source.vertex_count, target.vertex_count)
        logger.debug(f"Transfer rejected: {result.error.message}")
        return result

    if not is_supported_channel(channel):
        result.error = UnsupportedChannel(channel)
        logger.debug(f"Transfer rejected: {result.error.message}")
        return result

    channel = int(channel)
    source_copy = source.copy()
    target_copy = target.copy()

    if source_copy.has_uv(channel):
        target_copy.set_uv(channel, source_copy.get_uv(channel))
        logger.debug(
            f"Copied UV channel {channel} ({len(source_copy.get_uv(channel))} UVs) "
            f"from '{source.name}' to '{target.name}'"
        )
    else:
        warning = ChannelMissing(channel)
        result.warnings.append(warning)
        logger.warning(warning.message)

    result.success = True
    result.mesh = target_copy
    return result

"""
Mesh data model shared by the rasterizer, the transfer and the host layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np


UV_CHANNEL_COUNT = 4
SUPPORTED_CHANNELS = tuple(range(UV_CHANNEL_COUNT))


def is_supported_channel(channel) -> bool:
    """Check whether a selector names one of the four UV channels."""
    if isinstance(channel, (bool, np.bool_)):
        return False
    if not isinstance(channel, (int, np.integer)):
        return False
    return int(channel) in SUPPORTED_CHANNELS


def _empty_uv() -> np.ndarray:
    return np.zeros((0, 2), dtype=np.float64)


def _as_uv_array(coords) -> np.ndarray:
    if coords is None:
        return _empty_uv()
    array = np.array(coords, dtype=np.float64)
    if array.size == 0:
        return _empty_uv()
    return array.reshape(-1, 2)


@dataclass
class MeshData:
    """
    A triangle mesh with up to four UV channels.

    Channels are stored as (K, 2) arrays; an empty array means the channel
    is absent. Triangles are kept as a flat index array with stride 3.
    """
    name: str
    vertices: np.ndarray
    triangles: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    uv_channels: List[np.ndarray] = field(default_factory=list)
    normals: Optional[np.ndarray] = None
    tangents: Optional[np.ndarray] = None

    def __post_init__(self):
        self.vertices = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        self.triangles = np.array(self.triangles, dtype=np.int64).reshape(-1)

        channels = [_as_uv_array(c) for c in self.uv_channels]
        if len(channels) > UV_CHANNEL_COUNT:
            raise ValueError(
                f"A mesh carries at most {UV_CHANNEL_COUNT} UV channels, got {len(channels)}"
            )
        while len(channels) < UV_CHANNEL_COUNT:
            channels.append(_empty_uv())
        self.uv_channels = channels

        if self.normals is not None:
            self.normals = np.array(self.normals, dtype=np.float64).reshape(-1, 3)
        if self.tangents is not None:
            self.tangents = np.array(self.tangents, dtype=np.float64).reshape(-1, 4)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3

    @property
    def uv(self) -> np.ndarray:
        return self.uv_channels[0]

    @property
    def uv2(self) -> np.ndarray:
        return self.uv_channels[1]

    @property
    def uv3(self) -> np.ndarray:
        return self.uv_channels[2]

    @property
    def uv4(self) -> np.ndarray:
        return self.uv_channels[3]

    def get_uv(self, channel: int) -> np.ndarray:
        """Get the UV array of a channel (0-3)."""
        if not is_supported_channel(channel):
            raise IndexError(f"UV channel out of range: {channel}")
        return self.uv_channels[int(channel)]

    def set_uv(self, channel: int, coords) -> None:
        """Replace the UV array of a channel (0-3) with a copy of ``coords``."""
        if not is_supported_channel(channel):
            raise IndexError(f"UV channel out of range: {channel}")
        self.uv_channels[int(channel)] = _as_uv_array(coords)

    def has_uv(self, channel: int) -> bool:
        """Check if a channel holds any UV data."""
        return is_supported_channel(channel) and len(self.uv_channels[int(channel)]) > 0

    def copy(self, name: Optional[str] = None) -> "MeshData":
        """Return an independent deep copy of this mesh."""
        return MeshData(
            name=self.name if name is None else name,
            vertices=self.vertices.copy(),
            triangles=self.triangles.copy(),
            uv_channels=[c.copy() for c in self.uv_channels],
            normals=None if self.normals is None else self.normals.copy(),
            tangents=None if self.tangents is None else self.tangents.copy(),
        )

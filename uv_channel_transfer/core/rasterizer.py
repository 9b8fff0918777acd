"""
UV Rasterizer - Renders a mesh UV layout into a small square preview image.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple
import numpy as np

from ..utils.logger import get_logger
from ..utils.error_handler import ValidationError
from ..utils.math_utils import clipped_line, map_uvs_to_pixels
from .mesh import MeshData, is_supported_channel


DEFAULT_RESOLUTION = 512

Color = Tuple[float, float, float]

logger = get_logger("uv_channel_transfer.rasterizer")


@dataclass
class RasterStyle:
    """Colours used by the preview rasterizer (RGB, 0-1)."""
    background_color: Color = (0.2, 0.2, 0.2)
    line_color: Color = (1.0, 1.0, 1.0)
    point_color: Color = (1.0, 0.0, 0.0)


@dataclass
class PreviewConfig:
    """Configuration for preview rendering."""
    resolution: int = DEFAULT_RESOLUTION
    style: RasterStyle = field(default_factory=RasterStyle)


class PreviewImage:
    """
    Square RGB raster returned by ``render``.

    Pixels are addressed as ``(x, y)``: ``x`` follows U and ``y`` follows V,
    with row 0 at V = 0. The buffer is read-only.
    """

    def __init__(self, pixels: np.ndarray):
        pixels.flags.writeable = False
        self._pixels = pixels

    @property
    def pixels(self) -> np.ndarray:
        """Pixel buffer of shape (resolution, resolution, 3), indexed [y, x]."""
        return self._pixels

    @property
    def resolution(self) -> int:
        return self._pixels.shape[0]

    def get_pixel(self, x: int, y: int) -> Color:
        """Colour at pixel (x, y)."""
        r, g, b = self._pixels[y, x]
        return float(r), float(g), float(b)

    def to_uint8(self) -> np.ndarray:
        """8-bit copy of the buffer, rows ordered top-down for image files."""
        flipped = self._pixels[::-1]
        return np.clip(np.rint(flipped * 255.0), 0, 255).astype(np.uint8)

    def __repr__(self):
        return f"PreviewImage({self.resolution}x{self.resolution})"


def _draw_line(pixels: np.ndarray, p0, p1, color: np.ndarray, resolution: int):
    """Draw a Bresenham line, dropping the pixels that leave the image."""
    for x, y in clipped_line(int(p0[0]), int(p0[1]), int(p1[0]), int(p1[1]), resolution, resolution):
        pixels[y, x] = color


def _stamp_point(pixels: np.ndarray, x: int, y: int, color: np.ndarray, resolution: int):
    """Stamp a 3x3 marker centred on (x, y), clipping offsets at the edges."""
    y_lo, y_hi = max(y - 1, 0), min(y + 1, resolution - 1)
    x_lo, x_hi = max(x - 1, 0), min(x + 1, resolution - 1)
    pixels[y_lo:y_hi + 1, x_lo:x_hi + 1] = color


def render(
    uv_coordinates: Sequence,
    triangles: Sequence[int],
    resolution: int = DEFAULT_RESOLUTION,
    style: Optional[RasterStyle] = None
) -> PreviewImage:
    """
    Render a UV layout preview.

    Triangle edges are drawn first in the line colour, then every UV point
    is stamped as a 3x3 marker so points stay visible on top of edges.
    Triangles with an out-of-range index are skipped.

    Args:
        uv_coordinates: UV coordinates, sequence of (u, v)
        triangles: Flat triangle index array (stride 3) or (T, 3) array
        resolution: Image side length in pixels
        style: Colours to use (defaults to dark gray / white / red)

    Returns:
        PreviewImage of shape resolution x resolution

    Raises:
        ValidationError: If resolution is not positive
    """
    if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)) or resolution <= 0:
        raise ValidationError(f"Preview resolution must be a positive integer, got {resolution!r}",
                              error_code=2011)
    resolution = int(resolution)
    style = style or RasterStyle()

    pixels = np.empty((resolution, resolution, 3), dtype=np.float32)
    pixels[:, :] = style.background_color

    uvs = np.asarray(uv_coordinates, dtype=np.float64)
    if uvs.size == 0:
        return PreviewImage(pixels)
    uvs = uvs.reshape(-1, 2)

    uv_count = len(uvs)
    mapped, valid = map_uvs_to_pixels(uvs, resolution)
    line_color = np.asarray(style.line_color, dtype=np.float32)
    point_color = np.asarray(style.point_color, dtype=np.float32)

    indices = np.asarray(triangles, dtype=np.int64).reshape(-1)
    skipped = 0
    for i in range(0, len(indices) - 2, 3):
        a, b, c = indices[i], indices[i + 1], indices[i + 2]
        if not (0 <= a < uv_count and 0 <= b < uv_count and 0 <= c < uv_count):
            skipped += 1
            continue
        if not (valid[a] and valid[b] and valid[c]):
            skipped += 1
            continue

        _draw_line(pixels, mapped[a], mapped[b], line_color, resolution)
        _draw_line(pixels, mapped[b], mapped[c], line_color, resolution)
        _draw_line(pixels, mapped[c], mapped[a], line_color, resolution)

    for i in range(uv_count):
        if not valid[i]:
            continue
        x, y = int(mapped[i][0]), int(mapped[i][1])
        if 0 <= x < resolution and 0 <= y < resolution:
            _stamp_point(pixels, x, y, point_color, resolution)

    if skipped:
        logger.debug(f"Skipped {skipped} triangle(s) with out-of-range or non-finite UVs")

    return PreviewImage(pixels)


def render_mesh_preview(
    mesh: MeshData,
    channel: int = 0,
    resolution: int = DEFAULT_RESOLUTION,
    style: Optional[RasterStyle] = None
) -> PreviewImage:
    """
    Render the preview of one UV channel of a mesh.

    Unsupported channel selectors fall back to channel 0.
    """
    if not is_supported_channel(channel):
        logger.debug(f"UV channel {channel} unsupported for preview, using channel 0")
        channel = 0

    return render(mesh.get_uv(channel), mesh.triangles, resolution, style)

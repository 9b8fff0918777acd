"""
Mathematical utilities for UV operations.
Provides UV-to-pixel mapping, integer line stepping and UV statistics.
"""

import numpy as np
from typing import Iterator, Optional, Tuple


def uv_to_pixel(uv, resolution: int) -> Tuple[int, int]:
    """
    Map a UV coordinate to pixel space.

    Rounds half to even and does not clamp, so coordinates outside
    [0, 1] map to pixels outside the image.

    Args:
        uv: UV coordinate (u, v)
        resolution: Image side length in pixels

    Returns:
        Pixel coordinate (x, y)
    """
    return int(round(float(uv[0]) * resolution)), int(round(float(uv[1]) * resolution))


MAX_PIXEL_MAGNITUDE = 2 ** 53


def map_uvs_to_pixels(uv: np.ndarray, resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map an (N, 2) UV array to integer pixel coordinates.

    Args:
        uv: UV coordinates (N, 2)
        resolution: Image side length in pixels

    Returns:
        Tuple of (pixels, valid): pixel coordinates (N, 2) and a mask of the
        rows that mapped to a finite, representable pixel
    """
    uv = np.asarray(uv, dtype=np.float64).reshape(-1, 2)
    with np.errstate(invalid='ignore', over='ignore'):
        scaled = np.rint(uv * resolution)
        valid = np.all(np.isfinite(scaled) & (np.abs(scaled) < MAX_PIXEL_MAGNITUDE), axis=1)
    scaled[~valid] = 0
    return scaled.astype(np.int64), valid


def finite_rows(uv: np.ndarray) -> np.ndarray:
    """Boolean mask of UV rows whose components are all finite."""
    uv = np.asarray(uv, dtype=np.float64).reshape(-1, 2)
    return np.all(np.isfinite(uv), axis=1)


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int]]:
    """
    Yield the pixels of the integer line from (x0, y0) to (x1, y1).

    Both endpoints are included and consecutive pixels are 8-connected.
    """
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        yield x0, y0

        if x0 == x1 and y0 == y1:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def clipped_line(x0: int, y0: int, x1: int, y1: int,
                 width: int, height: int) -> Iterator[Tuple[int, int]]:
    """
    Yield the pixels of ``bresenham_line`` that fall inside a width x height grid.

    The pixel at step ``k`` along the major axis is computed in closed form,
    so only the steps whose major coordinate lies inside the grid are
    visited. The work per line is bounded by the grid size however far the
    endpoints lie outside it.
    """
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1

    if dx == 0 and dy == 0:
        if 0 <= x0 < width and 0 <= y0 < height:
            yield x0, y0
        return

    # Major axis steps every iteration; the minor axis has taken
    # (2*k*minor + major - 1) // (2*major) steps after k iterations.
    if dx >= dy:
        major, minor = dx, dy
        m0, n0, ms, ns, m_size, n_size = x0, y0, sx, sy, width, height
    else:
        major, minor = dy, dx
        m0, n0, ms, ns, m_size, n_size = y0, x0, sy, sx, height, width

    if ms > 0:
        k_lo, k_hi = -m0, m_size - 1 - m0
    else:
        k_lo, k_hi = m0 - m_size + 1, m0
    k_lo = max(k_lo, 0)
    k_hi = min(k_hi, major)

    for k in range(k_lo, k_hi + 1):
        n = n0 + ns * ((2 * k * minor + major - 1) // (2 * major))
        if 0 <= n < n_size:
            m = m0 + ms * k
            if dx >= dy:
                yield m, n
            else:
                yield n, m


def calculate_uv_distance(uv1: np.ndarray, uv2: np.ndarray) -> np.ndarray:
    """
    Calculate Euclidean distance between UV coordinates.

    Args:
        uv1: First UV coordinates (N, 2)
        uv2: Second UV coordinates (N, 2)

    Returns:
        Distance array (N,)
    """
    uv1 = np.asarray(uv1, dtype=np.float64)
    uv2 = np.asarray(uv2, dtype=np.float64)

    return np.sqrt(np.sum((uv1 - uv2) ** 2, axis=-1))


def uv_bounds(uv: np.ndarray) -> Optional[Tuple[float, float, float, float]]:
    """
    Bounding box of the finite UV coordinates.

    Returns:
        (min_u, min_v, max_u, max_v) or None if there is no finite UV
    """
    uv = np.asarray(uv, dtype=np.float64).reshape(-1, 2)
    uv = uv[finite_rows(uv)]
    if len(uv) == 0:
        return None
    return (
        float(np.min(uv[:, 0])),
        float(np.min(uv[:, 1])),
        float(np.max(uv[:, 0])),
        float(np.max(uv[:, 1])),
    )

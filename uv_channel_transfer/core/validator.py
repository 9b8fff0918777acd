"""
UV Validator - Reports on UV channel contents.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field
import numpy as np

from ..utils.logger import get_logger
from ..utils.math_utils import calculate_uv_distance, uv_bounds
from .mesh import MeshData, UV_CHANNEL_COUNT


@dataclass
class ValidationResult:
    """Result of UV validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def uv_count(self) -> int:
        return self.details.get('uv_count', 0)

    @property
    def coverage(self) -> float:
        return self.details.get('coverage', 0.0)


class UVValidator:
    """
    Checks UV channels for values that would render badly.

    Checks performed:
    - NaN/Inf values
    - Value range (0-1)
    - UV count against vertex count
    """

    def __init__(self):
        self.logger = get_logger("uv_channel_transfer.validator")

    def validate_uv_channel(
        self,
        uv_coords: np.ndarray,
        tolerance: float = 1e-6
    ) -> ValidationResult:
        """
        Validate a UV array.

        Args:
            uv_coords: UV coordinates (N, 2)
            tolerance: Numerical tolerance for the [0, 1] range check

        Returns:
            ValidationResult with validation details
        """
        result = ValidationResult(is_valid=True)
        uv_coords = np.asarray(uv_coords, dtype=np.float64).reshape(-1, 2)

        result.details['uv_count'] = len(uv_coords)

        nan_count = int(np.sum(np.isnan(uv_coords)))
        inf_count = int(np.sum(np.isinf(uv_coords)))
        result.details['nan_values'] = nan_count
        result.details['inf_values'] = inf_count

        if nan_count > 0:
            result.errors.append(f"Found {nan_count} NaN values in UV coordinates")
            result.is_valid = False

        if inf_count > 0:
            result.errors.append(f"Found {inf_count} Inf values in UV coordinates")
            result.is_valid = False

        finite = uv_coords[np.all(np.isfinite(uv_coords), axis=1)]
        out_of_range = int(np.sum(
            np.any((finite < -tolerance) | (finite > 1.0 + tolerance), axis=1)
        ))
        result.details['out_of_range'] = out_of_range
        if out_of_range > 0:
            result.warnings.append(
                f"Found {out_of_range} UV coordinates outside [0,1] range"
            )

        result.details['coverage'] = self._compute_uv_coverage(uv_coords)

        self.logger.debug(
            f"UV validation: valid={result.is_valid}, "
            f"errors={len(result.errors)}, warnings={len(result.warnings)}"
        )

        return result

    def validate_mesh_uv(self, mesh: MeshData, channel: int = 0) -> ValidationResult:
        """
        Validate one UV channel of a mesh.

        Args:
            mesh: MeshData to validate
            channel: UV channel to validate

        Returns:
            ValidationResult
        """
        if not mesh.has_uv(channel):
            return ValidationResult(
                is_valid=False,
                errors=[f"UV channel {channel} not found"]
            )

        uv_coords = mesh.get_uv(channel)
        result = self.validate_uv_channel(uv_coords)

        if len(uv_coords) != mesh.vertex_count:
            result.warnings.append(
                f"UV count ({len(uv_coords)}) differs from vertex count ({mesh.vertex_count})"
            )

        return result

    def _compute_uv_coverage(self, uv_coords: np.ndarray) -> float:
        """Fraction of the unit square covered by the UV bounding box."""
        bounds = uv_bounds(uv_coords)
        if bounds is None:
            return 0.0

        min_u, min_v, max_u, max_v = (min(max(b, 0.0), 1.0) for b in bounds)
        return (max_u - min_u) * (max_v - min_v)

    def compare_uv_channels(
        self,
        uv1: np.ndarray,
        uv2: np.ndarray,
        tolerance: float = 0.001
    ) -> Dict[str, Any]:
        """
        Compare two UV arrays.

        Args:
            uv1: First UV array
            uv2: Second UV array
            tolerance: Comparison tolerance

        Returns:
            Dictionary with comparison results
        """
        coords1 = np.asarray(uv1, dtype=np.float64).reshape(-1, 2)
        coords2 = np.asarray(uv2, dtype=np.float64).reshape(-1, 2)

        result = {
            'count_match': len(coords1) == len(coords2),
            'count1': len(coords1),
            'count2': len(coords2),
        }

        if len(coords1) == len(coords2) and len(coords1) > 0:
            distances = calculate_uv_distance(coords1, coords2)

            result['mean_distance'] = float(np.mean(distances))
            result['max_distance'] = float(np.max(distances))
            result['within_tolerance'] = float(np.sum(distances < tolerance) / len(distances))

        return result

    def generate_report(self, mesh: MeshData) -> str:
        """
        Generate a text report covering all four UV channels of a mesh.

        Args:
            mesh: MeshData to report on

        Returns:
            Formatted report string
        """
        report_lines = [
            f"UV Report for {mesh.name}",
            "=" * 50,
            f"Vertex Count: {mesh.vertex_count}",
            f"Triangle Count: {mesh.triangle_count}",
        ]

        for channel in range(UV_CHANNEL_COUNT):
            report_lines.append("")
            if not mesh.has_uv(channel):
                report_lines.append(f"UV Channel {channel}: empty")
                continue

            result = self.validate_mesh_uv(mesh, channel)
            report_lines.extend([
                f"UV Channel {channel}: {result.uv_count} UVs",
                f"  Coverage: {result.coverage:.2%}",
                f"  Out of range: {result.details.get('out_of_range', 0)}",
                f"  Status: {'VALID' if result.is_valid else 'INVALID'}",
            ])
            for error in result.errors:
                report_lines.append(f"  Error: {error}")
            for warning in result.warnings:
                report_lines.append(f"  Warning: {warning}")

        return "\n".join(report_lines)

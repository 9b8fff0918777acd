"""
Preview Exporter - Writes UV preview rasters to image files.
"""

import os
from typing import Optional

from ..utils.logger import get_logger
from ..core.rasterizer import PreviewImage


class PreviewExporter:
    """
    Export UV preview images.

    Features:
    - Single preview as PNG (V axis pointing up)
    - Source/target previews side by side in one figure
    """

    def __init__(self):
        self.logger = get_logger("uv_channel_transfer.exporter")

    def to_pil(self, image: PreviewImage):
        """Convert a preview to a Pillow RGB image."""
        from PIL import Image

        return Image.fromarray(image.to_uint8())

    def save_png(self, image: PreviewImage, output_path: str) -> str:
        """
        Save a preview as PNG.

        Args:
            image: Preview to save
            output_path: Output image path

        Returns:
            The written path
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        self.to_pil(image).save(output_path, format="PNG")

        self.logger.info(f"Exported UV preview: {output_path}")
        return output_path

    def export_comparison(
        self,
        source_image: Optional[PreviewImage],
        target_image: Optional[PreviewImage],
        output_path: str,
        title: str = "UV Comparison",
        source_title: str = "Source UV Preview",
        target_title: str = "Target UV Preview",
        dpi: int = 100
    ) -> str:
        """
        Export source and target previews side by side.

        A missing preview is shown as "No preview available.".

        Args:
            source_image: Source preview
            target_image: Target preview
            output_path: Output image path
            title: Figure title
            source_title: Left panel title
            target_title: Right panel title
            dpi: Output DPI

        Returns:
            The written path
        """
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        fig, axes = plt.subplots(1, 2, figsize=(12, 6.5), dpi=dpi)
        try:
            for ax, image, subtitle in [
                (axes[0], source_image, source_title),
                (axes[1], target_image, target_title),
            ]:
                if image is not None:
                    ax.imshow(image.pixels, origin='lower', interpolation='nearest',
                              extent=(0.0, 1.0, 0.0, 1.0))
                    ax.set_xlabel('U')
                    ax.set_ylabel('V')
                else:
                    ax.text(0.5, 0.5, "No preview available.", ha='center', va='center')
                    ax.set_xticks([])
                    ax.set_yticks([])
                ax.set_aspect('equal')
                ax.set_title(subtitle, fontsize=12, fontweight='bold')

            fig.suptitle(title, fontsize=14, fontweight='bold')
            plt.tight_layout()
            fig.savefig(output_path, dpi=dpi)
        finally:
            plt.close(fig)

        self.logger.info(f"Exported comparison image: {output_path}")
        return output_path


def default_preview_name(mesh_name: str, channel: int) -> str:
    """File name used for a mesh preview, e.g. ``Body_uv0.png``."""
    return f"{mesh_name}_uv{channel}.png"

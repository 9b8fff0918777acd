"""
UV Transfer Tool - Session object driving previews and UV transfers between
two scene objects.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .utils.logger import get_logger, OperationContext
from .utils.error_handler import ErrorHandler, NoMeshError, ValidationError
from .core.mesh import MeshData
from .core.rasterizer import PreviewConfig, PreviewImage, render_mesh_preview
from .core.transfer import TransferResult, transfer
from .scene import SceneObject, resolve_mesh, assign_mesh
from .storage.mesh_store import MeshStore


@dataclass
class ToolConfig:
    """Configuration for a transfer session."""
    uv_channel: int = 0
    show_preview: bool = True
    save_suffix: str = "_FixedUV"
    preview: PreviewConfig = field(default_factory=PreviewConfig)


class UVTransferTool:
    """
    Holds the source/target selection and runs previews and transfers.

    A transfer never touches the selected meshes: the copied result is
    saved through the mesh store and only then assigned to the target
    object.
    """

    def __init__(
        self,
        config: Optional[ToolConfig] = None,
        store: Optional[MeshStore] = None
    ):
        self.logger = get_logger("uv_channel_transfer.tool")
        self.config = config or ToolConfig()
        self.store = store or MeshStore()
        self.error_handler = ErrorHandler(self.logger)

        self.source_object: Optional[SceneObject] = None
        self.target_object: Optional[SceneObject] = None
        self.uv_channel: int = self.config.uv_channel
        self.show_preview: bool = self.config.show_preview

        self.source_preview: Optional[PreviewImage] = None
        self.target_preview: Optional[PreviewImage] = None

    @property
    def can_transfer(self) -> bool:
        return self.source_object is not None and self.target_object is not None

    def _render(self, mesh: MeshData) -> PreviewImage:
        preview = self.config.preview
        return render_mesh_preview(mesh, self.uv_channel, preview.resolution, preview.style)

    def update_previews(self):
        """Re-render previews of the selected objects that have a mesh."""
        if not self.show_preview:
            return

        source_mesh = resolve_mesh(self.source_object)
        if source_mesh is not None:
            self.source_preview = self._render(source_mesh)

        target_mesh = resolve_mesh(self.target_object)
        if target_mesh is not None:
            self.target_preview = self._render(target_mesh)

    def _require_mesh(self, obj: Optional[SceneObject], role: str) -> MeshData:
        if obj is None:
            raise NoMeshError(role)
        mesh = resolve_mesh(obj)
        if mesh is None:
            raise NoMeshError(role, obj.name)
        return mesh

    def default_save_name(self) -> str:
        """Suggested asset name for the transferred mesh."""
        target_mesh = self._require_mesh(self.target_object, "target")
        return f"{target_mesh.name}{self.config.save_suffix}"

    def transfer_uvs(self, save_path: Optional[str] = None) -> TransferResult:
        """
        Transfer the selected UV channel from source to target.

        Args:
            save_path: Where to save the new mesh asset; when empty the
                result is returned without saving or assigning it

        Returns:
            TransferResult of the transfer

        Raises:
            NoMeshError: If an object is unset or has no mesh
        """
        try:
            source_mesh = self._require_mesh(self.source_object, "source")
            target_mesh = self._require_mesh(self.target_object, "target")
        except NoMeshError as e:
            self.error_handler.handle(e, operation="transfer_uvs", reraise=False)
            raise

        with OperationContext(
            self.logger,
            "transfer_uvs",
            f"Transferring UV{self.uv_channel}: {source_mesh.name} -> {target_mesh.name}"
        ):
            result = transfer(source_mesh, target_mesh, self.uv_channel)

            if not result.success:
                self.error_handler.handle(result.error, operation="transfer_uvs", reraise=False)
                return result

            if not save_path:
                self.logger.info("No save path given, transferred mesh not saved")
                return result

            new_mesh = result.mesh
            new_mesh.name = Path(save_path).stem
            written = self.store.save(new_mesh, save_path)
            assign_mesh(self.target_object, new_mesh)

            self.logger.info(f"UVs successfully transferred and new mesh created at: {written}")

        try:
            self.update_previews()
        except ValidationError as e:
            self.logger.warning(f"Previews not refreshed: {e}")
        return result

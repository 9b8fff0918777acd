"""
Scene model - the objects a user picks as source and target.

An object exposes its mesh through a skinned mesh renderer or a mesh filter,
on itself or on any descendant. A skinned mesh renderer anywhere in the
hierarchy wins over a mesh filter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from .core.mesh import MeshData


class MeshSlotKind(Enum):
    """Components that can hold a mesh."""
    SKINNED_MESH_RENDERER = "skinned_mesh_renderer"
    MESH_FILTER = "mesh_filter"


SLOT_PRIORITY = [MeshSlotKind.SKINNED_MESH_RENDERER, MeshSlotKind.MESH_FILTER]


@dataclass
class MeshSlot:
    """A mesh-holding component; its shared mesh may be unset."""
    kind: MeshSlotKind
    shared_mesh: Optional[MeshData] = None


@dataclass
class SceneObject:
    """A named object in the scene hierarchy."""
    name: str
    skinned_mesh_renderer: Optional[MeshSlot] = None
    mesh_filter: Optional[MeshSlot] = None
    children: List["SceneObject"] = field(default_factory=list)

    def get_component(self, kind: MeshSlotKind) -> Optional[MeshSlot]:
        """Component of ``kind`` on this object only."""
        if kind == MeshSlotKind.SKINNED_MESH_RENDERER:
            return self.skinned_mesh_renderer
        return self.mesh_filter

    def walk(self) -> Iterator["SceneObject"]:
        """This object followed by its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def get_component_in_children(self, kind: MeshSlotKind) -> Optional[MeshSlot]:
        """First component of ``kind`` on this object or a descendant."""
        for obj in self.walk():
            component = obj.get_component(kind)
            if component is not None:
                return component
        return None


def find_mesh_slot(obj: SceneObject) -> Optional[MeshSlot]:
    """Slot that provides the mesh of ``obj``, following slot priority."""
    for kind in SLOT_PRIORITY:
        slot = obj.get_component_in_children(kind)
        if slot is not None:
            return slot
    return None


def resolve_mesh(obj: Optional[SceneObject]) -> Optional[MeshData]:
    """Mesh of a scene object, or None if it has none."""
    if obj is None:
        return None
    slot = find_mesh_slot(obj)
    return slot.shared_mesh if slot is not None else None


def assign_mesh(obj: SceneObject, mesh: MeshData) -> bool:
    """
    Point the object's mesh slot at ``mesh``.

    Returns:
        False if the object has no mesh-holding component
    """
    slot = find_mesh_slot(obj)
    if slot is None:
        return False
    slot.shared_mesh = mesh
    return True

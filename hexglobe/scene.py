"""Scene repository: owns cell meshes and hands them to the renderer.

Handles returned by :meth:`SceneRepository.add_mesh` are plain integers;
there is no global asset registry.
"""

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import trimesh

from .constants import (AMBIENT_LIGHT, BACKGROUND_COLOR, CELL_COLOR,
                        LIGHT_INTENSITY, LIGHT_POSITION)
from .models import MeshBuffer
from .transforms import look_at_matrix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Material:
    base_color: Tuple[float, float, float, float] = tuple(CELL_COLOR)
    metallic: float = 0.0
    roughness: float = 0.5
    double_sided: bool = True

    def to_trimesh(self) -> trimesh.visual.material.PBRMaterial:
        return trimesh.visual.material.PBRMaterial(
            baseColorFactor=list(self.base_color),
            metallicFactor=self.metallic,
            roughnessFactor=self.roughness,
            doubleSided=self.double_sided,
        )


@dataclass
class SceneEntry:
    mesh: MeshBuffer
    material: Material
    name: str


@dataclass
class SceneRepository:
    entries: Dict[int, SceneEntry] = field(default_factory=dict)
    _next_handle: int = 0

    def add_mesh(self, mesh: MeshBuffer, material: Optional[Material] = None,
                 name: Optional[str] = None) -> int:
        """Store a mesh and return its handle.  The repository owns it from here."""
        handle = self._next_handle
        self._next_handle += 1
        self.entries[handle] = SceneEntry(
            mesh=mesh,
            material=material or Material(),
            name=name or f"cell_{handle}",
        )
        return handle

    def get(self, handle: int) -> SceneEntry:
        return self.entries[handle]

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries.items())

    def drawable(self) -> List[SceneEntry]:
        """Entries with at least one triangle; degenerate cells draw nothing."""
        return [e for e in self.entries.values() if not e.mesh.is_empty]

    def bounds_radius(self) -> float:
        """Largest vertex distance from the origin over all stored meshes."""
        radius = 0.0
        for entry in self.entries.values():
            pos = entry.mesh.positions()
            if len(pos):
                radius = max(radius, float(np.linalg.norm(pos, axis=1).max()))
        return radius

    # ── trimesh / GLB ───────────────────────────────────────────────────

    def to_trimesh_scene(self) -> trimesh.Scene:
        scene = trimesh.Scene()
        skipped = 0
        for entry in self.entries.values():
            if entry.mesh.is_empty:
                skipped += 1
                continue
            mesh = entry.mesh.to_trimesh()
            mesh.visual = trimesh.visual.TextureVisuals(
                uv=entry.mesh.uvs(), material=entry.material.to_trimesh())
            scene.add_geometry(mesh, geom_name=entry.name)
        if skipped:
            logger.warning(f"Skipped {skipped} cells with no triangles")
        return scene

    def export_glb(self, output_path) -> str:
        """Write all drawable meshes to a GLB file; returns the path."""
        output_path = pathlib.Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        scene = self.to_trimesh_scene()
        if not scene.geometry:
            raise ValueError("No valid geometry to generate GLB file")
        scene.export(str(output_path), file_type='glb')
        logger.info(f"GLB file generated successfully: {output_path}")
        return str(output_path)

    # ── pyrender ────────────────────────────────────────────────────────

    def to_pyrender_scene(self):
        """Build a pyrender scene with every drawable cell plus a sun light."""
        import pyrender

        pr_scene = pyrender.Scene(bg_color=BACKGROUND_COLOR,
                                  ambient_light=AMBIENT_LIGHT)
        for entry in self.drawable():
            mat = entry.material
            pr_mat = pyrender.MetallicRoughnessMaterial(
                baseColorFactor=list(mat.base_color),
                metallicFactor=mat.metallic,
                roughnessFactor=mat.roughness,
                doubleSided=mat.double_sided,
            )
            pr_mesh = pyrender.Mesh.from_trimesh(entry.mesh.to_trimesh(),
                                                 material=pr_mat, smooth=False)
            pr_scene.add(pr_mesh, name=entry.name)

        sun = pyrender.DirectionalLight(color=[1.0, 0.98, 0.95],
                                        intensity=LIGHT_INTENSITY)
        pr_scene.add(sun, pose=look_at_matrix(LIGHT_POSITION, (0.0, 0.0, 0.0)))
        return pr_scene

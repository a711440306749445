from __future__ import annotations

import numpy as np
import pyvista as pv

from weaseltoon.mesh import Mesh, mesh_to_pyvista


def is_watertight(mesh: Mesh) -> tuple[bool, int]:
    poly = mesh_to_pyvista(mesh)
    edges = poly.extract_feature_edges(boundary_edges=True, feature_edges=False, non_manifold_edges=True, manifold_edges=False)
    open_edges = edges.n_cells
    return open_edges == 0, open_edges


def mesh_volume(mesh: Mesh) -> float:
    return float(mesh_to_pyvista(mesh).volume)


def centered_on_x(bounds, atol: float = 1e-6) -> bool:
    return bool(np.isclose(-bounds[0], bounds[1], atol=atol))


def read_stl(path) -> pv.PolyData:
    return pv.read(str(path))

"""
3D Preview (PyVista)
Converts a generated mesh into PolyData and shows it in an interactive window.
"""
from __future__ import annotations

import logging

import numpy as np
import pyvista as pv

from bodyscribe.model.mesh import MeshAccumulator

logger = logging.getLogger(__name__)


def mesh_to_polydata(mesh: MeshAccumulator) -> pv.PolyData:
    """
    Build a triangle PolyData from the mesh buffer.

    OBJ indices are 1-based, VTK cells are 0-based. The vertex normals are
    attached as the "Normals" point array.
    """
    vertices, normals, faces = mesh.as_arrays()
    if len(faces) == 0:
        polydata = pv.PolyData(vertices)
    else:
        cells = np.column_stack([np.full(len(faces), 3, dtype=np.int64), faces - 1]).ravel()
        polydata = pv.PolyData(vertices, cells)

    polydata.point_data["Normals"] = normals
    return polydata


def show_mesh(mesh: MeshAccumulator, show_edges: bool = False) -> None:
    """Open an interactive window with the body mesh, Y axis up."""
    polydata = mesh_to_polydata(mesh)
    logger.info(f"Showing preview: {polydata.n_points} points, {polydata.n_cells} cells.")

    plotter = pv.Plotter()
    plotter.add_mesh(
        polydata,
        color="tan",
        show_edges=show_edges,
        line_width=0.5,
        smooth_shading=True,
    )
    plotter.camera_position = "xy"
    plotter.add_axes()
    plotter.show()

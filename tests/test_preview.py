import numpy as np
import pyvista as pv

from bodyscribe import BodyModelBuilder, ResolutionSettings, normalize_measurements
from bodyscribe.model.mesh import MeshAccumulator
from bodyscribe.view.preview import mesh_to_polydata


def test_mesh_to_polydata():
    builder = BodyModelBuilder(ResolutionSettings(6, 4, 8, 3, 6))
    mesh = builder.build_mesh(normalize_measurements({}))

    polydata = mesh_to_polydata(mesh)

    assert isinstance(polydata, pv.PolyData)
    assert polydata.n_points == mesh.vertex_count
    assert polydata.n_cells == mesh.face_count
    cells = np.asarray(polydata.faces).reshape(-1, 4)
    np.testing.assert_array_equal(cells[:, 0], 3)
    np.testing.assert_array_equal(cells[:, 1:] + 1, np.array(mesh.faces))
    np.testing.assert_allclose(polydata.point_data["Normals"], np.array(mesh.normals))


def test_mesh_to_polydata_without_faces():
    mesh = MeshAccumulator()
    mesh.add_vertex((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    mesh.add_vertex((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))

    polydata = mesh_to_polydata(mesh)

    assert polydata.n_points == 2
    assert "Normals" in polydata.point_data

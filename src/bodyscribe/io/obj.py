"""
Input/Output Manager (Wavefront OBJ)
Writes the generated mesh as an OBJ document and reads such documents back
through meshio.
"""
from __future__ import annotations

import io
import logging
import os
from datetime import datetime, timezone
from typing import IO, List, Optional, Union

import meshio
import numpy as np

from bodyscribe.config import DEFAULT_OUTPUT_FILENAME, GENERATOR_NAME
from bodyscribe.exceptions import MeshIntegrityError, ObjParseError
from bodyscribe.model.measurements import MeasurementSet, is_reportable
from bodyscribe.model.mesh import MeshAccumulator

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ObjSerializer:
    """
    Text codec for generated meshes.

    Layout of a document:
        header comments (generator, date, one line per reported measurement)
        v  x y z        one per vertex, 6 decimals
        vn x y z        one per normal, same order as the vertices
        (blank line)
        f  a/a/a b/b/b c/c/c
    """

    @staticmethod
    def header_lines(measurements: MeasurementSet, generated_at: datetime) -> List[str]:
        lines = [
            f"# {GENERATOR_NAME}",
            "# Generated based on detailed body measurements",
            f"# Date: {format_timestamp(generated_at)}",
            "",
            "# Measurement data used:",
        ]
        for key, value in measurements.items():
            if is_reportable(value):
                lines.append(f"# {key}: {value}")
        lines.append("")
        return lines

    @staticmethod
    def serialize(
        mesh: MeshAccumulator,
        measurements: MeasurementSet,
        generated_at: Optional[datetime] = None
    ) -> str:
        """
        Render the whole mesh as one OBJ document.

        Args:
            mesh: Completed mesh buffer.
            measurements: The raw Measurement Set, reported in the header.
            generated_at: Timestamp for the header; defaults to now (UTC).

        Returns:
            The document, newline terminated.

        Raises:
            MeshIntegrityError: If normals are not aligned with vertices.
        """
        if len(mesh.vertices) != len(mesh.normals):
            raise MeshIntegrityError(
                f"Cannot serialize {len(mesh.vertices)} vertices with {len(mesh.normals)} normals."
            )
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)

        lines = ObjSerializer.header_lines(measurements, generated_at)
        lines.extend(f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.vertices)
        lines.extend(f"vn {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.normals)
        lines.append("")
        lines.extend(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}" for a, b, c in mesh.faces)

        logger.debug(f"Serialized {len(mesh.vertices)} vertices and {len(mesh.faces)} faces.")
        return "\n".join(lines) + "\n"

    @staticmethod
    def parse(document: str) -> MeshAccumulator:
        """
        Read an OBJ document (e.g. one produced by `serialize`) back into a mesh buffer.

        Raises:
            ObjParseError: If the document is not a triangle mesh with
                3-component vertices and normals.
            MeshIntegrityError: If normals are missing or a face index is out of range.
        """
        return ObjSerializer._read(io.StringIO(document), "<document>")

    @staticmethod
    def load(path: str) -> MeshAccumulator:
        """
        Read an OBJ file from disk.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ObjParseError: See `parse`.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"OBJ file not found: {path}")
        logger.info(f"Loading OBJ file: {path}")
        return ObjSerializer._read(path, path)

    @staticmethod
    def _read(path_or_buffer: Union[str, IO[str]], source: str) -> MeshAccumulator:
        try:
            obj = meshio.read(path_or_buffer, file_format="obj")
        except (meshio.ReadError, ValueError) as e:
            raise ObjParseError(source, str(e)) from e

        vertices = np.asarray(obj.points, dtype=np.float64)
        normals = np.asarray(obj.point_data.get("obj:vn", np.empty((0, 3))), dtype=np.float64)
        for name, values in (("vertices", vertices), ("normals", normals)):
            if values.size and (values.ndim != 2 or values.shape[1] != 3):
                raise ObjParseError(source, f"{name} must have 3 components, got shape {values.shape}")

        for block in obj.cells:
            if block.type != "triangle":
                raise ObjParseError(source, f"expected triangles, got '{block.type}' cells")

        if obj.cells:
            # meshio cells are 0-based
            faces = np.vstack([block.data for block in obj.cells]).astype(np.int64) + 1
        else:
            faces = np.empty((0, 3), dtype=np.int64)

        mesh = MeshAccumulator.from_arrays(
            vertices.reshape(-1, 3).tolist(),
            normals.reshape(-1, 3).tolist(),
            faces.tolist()
        )
        logger.debug(f"Read {mesh.vertex_count} vertices and {mesh.face_count} faces from {source}.")
        return mesh


def save_obj_file(document: str, path: Optional[str] = None) -> str:
    """
    Write an OBJ document to disk.

    Args:
        document: Serialized mesh.
        path: Target file; defaults to `body-model.obj` in the working directory.
            Parent directories are created as needed.

    Returns:
        Absolute path of the written file.
    """
    output_path = os.path.abspath(path or DEFAULT_OUTPUT_FILENAME)
    directory = os.path.dirname(output_path)
    try:
        os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(document)
    except OSError as e:
        logger.exception(f"Failed to write OBJ file: {e}")
        raise

    logger.info(f"Model saved to: {output_path}")
    return output_path

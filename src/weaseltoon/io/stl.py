from __future__ import annotations

from pathlib import Path
import struct

import numpy as np

from weaseltoon.mesh import Mesh

_BINARY_RECORD = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("v0", "<f4", (3,)),
        ("v1", "<f4", (3,)),
        ("v2", "<f4", (3,)),
        ("attr", "<u2"),
    ]
)


def _face_normals(mesh: Mesh) -> np.ndarray:
    if mesh.n_faces == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = mesh.vertices[mesh.faces[:, 0]]
    v1 = mesh.vertices[mesh.faces[:, 1]]
    v2 = mesh.vertices[mesh.faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    with np.errstate(invalid="ignore", divide="ignore"):
        normals = np.divide(normals, lengths[:, np.newaxis], where=lengths[:, np.newaxis] > 0)
    normals[~np.isfinite(normals)] = 0.0
    return normals


def write_stl(mesh: Mesh, path: Path, ascii: bool = False, name: str = "weaseltoon") -> None:
    path = Path(path)
    normals = _face_normals(mesh)
    faces = mesh.faces
    vertices = mesh.vertices

    if ascii:
        lines = [f"solid {name}"]
        for idx, tri in enumerate(faces):
            nx, ny, nz = normals[idx]
            lines.append(f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}")
            lines.append("    outer loop")
            for vidx in tri:
                vx, vy, vz = vertices[vidx]
                lines.append(f"      vertex {vx:.6e} {vy:.6e} {vz:.6e}")
            lines.append("    endloop")
            lines.append("  endfacet")
        lines.append(f"endsolid {name}")
        path.write_text("\n".join(lines) + "\n")
        return

    records = np.zeros(faces.shape[0], dtype=_BINARY_RECORD)
    if faces.shape[0]:
        records["normal"] = normals
        records["v0"] = vertices[faces[:, 0]]
        records["v1"] = vertices[faces[:, 1]]
        records["v2"] = vertices[faces[:, 2]]

    header = f"WeaselToon STL {name}".encode("ascii", "replace")[:80].ljust(80, b"\0")
    with path.open("wb") as handle:
        handle.write(header)
        handle.write(struct.pack("<I", faces.shape[0]))
        handle.write(records.tobytes())


def read_stl_facet_count(path: Path) -> int:
    """Return the facet count declared by a binary STL, checking the file size matches."""

    path = Path(path)
    data = path.read_bytes()
    if len(data) < 84:
        raise ValueError(f"{path} is too short to be a binary STL.")
    (count,) = struct.unpack("<I", data[80:84])
    expected = 84 + count * _BINARY_RECORD.itemsize
    if len(data) != expected:
        raise ValueError(f"{path} declares {count} facets but holds {len(data)} bytes (expected {expected}).")
    return int(count)

"""Named assemblies and the STL export run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from rich.console import Console

from weaseltoon._config import MODEL_UNITS, UnitSettings, get_settings, resolve_units
from weaseltoon.assembly import boat_assembly, float_assembly, frame_assembly
from weaseltoon.dimensions import BoatDimensions, FloatDimensions, default_dimensions
from weaseltoon.io.stl import write_stl
from weaseltoon.mesh import analyze_mesh
from weaseltoon.mesh_quality import MeshQuality
from weaseltoon.modeling import Evaluator, Geometry
from weaseltoon.parts import (
    c_bracket,
    hat_channel,
    main_beam,
    nose_cone,
    square_tube,
    straight_section,
    transom_bracket,
)

Builder = Callable[[BoatDimensions], Geometry]

# Stand-alone parts are exported at a fixed length so they print on one bed.
PART_LENGTH = 36.0


@dataclass(frozen=True)
class Assembly:
    """A named root node written to ``<name>.stl``."""

    name: str
    description: str
    build: Builder

    @property
    def filename(self) -> str:
        return f"{self.name}.stl"


def _seated(geometry: Geometry) -> Geometry:
    return geometry.aligned(x="center", y="min", z="min")


def _straight(float_dims: FloatDimensions, dims: BoatDimensions) -> Geometry:
    ribs = dims.ribs
    return straight_section(
        float_dims.diameter,
        float_dims.straight_length,
        channel_count=float_dims.channel_count,
        channel_width=float_dims.channel_width,
        channel_spacing=float_dims.channel_spacing,
        channel_depth=float_dims.channel_depth,
        rib_spacing=ribs.spacing,
        rib_height=ribs.height,
        rib_outset=ribs.outset,
        rib_inset=ribs.inset,
    )


def _frame(dims: BoatDimensions) -> Geometry:
    layout = dims.layout
    return frame_assembly(layout.boat_length, layout.main_center_to_center, layout.crossmember_count, dims)


def _hat_channel(dims: BoatDimensions) -> Geometry:
    hat = dims.hat_channel
    return hat_channel(PART_LENGTH, hat.height, hat.top_width, hat.bottom_width, hat.flange_width, hat.thickness)


def _main_beam(dims: BoatDimensions) -> Geometry:
    beam = dims.main_beam
    return main_beam(PART_LENGTH, beam.width, beam.height, beam.flange_thickness, beam.stem_width)


def _c_bracket(dims: BoatDimensions) -> Geometry:
    bracket = dims.bracket
    return c_bracket(dims.main.diameter, bracket.thickness, bracket.width, bracket.tab_length)


CATALOG: tuple[Assembly, ...] = (
    Assembly("pontoon-boat-complete", "Complete boat", boat_assembly),
    Assembly("frame-assembly", "Beams, crossmembers and brackets", _frame),
    Assembly(
        "main-nosecone",
        "Main float nose cone",
        lambda d: _seated(nose_cone(d.main.diameter, d.main.nose_cone_length)),
    ),
    Assembly("main-straight", "Main float straight section", lambda d: _seated(_straight(d.main, d))),
    Assembly(
        "aux-nosecone",
        "Auxiliary float nose cone",
        lambda d: _seated(nose_cone(d.aux.diameter, d.aux.nose_cone_length)),
    ),
    Assembly("aux-straight", "Auxiliary float straight section", lambda d: _seated(_straight(d.aux, d))),
    Assembly("hat-channel", "Hat channel crossmember", lambda d: _seated(_hat_channel(d))),
    Assembly(
        "square-tube",
        "Square tube crossmember",
        lambda d: _seated(square_tube(PART_LENGTH, d.square_tube.size, d.square_tube.wall)),
    ),
    Assembly("main-beam", "T main beam", lambda d: _seated(_main_beam(d))),
    Assembly("c-bracket", "C-bracket", lambda d: _seated(_c_bracket(d))),
    Assembly(
        "transom-bracket",
        "Motor mount",
        lambda d: _seated(transom_bracket(d.transom.width, d.transom.height, d.transom.depth)),
    ),
    Assembly("main-pontoon", "Complete main float", lambda d: _seated(float_assembly(d.main, d))),
    Assembly("aux-pontoon", "Complete auxiliary float", lambda d: _seated(float_assembly(d.aux, d))),
)


def assembly_names() -> list[str]:
    return [assembly.name for assembly in CATALOG]


def get_assembly(name: str) -> Assembly:
    for assembly in CATALOG:
        if assembly.name == name:
            return assembly
    raise ValueError(f"Unknown assembly '{name}'. Choose from: {', '.join(assembly_names())}.")


def build_assembly(name: str, dims: BoatDimensions | None = None) -> Geometry:
    return get_assembly(name).build(dims or default_dimensions())


def default_quality(lod: str = "final") -> MeshQuality:
    settings = get_settings()
    return MeshQuality(
        circular_segments=settings.circular_segments,
        loft_steps=settings.loft_steps,
        lod=lod,  # type: ignore[arg-type]
    )


def _selected(only: Iterable[str] | None) -> list[Assembly]:
    if not only:
        return list(CATALOG)
    wanted = list(only)
    for name in wanted:
        get_assembly(name)
    return [assembly for assembly in CATALOG if assembly.name in wanted]


def export_all(
    output_dir: Path | str,
    dims: BoatDimensions | None = None,
    quality: MeshQuality | None = None,
    ascii: bool = False,
    units: UnitSettings | str | None = None,
    only: Iterable[str] | None = None,
    console: Console | None = None,
) -> list[Path]:
    """Write one STL per catalog entry, in catalog order, and return the paths.

    Kernel failures propagate as ``GeometryError`` and stop the run.
    """

    dims = (dims or default_dimensions()).validate()
    if units is None:
        unit_settings = get_settings().units
    elif isinstance(units, str):
        unit_settings = resolve_units(units)
    else:
        unit_settings = units
    selected = _selected(only)
    evaluator = Evaluator(quality or default_quality())
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for assembly in selected:
        mesh = evaluator.to_mesh(assembly.build(dims))
        analysis = analyze_mesh(mesh)
        if unit_settings.name != MODEL_UNITS:
            mesh = mesh.scaled(unit_settings.scale_from_model)
        path = output_dir / assembly.filename
        write_stl(mesh, path, ascii=ascii, name=assembly.name)
        written.append(path)
        if console is not None:
            console.print(f"[cyan]→ {assembly.filename}[/cyan] ({analysis.n_faces} faces)")
            for issue in analysis.issues():
                console.print(f"[yellow]  {assembly.name}: {issue}[/yellow]")
    return written


__all__ = [
    "Assembly",
    "CATALOG",
    "PART_LENGTH",
    "assembly_names",
    "build_assembly",
    "default_quality",
    "export_all",
    "get_assembly",
]

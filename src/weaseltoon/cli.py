from __future__ import annotations

import json
import pathlib
import traceback
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from weaseltoon._config import UnitSettings, get_settings, resolve_units
from weaseltoon.dimensions import BoatDimensions, load_dimensions
from weaseltoon.exports import CATALOG, build_assembly, default_quality, export_all, get_assembly
from weaseltoon.modeling import Evaluator, GeometryError
from weaseltoon.preview import PreviewBackendError, PyVistaPreviewer

console = Console()
app = typer.Typer(help="Build the parametric pontoon boat and export its parts as STL.")


def _log_active_units(units: UnitSettings) -> None:
    scale = units.scale_to_mm
    if abs(scale - 1.0) < 1e-9:
        console.print(f"[magenta]Units: {units.name} ({units.label}).[/magenta]")
    else:
        console.print(f"[magenta]Units: {units.name} ({units.label}); 1 {units.label} = {scale:.4g} mm.[/magenta]")


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _load_dimensions(path: pathlib.Path | None) -> BoatDimensions:
    if path is not None and not path.exists():
        raise typer.BadParameter(f"Dimension file {path} does not exist.")
    try:
        return load_dimensions(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _resolve_units(value: str | None) -> UnitSettings:
    if value is None:
        return get_settings().units
    try:
        return resolve_units(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def export(
    output_dir: pathlib.Path = typer.Argument(pathlib.Path("output"), help="Directory that receives the STL files."),
    dimensions: Optional[pathlib.Path] = typer.Option(
        None, "--dimensions", "-d", help="JSON file overriding dimension table values."
    ),
    only: Optional[List[str]] = typer.Option(None, "--only", help="Export only this assembly (repeatable)."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII STL instead of binary."),
    units: Optional[str] = typer.Option(None, "--units", help="Output units (inches, millimeters, meters)."),
    preview_quality: bool = typer.Option(
        False, "--preview-quality", help="Halve tessellation density for quick test exports."
    ),
) -> None:
    """
    Build every named assembly and write one STL file per assembly.
    """

    dims = _load_dimensions(dimensions)
    unit_settings = _resolve_units(units)
    if only:
        for name in only:
            try:
                get_assembly(name)
            except ValueError as exc:
                raise typer.BadParameter(str(exc)) from exc

    console.rule("WeaselToon Export")
    _log_active_units(unit_settings)
    quality = default_quality("preview" if preview_quality else "final")
    try:
        paths = export_all(
            output_dir,
            dims=dims,
            quality=quality,
            ascii=ascii,
            units=unit_settings,
            only=only,
            console=console,
        )
    except (GeometryError, ValueError) as exc:
        console.print(Panel.fit(_format_exception(exc), title="Build failed", style="red"))
        raise typer.Exit(code=1) from exc

    mode = "ASCII" if ascii else "binary"
    console.print(
        Panel(
            f"Wrote {len(paths)} {mode} STL files to [green]{output_dir}[/green].",
            title="Export complete",
            border_style="green",
        )
    )


@app.command("list")
def list_assemblies() -> None:
    """
    Show the named assemblies in export order.
    """

    table = Table(title="Assemblies")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("File", no_wrap=True)
    table.add_column("Description")
    for assembly in CATALOG:
        table.add_row(assembly.name, assembly.filename, assembly.description)
    console.print(table)


@app.command()
def dimensions(
    path: Optional[pathlib.Path] = typer.Option(None, "--dimensions", "-d", help="JSON override file to merge."),
) -> None:
    """
    Print the effective dimension table as JSON.
    """

    dims = _load_dimensions(path)
    console.print_json(json.dumps(dims.to_dict()))


@app.command()
def preview(
    name: str = typer.Argument(..., help="Assembly to render (see `weaseltoon list`)."),
    dimensions: Optional[pathlib.Path] = typer.Option(
        None, "--dimensions", "-d", help="JSON file overriding dimension table values."
    ),
    screenshot: Optional[pathlib.Path] = typer.Option(
        None, "--screenshot", help="Save a screenshot instead of opening a window."
    ),
    show_edges: bool = typer.Option(False, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
) -> None:
    """
    Build one assembly at preview quality and open it in a PyVista window.
    """

    dims = _load_dimensions(dimensions)
    try:
        get_assembly(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.rule("WeaselToon Preview")
    console.print(f"Rendering [green]{name}[/green]")
    try:
        mesh = Evaluator(default_quality("preview")).to_mesh(build_assembly(name, dims))
    except (GeometryError, ValueError) as exc:
        console.print(Panel.fit(_format_exception(exc), title="Build failed", style="red"))
        raise typer.Exit(code=1) from exc

    units = get_settings().units
    previewer = PyVistaPreviewer(console=console, unit_settings=units)
    try:
        previewer.show([mesh], title=f"WeaselToon: {name}", screenshot_path=screenshot, show_edges=show_edges)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":  # pragma: no cover
    app()

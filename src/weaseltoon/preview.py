from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable

from rich.console import Console

from weaseltoon._config import UnitSettings, get_settings
from weaseltoon.mesh import Mesh, mesh_to_pyvista

_FALLBACK_COLORS = ["#6ab0ff", "#f58f7c", "#9cdcfe", "#fadb5f", "#9ae6b4", "#d4b5ff"]


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


class PyVistaPreviewer:
    """Render evaluated meshes with PyVista."""

    def __init__(self, console: Console, unit_settings: UnitSettings | None = None):
        self.console = console
        self._pv = None
        self._unit_settings = unit_settings or get_settings().units

    def show(
        self,
        meshes: Iterable[Mesh],
        title: str = "WeaselToon Preview",
        screenshot_path: Path | None = None,
        show_edges: bool = False,
    ) -> None:
        pv = self._ensure_backend()
        datasets = [(mesh, mesh_to_pyvista(mesh)) for mesh in meshes]
        if not datasets:
            raise PreviewBackendError("Nothing to preview.")

        plotter = pv.Plotter(window_size=(1280, 800), off_screen=screenshot_path is not None)
        self._configure_plotter(plotter)
        for index, (mesh, dataset) in enumerate(datasets):
            if mesh.color is not None:
                color, opacity = mesh.color[:3], mesh.color[3]
            else:
                color, opacity = _FALLBACK_COLORS[index % len(_FALLBACK_COLORS)], 1.0
            plotter.add_mesh(
                dataset,
                name=f"mesh-{index}",
                show_edges=show_edges,
                color=color,
                opacity=opacity,
                smooth_shading=True,
                specular=0.2,
            )
        self._reset_camera(plotter, [dataset for _, dataset in datasets])

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title=title, auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            self.console.print(f"[green]Saved screenshot to {screenshot_path}[/green]")
            return

        plotter.show(title=title)
        plotter.close()

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install weaseltoon with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _configure_plotter(self, plotter) -> None:
        plotter.set_background("#090c10", top="#1b2333")
        plotter.add_axes(interactive=True)
        label = self._unit_settings.label
        plotter.show_bounds(
            grid="front",
            color="#5a677d",
            xlabel=f"X ({label})",
            ylabel=f"Y ({label})",
            zlabel=f"Z ({label})",
        )

    def _reset_camera(self, plotter, datasets: Iterable[object]) -> None:
        bounds = None
        for dataset in datasets:
            dataset_bounds = dataset.bounds
            if bounds is None:
                bounds = list(dataset_bounds)
                continue
            for axis in range(3):
                bounds[2 * axis] = min(bounds[2 * axis], dataset_bounds[2 * axis])
                bounds[2 * axis + 1] = max(bounds[2 * axis + 1], dataset_bounds[2 * axis + 1])
        if bounds is None:
            return

        center = [(bounds[2 * axis] + bounds[2 * axis + 1]) / 2.0 for axis in range(3)]
        diag = math.sqrt(sum((bounds[2 * axis + 1] - bounds[2 * axis]) ** 2 for axis in range(3)))
        distance = max(diag, 1.0) * 1.2

        # Look from the starboard quarter so the bow points to the right.
        camera_pos = (center[0] + distance, center[1] - distance * 0.5, center[2] + distance * 0.5)
        plotter.camera_position = [camera_pos, tuple(center), (0.0, 0.0, 1.0)]

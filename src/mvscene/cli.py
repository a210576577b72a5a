"""CLI entry point for mvscene.

Usage:
    mvscene info PATH --format COLMAP
    mvscene depth-ranges PATH --format PMVS
    mvscene overlap PATH --image 00000001.jpg --format PMVS
"""

from __future__ import annotations

import math
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mvscene.core.config import load_config
from mvscene.core.contracts import SceneConfig, SceneFormat
from mvscene.core.errors import ImageLookupError, SceneError
from mvscene.core.logging import setup_logging
from mvscene.core.model import SceneModel

app = typer.Typer(name="mvscene", help="Sparse reconstruction ingestion for multi-view stereo")
console = Console()


def _load(path: Path, input_format: SceneFormat | None, config: Path | None) -> tuple[SceneModel, SceneConfig]:
    cfg = load_config(config)
    setup_logging(cfg.log_level)
    from mvscene.readers import read_model

    try:
        model = read_model(path, input_format or cfg.input_format)
    except SceneError as e:
        console.print(f"[red]Failed to load scene: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return model, cfg


@app.command()
def info(
    path: Path = typer.Argument(..., help="Workspace directory"),
    input_format: SceneFormat = typer.Option(None, "--format", "-f", help="COLMAP or PMVS"),
    config: Path = typer.Option(None, help="Scene config path"),
) -> None:
    """Show the images and point count of a scene."""
    model, _ = _load(path, input_format, config)

    table = Table(title=f"Scene: {path} ({model.num_images} images, {model.num_points} points)")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", style="green")
    table.add_column("Focal", style="yellow")
    for image_id, image in enumerate(model.images):
        table.add_row(
            str(image_id),
            image.name,
            f"{image.width}x{image.height}",
            f"{image.K[0, 0]:.1f}",
        )
    console.print(table)


@app.command()
def depth_ranges(
    path: Path = typer.Argument(..., help="Workspace directory"),
    input_format: SceneFormat = typer.Option(None, "--format", "-f", help="COLMAP or PMVS"),
    config: Path = typer.Option(None, help="Scene config path"),
) -> None:
    """Show the per-image depth search range."""
    model, cfg = _load(path, input_format, config)

    table = Table(title="Depth ranges")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Min", style="green")
    table.add_column("Max", style="green")
    for image_id, (low, high) in enumerate(model.compute_depth_ranges(cfg.depth_range)):
        table.add_row(str(image_id), model.get_image_name(image_id), f"{low:.4f}", f"{high:.4f}")
    console.print(table)


@app.command()
def overlap(
    path: Path = typer.Argument(..., help="Workspace directory"),
    image: str = typer.Option(..., "--image", "-i", help="Image name"),
    input_format: SceneFormat = typer.Option(None, "--format", "-f", help="COLMAP or PMVS"),
    top: int = typer.Option(10, help="Number of neighbors to show"),
    config: Path = typer.Option(None, help="Scene config path"),
) -> None:
    """Show the images sharing the most sparse points with IMAGE."""
    model, cfg = _load(path, input_format, config)

    try:
        image_id = model.get_image_id(image)
    except ImageLookupError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    shared = model.compute_shared_points()[image_id]
    angles = model.compute_triangulation_angles(cfg.triangulation_percentile)[image_id]
    neighbors = sorted(shared.items(), key=lambda kv: (-kv[1], kv[0]))[:top]

    table = Table(title=f"Neighbors of {image}")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Shared points", style="green")
    table.add_column("Angle (deg)", style="yellow")
    for neighbor_id, count in neighbors:
        table.add_row(
            str(neighbor_id),
            model.get_image_name(neighbor_id),
            str(count),
            f"{math.degrees(angles[neighbor_id]):.2f}",
        )
    console.print(table)


if __name__ == "__main__":
    app()

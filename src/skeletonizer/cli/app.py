"""CLI application entry point for skeletonizer.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from skeletonizer import __version__
from skeletonizer.cli.output import (
    console,
    print_error,
    print_header,
    print_nodes,
    print_polygon_info,
    print_step,
    print_summary,
    print_sweep,
)
from skeletonizer.config import LoggingConfig, SkeletonizerSettings, SolverConfig, ToleranceConfig
from skeletonizer.core import (
    SkeletonSolver,
    SolverContext,
    compute_node_offset_distances,
    generate_collision_sweep,
)
from skeletonizer.core.geometry import bounding_extent
from skeletonizer.exceptions import InputError, SkeletonizerError
from skeletonizer.io import PolygonReader, SkeletonWriter, ensure_clockwise
from skeletonizer.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="skeletonizer",
    help="Compute the straight skeleton of a simple polygon.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Skeletonizer[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def skeletonize(
    input_polygon: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON polygon file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-skeleton.json)",
        ),
    ] = None,
    epsilon: Annotated[
        float,
        typer.Option(
            "--epsilon",
            "-e",
            help="Absolute tolerance for floating point comparisons",
            min=1e-15,
            max=1e-2,
        ),
    ] = 1e-8,
    scale_tolerance: Annotated[
        bool,
        typer.Option(
            "--scale-tolerance",
            help="Scale the tolerance with the polygon's bounding extent",
        ),
    ] = False,
    max_steps: Annotated[
        int,
        typer.Option(
            "--max-steps",
            help="Maximum number of solver steps",
            min=1,
        ),
    ] = 10_000,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Do not write a partial graph when solving fails",
        ),
    ] = False,
    sweep: Annotated[
        bool,
        typer.Option(
            "--sweep",
            help="Print every collision detected between the initial bisectors",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List interior nodes with their offset distance",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compute the straight skeleton of a polygon and write it as JSON.

    The polygon file holds a list of [x, y] pairs, a list of {"x", "y"}
    objects, or an object with a "vertices" key holding either. Vertices may
    be given in either winding.

    Example:
        skeletonizer house.json

    This will create house-skeleton.json holding the skeleton graph.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_polygon.exists():
        print_error(
            f"Input file not found: {input_polygon}",
            details=f"The file '{input_polygon}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_polygon.is_file():
        print_error(
            f"Input path is not a file: {input_polygon}",
            details="Please provide a path to a JSON polygon file.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = SkeletonizerSettings(
        tolerance=ToleranceConfig(epsilon=epsilon, scale_with_input=scale_tolerance),
        solver=SolverConfig(max_steps=max_steps, strict=strict),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )
    output_path = output or SkeletonWriter.get_skeleton_path(input_polygon)

    try:
        if not quiet:
            print_step("Loading polygon")

        reader = PolygonReader(input_polygon)
        reader.load()
        vertices = ensure_clockwise(reader.vertices)

        if not quiet:
            print_polygon_info(
                polygon_path=str(input_polygon),
                vertex_count=reader.vertex_count,
                reversed_winding=not reader.is_clockwise,
            )

        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        tolerance = settings.tolerance.make_tolerance(bounding_extent(vertices))

        if sweep and len(vertices) >= 3:
            if not quiet:
                print_step("Collision sweep")
            context = SolverContext.from_vertices(
                vertices,
                tolerance=tolerance,
                collide_reflex_only=settings.solver.collide_reflex_only,
            )
            print_sweep(generate_collision_sweep(context))

        if not quiet:
            print_step("Solving")

        solver = SkeletonSolver(settings, logger=logger.bind(component="solver"))
        result = solver.solve(vertices)
        graph = result.graph

        if result.error is not None:
            if not settings.solver.strict:
                SkeletonWriter(output_path).save(
                    graph, metadata={"complete": False, "error": str(result.error)}
                )
            print_error(
                f"Solver failed: {result.error}",
                details=(
                    None if settings.solver.strict else f"Partial graph written to {output_path}"
                ),
            )
            raise typer.Exit(code=1)

        SkeletonWriter(output_path).save(graph)

        if verbose:
            print_step("Interior nodes")
            print_nodes(graph, compute_node_offset_distances(SolverContext(graph, tolerance)))

        if not quiet:
            print_summary(
                output_path=str(output_path),
                total_time_s=result.stats.duration_seconds,
                vertices=len(vertices),
                interior_nodes=len(graph.interior_nodes),
                interior_edges=len(graph.interior_edges),
                steps=result.stats.steps,
                splits=result.stats.splits,
            )

    except InputError as e:
        print_error(f"Could not load polygon: {e}")
        raise typer.Exit(code=1)
    except SkeletonizerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

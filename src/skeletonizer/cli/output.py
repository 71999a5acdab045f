"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from skeletonizer.domain import CollisionEvent, StraightSkeletonGraph

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Skeletonizer[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_polygon_info(polygon_path: str, vertex_count: int, reversed_winding: bool) -> None:
    """Print polygon information.

    Args:
        polygon_path: Path to the polygon file
        vertex_count: Number of vertices
        reversed_winding: Whether counter-clockwise input was reversed
    """
    line = Text("  ")
    line.append(polygon_path)
    console.print(line)
    winding = "reversed to clockwise" if reversed_winding else "clockwise"
    console.print(f"  {vertex_count:,} vertices {SYM_DOT} {winding}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_summary(
    output_path: str | None,
    total_time_s: float,
    vertices: int,
    interior_nodes: int,
    interior_edges: int,
    steps: int,
    splits: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path of the written graph, if any
        total_time_s: Total solve time in seconds
        vertices: Number of input vertices
        interior_nodes: Number of interior nodes created
        interior_edges: Number of interior edges created
        steps: Scheduler steps taken
        splits: Wavefront splits encountered
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    console.print(
        f"  {vertices} vertices {SYM_DOT} {interior_nodes} interior nodes {SYM_DOT} "
        f"{interior_edges} interior edges"
    )
    console.print(f"  {steps} steps {SYM_DOT} {splits} splits")


def print_nodes(graph: StraightSkeletonGraph, offsets: dict[int, float]) -> None:
    """Print interior nodes with their offset distance.

    Args:
        graph: Solved graph
        offsets: Offset distance per interior node id
    """
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("node", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("offset", justify="right")
    table.add_column("in", justify="left")

    for node in graph.interior_nodes:
        offset = offsets.get(node.id)
        table.add_row(
            str(node.id),
            f"{node.position.x:.6g}",
            f"{node.position.y:.6g}",
            f"{offset:.6g}" if offset is not None else "-",
            ", ".join(str(e) for e in node.in_edges),
        )
    console.print(table)


def print_sweep(events: list[CollisionEvent]) -> None:
    """Print a collision sweep as a table.

    Args:
        events: Events sorted by offset distance
    """
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("offset", justify="right")
    table.add_column("instigator", justify="right")
    table.add_column("target", justify="right")
    table.add_column("type")
    table.add_column("kind")
    table.add_column("position")

    for event in events:
        style = "dim" if event.is_phantom else None
        table.add_row(
            f"{event.offset_distance:.6g}",
            str(event.instigator_id),
            str(event.target_id),
            event.event_type.value,
            event.intersection_kind.value,
            f"({event.position.x:.6g}, {event.position.y:.6g})",
            style=style,
        )
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")

"""Logging utilities for Skeletonizer."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]


@dataclass
class SolverStats:
    """Statistics from a solver run."""

    steps: int = 0
    events_resolved: int = 0
    phantom_events_discarded: int = 0
    splits: int = 0
    nodes_created: int = 0
    edges_created: int = 0
    partitions_processed: int = 0
    exterior_accepted: list[int] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate solve duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def _configure_structlog() -> None:
    structlog.configure(
        processors=list(_PROCESSORS),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    _configure_structlog()

    logger = structlog.get_logger("skeletonizer")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


def get_logger(name: str = "skeletonizer") -> structlog.stdlib.BoundLogger:
    """Get a named structlog logger.

    Installs the default processor chain routed through stdlib logging when
    structlog has not been configured yet, so output stays under the control
    of the host application's logging setup.
    """
    if not structlog.is_configured():
        _configure_structlog()
    return structlog.get_logger(name)


class SolverLogger:
    """Logger for tracking solver progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = SolverStats()

    def log_solve_start(self, vertex_count: int, epsilon: float) -> None:
        """Log start of a skeleton computation."""
        self._logger.info("Solving straight skeleton", vertices=vertex_count, epsilon=epsilon)

    def log_step(self, step: int, partition_size: int, pending_partitions: int) -> None:
        """Log one scheduler step."""
        self._logger.debug(
            "Scheduler step",
            step=step,
            partition_size=partition_size,
            pending=pending_partitions,
        )
        self._stats.steps += 1
        self._stats.partitions_processed += 1

    def log_event_resolved(
        self,
        node_id: int | None,
        edge_ids: list[int],
        offset: float,
    ) -> None:
        """Log a collision group resolved at a node."""
        self._logger.debug(
            "Collision resolved",
            node=node_id,
            edges=edge_ids,
            offset=round(offset, 6),
        )
        self._stats.events_resolved += 1

    def log_bisectors_created(self, edge_ids: list[int]) -> None:
        """Log bisectors materialized by a step."""
        self._logger.debug("Bisectors created", edges=edge_ids)
        self._stats.edges_created += len(edge_ids)

    def log_phantoms_discarded(self, count: int) -> None:
        """Log phantom events skipped while selecting a slice."""
        if count:
            self._logger.debug("Phantom events discarded", count=count)
            self._stats.phantom_events_discarded += count

    def log_split(self, spans: list[tuple[int, int]], partitions: list[list[int]]) -> None:
        """Log a wavefront split into child partitions."""
        self._logger.info(
            "Wavefront split",
            spans=spans,
            partitions=[len(p) for p in partitions],
        )
        self._stats.splits += 1

    def log_partition_terminal(self, edge_ids: list[int]) -> None:
        """Log a partition with nothing left to collide."""
        self._logger.debug("Partition terminal", edges=edge_ids)

    def log_exterior_accepted(self, exterior_ids: list[int]) -> None:
        """Log exterior edges whose wavefront collapsed."""
        if exterior_ids:
            self._logger.debug("Exterior edges accepted", edges=exterior_ids)
            self._stats.exterior_accepted.extend(exterior_ids)

    def log_solve_complete(self, nodes_created: int, duration_ms: float) -> None:
        """Log successful completion."""
        self._stats.nodes_created = nodes_created
        self._logger.info(
            "Straight skeleton complete",
            steps=self._stats.steps,
            nodes=nodes_created,
            edges=self._stats.edges_created,
            duration_ms=round(duration_ms, 2),
        )

    def log_solve_failed(self, error: Exception, nodes_created: int) -> None:
        """Log a solver failure."""
        self._stats.nodes_created = nodes_created
        self._logger.error(
            "Straight skeleton failed",
            error=str(error),
            error_type=type(error).__name__,
            steps=self._stats.steps,
        )

    @property
    def stats(self) -> SolverStats:
        """Get current solver statistics."""
        return self._stats

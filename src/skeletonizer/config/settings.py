"""Configuration settings for Skeletonizer."""

from pathlib import Path

from pydantic import BaseModel, Field

from skeletonizer.domain.tolerance import Tolerance


class ToleranceConfig(BaseModel):
    """Configuration for the geometry tolerance policy.

    The default is a fixed absolute epsilon. When ``scale_with_input`` is
    enabled the epsilon is scaled by the input's bounding extent relative to
    ``reference_extent``, which keeps comparisons meaningful on polygons with
    large coordinates.
    """

    epsilon: float = Field(
        default=1e-8,
        gt=0.0,
        le=1e-2,
        description="Absolute tolerance for all floating point comparisons",
    )
    scale_with_input: bool = Field(
        default=False,
        description="Scale epsilon with the bounding extent of the input polygon",
    )
    reference_extent: float = Field(
        default=1.0,
        gt=0.0,
        description="Extent at which epsilon applies unscaled",
    )

    def scale_tolerance(self, base_value: float, extent: float) -> float:
        """Scale a tolerance value for the given input extent.

        Args:
            base_value: The tolerance value at reference extent
            extent: The largest bounding-box side of the input

        Returns:
            Scaled tolerance value
        """
        return base_value * (max(extent, self.reference_extent) / self.reference_extent)

    def get_epsilon(self, extent: float = 0.0) -> float:
        """Get the epsilon to use for an input of the given extent."""
        if not self.scale_with_input:
            return self.epsilon
        return self.scale_tolerance(self.epsilon, extent)

    def make_tolerance(self, extent: float = 0.0) -> Tolerance:
        """Build the runtime tolerance policy for an input of the given extent."""
        return Tolerance(epsilon=self.get_epsilon(extent))


class SolverConfig(BaseModel):
    """Configuration for the wavefront solver."""

    max_steps: int = Field(
        default=10_000,
        ge=1,
        description="Maximum number of scheduler steps before reporting failure",
    )
    collide_reflex_only: bool = Field(
        default=True,
        description="Only test reflex bisectors against exterior edges",
    )
    strict: bool = Field(
        default=False,
        description="Do not write a partial graph when solving fails",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SkeletonizerSettings(BaseModel):
    """Main application settings."""

    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SkeletonizerSettings:
    """Get default application settings."""
    return SkeletonizerSettings()

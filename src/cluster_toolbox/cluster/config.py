"""Configuration for the cluster shaper."""

from cluster_toolbox.errors import ConfigurationError


class ClusterShaperConfig:
    """Validated settings for ``ClusterShaper``.

    Args:
        period: Expected profile width in levels. Only a sizing hint: a bar may
            grow past it, which is logged but never enforced.
        resolution: Width of one price level.
        notify_unformed: Whether ``on_unformed_bar`` observers run on every tick
            of an open bar. Defaults to True.

    Raises:
        ConfigurationError: If period or resolution is not strictly positive.

    """

    def __init__(
        self,
        period: int,
        resolution: float,
        notify_unformed: bool = True,
    ) -> None:
        if not period > 0:
            raise ConfigurationError(f"Invalid period; expected >0 but got {period}")
        if not resolution > 0.0:
            raise ConfigurationError(
                f"Invalid resolution; expected >0 but got {resolution}"
            )

        self.period = int(period)
        self.resolution = float(resolution)
        self.notify_unformed = notify_unformed

    @classmethod
    def default(cls, resolution: float) -> "ClusterShaperConfig":
        """Sixty-level hint with unformed notifications enabled."""
        return cls(period=60, resolution=resolution, notify_unformed=True)

    def __repr__(self) -> str:
        return (
            f"ClusterShaperConfig(period={self.period}, resolution={self.resolution}, "
            f"notify_unformed={self.notify_unformed})"
        )

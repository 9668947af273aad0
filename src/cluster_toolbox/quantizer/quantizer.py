"""Price quantization onto signed integer levels."""

import numpy as np
from numpy.typing import NDArray

from cluster_toolbox.errors import ConfigurationError


def level_of(price: float, bar_open: float, resolution: float) -> int:
    """Return the level index of ``price`` relative to ``bar_open``.

    Ties round half to even, matching ``numpy.rint``.
    """
    return round((price - bar_open) / resolution)


class Quantizer:
    """Maps raw prices onto levels of a fixed width.

    Args:
        resolution: Width of one level in price units, e.g. the tick size.

    Raises:
        ConfigurationError: If resolution is not strictly positive.

    """

    def __init__(self, resolution: float) -> None:
        if not resolution > 0.0:
            raise ConfigurationError(
                f"Invalid resolution; expected >0 but got {resolution}"
            )
        self.resolution = float(resolution)

    def level_of(self, price: float, bar_open: float) -> int:
        """Quantize a single price relative to the bar open."""
        return round((price - bar_open) / self.resolution)

    def levels_of(
        self, prices: NDArray[np.float64], bar_open: float
    ) -> NDArray[np.int64]:
        """Quantize an array of prices relative to the bar open."""
        prices = np.asarray(prices, dtype=np.float64)
        return np.rint((prices - bar_open) / self.resolution).astype(np.int64)

    def price_of(self, level: int, bar_open: float) -> float:
        """Return the price at the center of ``level``."""
        return bar_open + level * self.resolution

    def __repr__(self) -> str:
        return f"Quantizer(resolution={self.resolution})"

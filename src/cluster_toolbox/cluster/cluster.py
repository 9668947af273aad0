"""Price profile accumulated over one bar."""

from collections.abc import Hashable

import numpy as np
from numpy.typing import NDArray

from cluster_toolbox.errors import FrozenClusterError


class Cluster:
    """
    A histogram of how many ticks landed on each price level during one bar.

    Levels are signed integers relative to the bar's open price (see
    ``Quantizer``). Counts are stored sparsely and rendered into a dense
    array over ``[min_level, max_level]`` only when a derived statistic is
    requested.

    Parameters
    ----------
    key : Hashable, optional
        The bar key this cluster was opened for.
    """

    __slots__ = (
        "key",
        "open",
        "close",
        "_counts",
        "_min_level",
        "_max_level",
        "_num_ticks",
        "_is_frozen",
        "_has_price",
    )

    def __init__(self, key: Hashable | None = None) -> None:
        self.key = key
        self.open = np.nan
        self.close = np.nan

        self._counts: dict[int, int] = {}
        self._min_level: int | None = None
        self._max_level: int | None = None
        self._num_ticks = 0
        self._is_frozen = False
        self._has_price = False

    def _check_mutable(self) -> None:
        if self._is_frozen:
            raise FrozenClusterError(
                f"Cluster for key {self.key!r} is closed and can no longer change"
            )

    def accumulate(self, level: int) -> None:
        """
        Adds one tick of dwell time at ``level``.

        Parameters
        ----------
        level : int
            The quantized price level of the tick.
        """
        self._check_mutable()

        counts = self._counts
        counts[level] = counts.get(level, 0) + 1
        self._num_ticks += 1

        if self._min_level is None:
            self._min_level = level
            self._max_level = level
        elif level < self._min_level:
            self._min_level = level
        elif level > self._max_level:
            self._max_level = level

    def record_price(self, price: float) -> None:
        """
        Updates the close price, and the open price on the first call.

        Parameters
        ----------
        price : float
            The price of the latest tick.
        """
        self._check_mutable()

        if not self._has_price:
            self.open = price
            self._has_price = True
        self.close = price

    def freeze(self) -> None:
        """Marks the cluster as closed. Further mutation raises FrozenClusterError."""
        self._is_frozen = True

    def clear(self) -> None:
        """Resets prices and counts to the initial empty state, keeping the key."""
        self._check_mutable()

        self.open = np.nan
        self.close = np.nan
        self._counts = {}
        self._has_price = False
        self._min_level = None
        self._max_level = None
        self._num_ticks = 0

    def copy(self) -> "Cluster":
        """Returns an unfrozen copy of this cluster."""
        other = Cluster(self.key)
        other.open = self.open
        other.close = self.close
        other._counts = dict(self._counts)
        other._min_level = self._min_level
        other._max_level = self._max_level
        other._num_ticks = self._num_ticks
        other._has_price = self._has_price
        return other

    @property
    def distribution(self) -> dict[int, int]:
        """Level to tick count, in ascending level order."""
        return dict(sorted(self._counts.items()))

    @property
    def min_level(self) -> int | None:
        return self._min_level

    @property
    def max_level(self) -> int | None:
        return self._max_level

    @property
    def width(self) -> int:
        """Number of levels spanned, including unvisited ones in between."""
        if self._min_level is None:
            return 0
        return self._max_level - self._min_level + 1

    @property
    def num_ticks(self) -> int:
        return self._num_ticks

    @property
    def is_empty(self) -> bool:
        return self._num_ticks == 0

    @property
    def is_frozen(self) -> bool:
        return self._is_frozen

    def raw_array(self) -> NDArray[np.int64]:
        """
        Renders the distribution as a dense histogram.

        Returns
        -------
        NDArray[np.int64]
            Tick counts for every level in ``[min_level, max_level]``, with
            zeros for levels that were never visited. Empty for an empty cluster.
        """
        raw = np.zeros(self.width, dtype=np.int64)
        if self._min_level is None:
            return raw

        offset = self._min_level
        for level, count in self._counts.items():
            raw[level - offset] = count
        return raw

    def normalized_array(self) -> NDArray[np.float64]:
        """
        Renders the distribution as a probability mass function.

        Returns
        -------
        NDArray[np.float64]
            ``raw_array()`` divided by its sum, or all zeros if the sum is zero.
        """
        raw = self.raw_array().astype(np.float64)
        total = raw.sum()
        if total == 0.0:
            return raw
        return raw / total

    def center_of_mass(self) -> float:
        """
        The count-weighted mean index over ``raw_array()``.

        Returns
        -------
        float
            A value in ``[0, width - 1]``, or NaN for an empty cluster.
        """
        if self._num_ticks == 0:
            return np.nan

        raw = self.raw_array()
        indices = np.arange(raw.size, dtype=np.int64)
        return float(np.dot(indices, raw)) / float(self._num_ticks)

    def center_of_mass_normalized(self) -> float:
        """
        The center of mass scaled into ``[0, 1]``.

        0 means all mass sits on the lowest level, 1 on the highest. A cluster
        that only ever visited one level reports 0.5. Empty clusters give NaN.
        """
        width = self.width
        if width == 0:
            return np.nan
        if width == 1:
            return 0.5
        return self.center_of_mass() / (width - 1)

    def level_prices(self, resolution: float) -> NDArray[np.float64]:
        """
        Prices of every slot in ``raw_array()``.

        Parameters
        ----------
        resolution : float
            The level width the cluster was quantized with.
        """
        if self._min_level is None:
            return np.zeros(0, dtype=np.float64)
        levels = np.arange(self._min_level, self._max_level + 1, dtype=np.float64)
        return self.open + levels * resolution

    def __repr__(self) -> str:
        return (
            f"Cluster(key={self.key!r}, open={self.open}, close={self.close}, "
            f"num_ticks={self._num_ticks}, width={self.width}, frozen={self._is_frozen})"
        )

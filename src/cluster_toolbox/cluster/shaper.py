"""Tick stream to price-profile bar aggregation."""

from collections.abc import Callable, Hashable, Sequence

from cluster_toolbox.cluster.cluster import Cluster
from cluster_toolbox.cluster.config import ClusterShaperConfig
from cluster_toolbox.errors import DimensionMismatchError
from cluster_toolbox.logging import Logger, LogLevel
from cluster_toolbox.quantizer import Quantizer

ClusterCallback = Callable[[Cluster], None]


class ClusterShaper:
    """
    Groups ticks into bars by a caller-supplied key and builds a price
    profile for each bar.

    A bar closes when ``update`` is called with a key different from the one
    the active bar was opened for, in either direction. Callers are expected
    to present keys in non-decreasing order; out-of-order keys are not
    corrected and simply close the active bar.

    Observers run synchronously inside ``update`` and must not call
    ``update`` on the same shaper. One shaper serves one stream; access from
    several threads has to be serialized by the caller.

    Parameters
    ----------
    period : int
        Expected profile width in levels. A sizing hint only.
    resolution : float
        Width of one price level.
    notify_unformed : bool
        Whether ``on_unformed_bar`` observers run for every tick of an open bar.
    logger : Logger, optional
        Receives debug records about closed bars. Silent when omitted.
    """

    def __init__(
        self,
        period: int,
        resolution: float,
        *,
        notify_unformed: bool = True,
        logger: Logger | None = None,
    ) -> None:
        self._config = ClusterShaperConfig(
            period=period, resolution=resolution, notify_unformed=notify_unformed
        )
        self._quantizer = Quantizer(self._config.resolution)
        self._logger = logger

        self._close_callbacks: list[ClusterCallback] = []
        self._unformed_callbacks: list[ClusterCallback] = []

        self._active_bar: Cluster | None = None
        self._current_bar_key: Hashable | None = None
        self._hint_exceeded = False
        self._num_closed_bars = 0

    @classmethod
    def from_config(
        cls, config: ClusterShaperConfig, logger: Logger | None = None
    ) -> "ClusterShaper":
        return cls(
            period=config.period,
            resolution=config.resolution,
            notify_unformed=config.notify_unformed,
            logger=logger,
        )

    def on_close_bar(self, callback: ClusterCallback) -> ClusterCallback:
        """
        Registers an observer for closed bars. Usable as a decorator.

        The observer receives the frozen ``Cluster`` exactly once, when the
        first tick of the next bar arrives.
        """
        self._close_callbacks.append(callback)
        return callback

    def on_unformed_bar(self, callback: ClusterCallback) -> ClusterCallback:
        """
        Registers an observer for progress on the open bar. Usable as a decorator.

        The observer receives the still-mutable active ``Cluster`` after every
        tick that did not close it.
        """
        self._unformed_callbacks.append(callback)
        return callback

    def remove_on_close_bar(self, callback: ClusterCallback) -> None:
        self._close_callbacks.remove(callback)

    def remove_on_unformed_bar(self, callback: ClusterCallback) -> None:
        self._unformed_callbacks.remove(callback)

    def _open_bar(self, price: float, bar_key: Hashable) -> None:
        bar = Cluster(bar_key)
        self._active_bar = bar
        self._current_bar_key = bar_key
        self._hint_exceeded = False
        self._add_tick(bar, price)

    def _add_tick(self, bar: Cluster, price: float) -> None:
        bar.record_price(price)
        bar.accumulate(self._quantizer.level_of(price, bar.open))

        if not self._hint_exceeded and bar.width > self._config.period:
            self._hint_exceeded = True
            logger = self._logger
            if logger is not None and logger.is_enabled_for(LogLevel.DEBUG):
                logger.debug(
                    f"Bar {bar.key!r} spans {bar.width} levels, past the "
                    f"sizing hint of {self._config.period}"
                )

    def _close_bar(self, bar: Cluster) -> None:
        bar.freeze()
        self._num_closed_bars += 1

        logger = self._logger
        if logger is not None and logger.is_enabled_for(LogLevel.DEBUG):
            logger.debug(
                f"Closed bar {bar.key!r}: ticks={bar.num_ticks} width={bar.width} "
                f"open={bar.open} close={bar.close}"
            )

        for callback in self._close_callbacks:
            callback(bar)

    def update(self, price: float, bar_key: Hashable) -> None:
        """
        Feeds one tick into the shaper.

        Parameters
        ----------
        price : float
            The tick price.
        bar_key : Hashable
            Identifier of the bar the tick belongs to. A change of key closes
            the active bar and opens a new one seeded with this tick.
        """
        bar = self._active_bar

        if bar is None:
            self._open_bar(price, bar_key)
            return

        if bar_key == self._current_bar_key:
            self._add_tick(bar, price)
            if self._config.notify_unformed:
                for callback in self._unformed_callbacks:
                    callback(bar)
            return

        try:
            self._close_bar(bar)
        finally:
            self._open_bar(price, bar_key)

    def update_many(
        self, prices: Sequence[float], bar_keys: Sequence[Hashable]
    ) -> None:
        """
        Feeds paired sequences of prices and keys through ``update`` in order.

        Raises
        ------
        DimensionMismatchError
            If the sequences differ in length. No tick is applied in that case.
        """
        if len(prices) != len(bar_keys):
            raise DimensionMismatchError(len(prices), len(bar_keys))

        for price, bar_key in zip(prices, bar_keys):
            self.update(price, bar_key)

    def clear(self) -> None:
        """Discards the active bar and returns to the uninitialized state."""
        self._active_bar = None
        self._current_bar_key = None
        self._hint_exceeded = False
        self._num_closed_bars = 0

        if self._logger is not None:
            self._logger.info("Cluster shaper cleared")

    @property
    def active_bar(self) -> Cluster | None:
        """The bar currently accumulating, or None before the first tick."""
        return self._active_bar

    @property
    def current_bar_key(self) -> Hashable | None:
        return self._current_bar_key

    @property
    def is_initialized(self) -> bool:
        return self._active_bar is not None

    @property
    def num_closed_bars(self) -> int:
        return self._num_closed_bars

    @property
    def period(self) -> int:
        return self._config.period

    @property
    def resolution(self) -> float:
        return self._config.resolution

    @property
    def config(self) -> ClusterShaperConfig:
        return self._config

    @property
    def quantizer(self) -> Quantizer:
        return self._quantizer

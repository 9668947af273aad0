"""Auction shape classification of closed bars."""

from enum import Enum
from typing import Any

import numpy as np
from msgspec import Struct

from cluster_toolbox.cluster.cluster import Cluster
from cluster_toolbox.errors import ConfigurationError
from cluster_toolbox.shape.analysis import (
    cosine_similarity,
    euclidean_distance,
    triangular_distribution,
)


class AuctionShape(str, Enum):
    """Profile shape, named after the letter the histogram resembles."""

    BALANCED = "D"
    SKEWED_LOW = "b"
    SKEWED_HIGH = "P"
    UNDEFINED = "unknown"


class ShapeReport(Struct, frozen=True):
    """Outcome of classifying one bar."""

    key: Any
    shape: AuctionShape
    center_of_mass: float
    similarity: float
    distance: float
    reference_peak: int
    matches_reference: bool


class ShapeClassifierConfig:
    """Thresholds for ``ShapeClassifier``.

    Args:
        low_threshold: Normalized center of mass below which a bar is skewed low.
        high_threshold: Normalized center of mass above which a bar is skewed high.
        min_similarity: Cosine similarity strictly above which the profile matches
            its triangular reference.
        max_distance: Euclidean distance strictly below which the profile matches
            its triangular reference.

    Raises:
        ConfigurationError: If the thresholds are out of range or inverted.

    """

    def __init__(
        self,
        low_threshold: float = 0.38,
        high_threshold: float = 0.62,
        min_similarity: float = 0.55,
        max_distance: float = 0.02,
    ) -> None:
        if not 0.0 <= low_threshold < high_threshold <= 1.0:
            raise ConfigurationError(
                "Invalid center of mass thresholds; expected 0 <= low < high <= 1 "
                f"but got low={low_threshold}, high={high_threshold}"
            )
        if not -1.0 <= min_similarity <= 1.0:
            raise ConfigurationError(
                f"Invalid min_similarity; expected within [-1, 1] but got {min_similarity}"
            )
        if not max_distance > 0.0:
            raise ConfigurationError(
                f"Invalid max_distance; expected >0 but got {max_distance}"
            )

        self.low_threshold = low_threshold
        self.high_threshold = high_threshold
        self.min_similarity = min_similarity
        self.max_distance = max_distance


class ShapeClassifier:
    """
    Labels a bar as balanced or skewed from where its mass sits, then scores
    the profile against a triangular reference peaked at the matching end.

    Parameters
    ----------
    config : ShapeClassifierConfig, optional
        Thresholds to use. Defaults to ``ShapeClassifierConfig()``.
    """

    def __init__(self, config: ShapeClassifierConfig | None = None) -> None:
        self._config = config if config is not None else ShapeClassifierConfig()

    @property
    def config(self) -> ShapeClassifierConfig:
        return self._config

    def shape_of(self, center: float) -> AuctionShape:
        """Map a normalized center of mass onto a shape."""
        if np.isnan(center):
            return AuctionShape.UNDEFINED
        if center < self._config.low_threshold:
            return AuctionShape.SKEWED_LOW
        if center > self._config.high_threshold:
            return AuctionShape.SKEWED_HIGH
        return AuctionShape.BALANCED

    @staticmethod
    def reference_peak(shape: AuctionShape, width: int) -> int:
        """Peak index of the triangular reference for ``shape``."""
        if shape is AuctionShape.SKEWED_LOW:
            return 0
        if shape is AuctionShape.SKEWED_HIGH:
            return max(width - 1, 0)
        return max(width - 1, 0) // 2

    def classify(self, cluster: Cluster) -> ShapeReport:
        """
        Classify one bar.

        Parameters
        ----------
        cluster : Cluster
            Usually a frozen bar handed to an ``on_close_bar`` observer.

        Returns
        -------
        ShapeReport
            ``UNDEFINED`` with NaN scores for an empty cluster.
        """
        if cluster.is_empty:
            return ShapeReport(
                key=cluster.key,
                shape=AuctionShape.UNDEFINED,
                center_of_mass=np.nan,
                similarity=np.nan,
                distance=np.nan,
                reference_peak=-1,
                matches_reference=False,
            )

        center = cluster.center_of_mass_normalized()
        shape = self.shape_of(center)

        profile = cluster.normalized_array()
        peak = self.reference_peak(shape, profile.size)
        reference = triangular_distribution(profile.size, peak)

        similarity = cosine_similarity(profile, reference)
        distance = euclidean_distance(profile, reference)

        return ShapeReport(
            key=cluster.key,
            shape=shape,
            center_of_mass=center,
            similarity=similarity,
            distance=distance,
            reference_peak=peak,
            matches_reference=(
                similarity > self._config.min_similarity
                or distance < self._config.max_distance
            ),
        )

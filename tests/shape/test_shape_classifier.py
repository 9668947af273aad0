"""Tests for auction shape classification."""

import msgspec
import numpy as np
import pytest

from cluster_toolbox.cluster import Cluster, ClusterShaper
from cluster_toolbox.errors import ConfigurationError
from cluster_toolbox.shape import (
    AuctionShape,
    ShapeClassifier,
    ShapeClassifierConfig,
    ShapeReport,
)


def make_cluster(levels: list[int], key=0) -> Cluster:
    cluster = Cluster(key)
    for level in levels:
        cluster.accumulate(level)
    cluster.freeze()
    return cluster


class TestShapeClassifierConfig:
    """Test threshold validation."""

    def test_defaults(self):
        """Test the default thresholds."""
        cfg = ShapeClassifierConfig()
        assert cfg.low_threshold == 0.38
        assert cfg.high_threshold == 0.62
        assert cfg.min_similarity == 0.55
        assert cfg.max_distance == 0.02

    @pytest.mark.parametrize(
        ("low", "high"), [(0.6, 0.4), (0.5, 0.5), (-0.1, 0.5), (0.2, 1.1)]
    )
    def test_invalid_center_thresholds(self, low, high):
        """Test that inverted or out-of-range center thresholds are rejected."""
        with pytest.raises(ConfigurationError, match="center of mass thresholds"):
            ShapeClassifierConfig(low_threshold=low, high_threshold=high)

    @pytest.mark.parametrize("min_similarity", [-1.5, 1.01])
    def test_invalid_min_similarity(self, min_similarity):
        """Test that similarities outside [-1, 1] are rejected."""
        with pytest.raises(ConfigurationError, match="min_similarity"):
            ShapeClassifierConfig(min_similarity=min_similarity)

    @pytest.mark.parametrize("max_distance", [0.0, -0.02])
    def test_invalid_max_distance(self, max_distance):
        """Test that non-positive distances are rejected."""
        with pytest.raises(ConfigurationError, match="max_distance"):
            ShapeClassifierConfig(max_distance=max_distance)


class TestShapeClassifier:
    """Test classification of individual bars."""

    def setup_method(self):
        self.classifier = ShapeClassifier()

    def test_balanced(self):
        """Test a profile centered in the middle."""
        report = self.classifier.classify(make_cluster([0, 1, 2]))
        assert report.shape is AuctionShape.BALANCED
        assert report.center_of_mass == 0.5
        assert report.reference_peak == 1
        assert report.similarity == pytest.approx(0.9428090415820634)
        assert report.matches_reference

    def test_skewed_low(self):
        """Test a profile heavy at the low end."""
        report = self.classifier.classify(make_cluster([0] * 10 + [1] * 3 + [4]))
        assert report.shape is AuctionShape.SKEWED_LOW
        assert report.center_of_mass == pytest.approx(0.125)
        assert report.reference_peak == 0

    def test_skewed_high(self):
        """Test a profile heavy at the high end."""
        report = self.classifier.classify(make_cluster([4] * 10 + [3] * 3 + [0]))
        assert report.shape is AuctionShape.SKEWED_HIGH
        assert report.center_of_mass == pytest.approx(0.875)
        assert report.reference_peak == 4

    def test_mirror_profiles_score_equally(self):
        """Test that mirrored profiles get equal scores."""
        low = self.classifier.classify(make_cluster([0] * 10 + [1] * 3 + [4]))
        high = self.classifier.classify(make_cluster([4] * 10 + [3] * 3 + [0]))
        assert low.similarity == pytest.approx(high.similarity)
        assert low.distance == pytest.approx(high.distance)

    def test_exact_reference_matches(self):
        """Test that a profile equal to its reference matches."""
        # raw [5, 4, 3, 2, 1] is the falling triangular reference itself
        levels = [0] * 5 + [1] * 4 + [2] * 3 + [3] * 2 + [4]
        report = self.classifier.classify(make_cluster(levels))
        assert report.shape is AuctionShape.SKEWED_LOW
        assert report.similarity == pytest.approx(1.0)
        assert report.distance == pytest.approx(0.0, abs=1e-12)
        assert report.matches_reference

    def test_poor_match(self):
        """Test that a two-peaked profile fails to match."""
        # mass at both extremes, nothing in the middle
        levels = [0] * 10 + [8] * 10
        report = self.classifier.classify(make_cluster(levels))
        assert report.shape is AuctionShape.BALANCED
        assert report.similarity < 0.55
        assert not report.matches_reference

    def test_single_level(self):
        """Test a bar with one level."""
        report = self.classifier.classify(make_cluster([2, 2, 2]))
        assert report.shape is AuctionShape.BALANCED
        assert report.reference_peak == 0
        assert report.similarity == pytest.approx(1.0)
        assert report.distance == 0.0

    def test_empty_cluster(self):
        """Test that an empty cluster is undefined."""
        report = self.classifier.classify(Cluster("empty"))
        assert report.shape is AuctionShape.UNDEFINED
        assert report.key == "empty"
        assert np.isnan(report.center_of_mass)
        assert np.isnan(report.similarity)
        assert np.isnan(report.distance)
        assert report.reference_peak == -1
        assert not report.matches_reference

    def test_custom_thresholds(self):
        """Test classifying with custom thresholds."""
        classifier = ShapeClassifier(
            ShapeClassifierConfig(low_threshold=0.1, high_threshold=0.9)
        )
        report = classifier.classify(make_cluster([0] * 10 + [1] * 3 + [4]))
        assert report.shape is AuctionShape.BALANCED

    def test_match_thresholds_are_strict(self):
        """Test that scores equal to the thresholds do not count as a match."""
        levels = [0] * 10 + [8] * 10
        report = self.classifier.classify(make_cluster(levels))
        at_threshold = ShapeClassifier(
            ShapeClassifierConfig(
                min_similarity=report.similarity, max_distance=report.distance
            )
        )
        assert not at_threshold.classify(make_cluster(levels)).matches_reference

        looser = ShapeClassifier(
            ShapeClassifierConfig(
                min_similarity=report.similarity - 1e-9,
                max_distance=report.distance,
            )
        )
        assert looser.classify(make_cluster(levels)).matches_reference

    def test_shape_of(self):
        """Test mapping centers onto shapes."""
        assert self.classifier.shape_of(np.nan) is AuctionShape.UNDEFINED
        assert self.classifier.shape_of(0.0) is AuctionShape.SKEWED_LOW
        assert self.classifier.shape_of(0.38) is AuctionShape.BALANCED
        assert self.classifier.shape_of(0.62) is AuctionShape.BALANCED
        assert self.classifier.shape_of(1.0) is AuctionShape.SKEWED_HIGH

    def test_reference_peak(self):
        """Test the reference peak for each shape."""
        assert ShapeClassifier.reference_peak(AuctionShape.SKEWED_LOW, 7) == 0
        assert ShapeClassifier.reference_peak(AuctionShape.SKEWED_HIGH, 7) == 6
        assert ShapeClassifier.reference_peak(AuctionShape.BALANCED, 7) == 3
        assert ShapeClassifier.reference_peak(AuctionShape.BALANCED, 4) == 1


class TestShapeReport:
    """Test the report struct."""

    def test_frozen(self):
        """Test that reports are immutable."""
        report = ShapeClassifier().classify(make_cluster([0, 1, 2]))
        with pytest.raises(AttributeError):
            report.shape = AuctionShape.SKEWED_HIGH

    def test_json_encoding(self):
        """Test encoding a report to JSON."""
        report = ShapeClassifier().classify(make_cluster([0] * 10 + [1] * 3 + [4], key=7))
        decoded = msgspec.json.decode(msgspec.json.encode(report))
        assert decoded["key"] == 7
        assert decoded["shape"] == "b"
        assert decoded["reference_peak"] == 0

    def test_is_struct(self):
        """Test that reports are msgspec structs."""
        report = ShapeClassifier().classify(make_cluster([0]))
        assert isinstance(report, ShapeReport)
        assert isinstance(report, msgspec.Struct)


class TestShapeClassifierWithShaper:
    """Test classification driven from a shaper observer."""

    def test_classify_closed_bars(self):
        """Test classifying bars as they close."""
        shaper = ClusterShaper(period=20, resolution=1.0)
        classifier = ShapeClassifier()
        reports: list[ShapeReport] = []
        shaper.on_close_bar(lambda bar: reports.append(classifier.classify(bar)))

        # bar 0 drifts up and stays high, bar 1 drifts down and stays low
        bar_0 = [0.0, 1.0, 2.0, 3.0, 4.0] + [4.0] * 10
        bar_1 = [10.0, 9.0, 8.0, 7.0, 6.0] + [6.0] * 10
        prices = bar_0 + bar_1 + [0.0]
        keys = [0] * len(bar_0) + [1] * len(bar_1) + [2]
        shaper.update_many(prices, keys)

        assert [r.key for r in reports] == [0, 1]
        assert reports[0].shape is AuctionShape.SKEWED_HIGH
        assert reports[1].shape is AuctionShape.SKEWED_LOW

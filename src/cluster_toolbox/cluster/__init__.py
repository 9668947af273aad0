"""Tick aggregation into price-profile bars."""

from .cluster import Cluster as Cluster
from .config import ClusterShaperConfig as ClusterShaperConfig
from .shaper import ClusterShaper as ClusterShaper

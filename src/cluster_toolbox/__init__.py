"""Price-profile bar aggregation and auction shape analysis."""

from .cluster import (
    Cluster as Cluster,
)
from .cluster import (
    ClusterShaper as ClusterShaper,
)
from .cluster import (
    ClusterShaperConfig as ClusterShaperConfig,
)
from .errors import (
    ClusterToolboxError as ClusterToolboxError,
)
from .errors import (
    ConfigurationError as ConfigurationError,
)
from .errors import (
    DimensionMismatchError as DimensionMismatchError,
)
from .errors import (
    FrozenClusterError as FrozenClusterError,
)
from .errors import (
    OutOfRangeError as OutOfRangeError,
)
from .logging import (
    Logger as Logger,
)
from .logging import (
    LoggerConfig as LoggerConfig,
)
from .logging import (
    LogLevel as LogLevel,
)
from .quantizer import (
    Quantizer as Quantizer,
)
from .quantizer import (
    level_of as level_of,
)
from .shape import (
    AuctionShape as AuctionShape,
)
from .shape import (
    ShapeClassifier as ShapeClassifier,
)
from .shape import (
    ShapeClassifierConfig as ShapeClassifierConfig,
)
from .shape import (
    ShapeReport as ShapeReport,
)
from .shape import (
    cosine_similarity as cosine_similarity,
)
from .shape import (
    euclidean_distance as euclidean_distance,
)
from .shape import (
    normalize as normalize,
)
from .shape import (
    triangular_distribution as triangular_distribution,
)

__all__ = [
    # Aggregation
    "Cluster",
    "ClusterShaper",
    "ClusterShaperConfig",
    "Quantizer",
    "level_of",
    # Shape analysis
    "triangular_distribution",
    "cosine_similarity",
    "euclidean_distance",
    "normalize",
    "AuctionShape",
    "ShapeClassifier",
    "ShapeClassifierConfig",
    "ShapeReport",
    # Errors
    "ClusterToolboxError",
    "ConfigurationError",
    "DimensionMismatchError",
    "FrozenClusterError",
    "OutOfRangeError",
    # Logging
    "Logger",
    "LoggerConfig",
    "LogLevel",
]

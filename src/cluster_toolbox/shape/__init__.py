"""Profile shape analysis and classification."""

from .analysis import (
    cosine_similarity as cosine_similarity,
)
from .analysis import (
    euclidean_distance as euclidean_distance,
)
from .analysis import (
    normalize as normalize,
)
from .analysis import (
    triangular_distribution as triangular_distribution,
)
from .classifier import (
    AuctionShape as AuctionShape,
)
from .classifier import (
    ShapeClassifier as ShapeClassifier,
)
from .classifier import (
    ShapeClassifierConfig as ShapeClassifierConfig,
)
from .classifier import (
    ShapeReport as ShapeReport,
)

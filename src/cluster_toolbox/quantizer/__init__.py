"""Price to level quantization."""

from .quantizer import (
    Quantizer as Quantizer,
)
from .quantizer import (
    level_of as level_of,
)

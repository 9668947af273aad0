"""Exception types raised across the toolbox."""


class ClusterToolboxError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ClusterToolboxError, ValueError):
    """Raised at construction when a parameter is invalid.

    The object being built is unusable; nothing is partially initialized.
    """


class DimensionMismatchError(ClusterToolboxError, ValueError):
    """Raised when paired sequences do not share the same length."""

    def __init__(self, len_a: int, len_b: int) -> None:
        super().__init__(
            f"Invalid dimensions; expected equal lengths but got {len_a} and {len_b}"
        )
        self.len_a = len_a
        self.len_b = len_b


class OutOfRangeError(ClusterToolboxError, IndexError):
    """Raised when an index falls outside its valid range."""


class FrozenClusterError(ClusterToolboxError, RuntimeError):
    """Raised when a closed cluster is mutated."""

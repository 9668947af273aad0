"""Time utilities."""

from .time import (
    time_iso8601 as time_iso8601,
)
from .time import (
    time_ms as time_ms,
)
from .time import (
    time_ns as time_ns,
)
from .time import (
    time_s as time_s,
)

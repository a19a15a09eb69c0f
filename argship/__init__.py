__title__ = 'argship'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .arguments import *
from .binders import *
from .faults import *
from .kinds import *
from .parsers import *
from .results import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every public module
__all__ += arguments.__all__  # type: ignore[attr-defined]
__all__ += binders.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += kinds.__all__  # type: ignore[attr-defined]
__all__ += parsers.__all__  # type: ignore[attr-defined]
__all__ += results.__all__  # type: ignore[attr-defined]

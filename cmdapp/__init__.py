__title__ = 'cmdapp'
__author__ = 'cmdapp contributors'
__license__ = 'GPL-3.0-or-later'
__version__ = "1.0.0"

from .apps import *
from .faults import *
from .registry import *
from .render import *
from .scanner import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(1, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the scanner
__all__ += scanner.__all__  # type: ignore[attr-defined]
# Load the exposed API of the renderers
__all__ += render.__all__  # type: ignore[attr-defined]
# Load the exposed API of the application layer
__all__ += apps.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]

"""Static analysis for Zoho Deluge scripts."""

__version__ = "0.1.0"

from deluge_lint.engine import analyze  # noqa: E402
from deluge_lint.rules.base import Diagnostic  # noqa: E402

__all__ = ["Diagnostic", "__version__", "analyze"]

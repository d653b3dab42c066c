"""Host metrics agent."""
from importlib.metadata import version

try:
    __version__ = version("host-metrics-agent")
except Exception:  # pragma: no cover - fallback when package metadata missing
    __version__ = "0.1.0"

from .api import create_app  # noqa: E402
from .collector import Collector  # noqa: E402

__all__ = ["Collector", "create_app", "__version__"]

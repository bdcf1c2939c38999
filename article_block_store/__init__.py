"""Block-based article storage, editing and rendering."""

__version__ = "0.1.0"

from .startup import AppContext, bootstrap  # noqa: E402

__all__ = ["AppContext", "__version__", "bootstrap"]

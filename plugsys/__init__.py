"""plugsys - file-based plugin discovery, state tracking and hook dispatch."""

__version__ = "0.1.0"
__logo__ = "🔌"

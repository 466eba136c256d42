"""Finite-volume terms, channel helpers, profiling and flame post-processing for counterflow channel combustion."""

__version__ = "1.0.0"
__all__ = ["channel", "datamanager", "parameters", "profiler", "stencil"]
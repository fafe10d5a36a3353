"""Solar Explorer - learning backend for the "Explore the Solar System" app."""

__version__ = "0.1.0"

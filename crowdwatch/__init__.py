"""CrowdWatch — stadium crowd monitoring demo backend."""

__version__ = "1.0.0"

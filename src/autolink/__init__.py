"""Link locally-built development packages into a project."""

__version__ = "0.3.0"

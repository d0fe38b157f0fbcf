"""Central version declaration for tapedeck-export.

Update this file when cutting a new release tag. Keep semantic versioning.
CLI --version and pyproject metadata read from here.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]

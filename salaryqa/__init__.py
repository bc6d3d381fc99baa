"""Quality assurance engine for anonymous salary submissions."""

__version__ = "0.3.0"

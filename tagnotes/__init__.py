"""tagnotes: single-window note taking with comma-separated tags."""

__version__ = "0.1.0"

"""tinypress — minimal self-hosted article publishing."""

__version__ = "0.1.0"

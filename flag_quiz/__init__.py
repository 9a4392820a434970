"""Multiple-choice flag quiz service."""

__version__ = "0.1.0"

"""A top-down arcade shooter: title, stage and end scenes driven frame by frame, on pygame."""

__version__ = "0.1.0"
__all__ = ["__version__"]
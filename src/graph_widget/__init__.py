"""Graph dashboard widget: student and fee trends over a trailing window."""

__version__ = "1.0.0"

"""cl - a personal command snippet launcher."""

__version__ = "0.1.0"

"""Static analysis for Jomini game scripts."""

__version__ = "0.1.0"

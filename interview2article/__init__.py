"""Interview-to-article quote verification and provenance engine."""

__version__ = "1.0.0"

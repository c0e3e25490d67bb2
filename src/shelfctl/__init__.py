"""shelfctl — book catalog and lending core."""

__version__ = "0.1.0"

"""Session and feed synchronization client for the Unsplash photo API."""

__version__ = "0.1.0"

"""Client for the face recognition cloud API."""

__version__ = "0.1.0"

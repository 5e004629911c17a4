"""pimctl — access-controlled configuration for personal information agents."""

__version__ = "0.3.0"

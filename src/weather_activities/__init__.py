"""Weather-based activity recommendations."""

__version__ = "0.1.0"

"""ContentBot - AI blog content generation for local service businesses."""

__version__ = "0.1.0"

"""Property media service: media storage gateway with local and blob backends."""

__version__ = "1.0.0"

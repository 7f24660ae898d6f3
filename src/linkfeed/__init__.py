"""LinkFeed: a small social feed API with posts, likes and comments."""

__version__ = "1.0.0"

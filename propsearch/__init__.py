"""Property and lease listing search with natural-language query support"""

__version__ = "0.1.0"

"""tasklist: URI-addressed SQLite task store with change notifications."""

__version__ = "0.1.0"

"""Student roster: a single-table SQLite repository with service, HTTP and CLI layers."""

__version__ = "0.1.0"

"""Database, security and other adapters."""

"""User-facing entry points other than the HTTP API."""

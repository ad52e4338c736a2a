"""HTTP API for the viral chart service."""

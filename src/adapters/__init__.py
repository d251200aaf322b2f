"""Adapters for I/O details kept out of the core (JSON export)."""

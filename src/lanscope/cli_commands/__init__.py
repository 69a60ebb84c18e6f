"""CLI command modules for LanScope."""

"""Shared utilities for LanScope."""

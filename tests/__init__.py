"""Test suite for LanScope."""

"""Feature modules for LanScope."""

"""Per-record package assembly."""

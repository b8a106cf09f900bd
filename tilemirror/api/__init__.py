"""Read-only HTTP inspection API for a mirrored room."""

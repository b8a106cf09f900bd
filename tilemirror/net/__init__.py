"""Transport boundary: packet ids, batching, scheduling and session wiring."""

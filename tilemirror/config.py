"""Mirror configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MirrorConfig:
    """Immutable configuration for one mirrored room session."""

    # Modification batching
    batch_delay_seconds: float = 0.005     # Quiescent window before a batch is flushed

    # Clearing
    boundary_tile: str = "shiny light grey"  # Foreground framing a cleared room

    # Event log (API feed)
    event_log_size: int = 2000

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    net_log_level: str | None = None    # Separate level for tilemirror.net; None follows log_level

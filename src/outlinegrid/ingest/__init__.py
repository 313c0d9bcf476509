"""Ingestion sources and readiness polling."""

from __future__ import annotations

from outlinegrid.ingest.poller import StabilityPoller
from outlinegrid.ingest.protocol import OutlineSource
from outlinegrid.ingest.sources import OutlineFileSource, StaticSource, flatten_outline

__all__ = [
    "OutlineFileSource",
    "OutlineSource",
    "StabilityPoller",
    "StaticSource",
    "flatten_outline",
]

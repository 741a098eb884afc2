"""Measurement aggregation between flushes."""

from .buffer import AccumulationBuffer, BufferSnapshot
from .folder import IngestFolder

__all__ = ["AccumulationBuffer", "BufferSnapshot", "IngestFolder"]

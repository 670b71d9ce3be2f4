"""Observability – structured logging helpers."""
from ebpf_stats.observability.logging.factory import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]

"""Kernel – framework-agnostic building blocks."""

from ebpf_stats.kernel.errors import ApplicationError, BaseError

__all__ = ["ApplicationError", "BaseError"]

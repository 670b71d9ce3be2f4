"""Observability – label set rendering and identity hashing.

A label set is an unordered mapping of label names to values.  Two label
sets holding the same pairs always produce the same :data:`LabelKey`,
whatever their insertion order.
"""
from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping

from ebpf_stats.observability.metrics.errors import LabelHashError

LabelSet = Mapping[str, object]
LabelKey = int

_DIGEST_SIZE = 8


def to_attributes(labels: LabelSet | None) -> dict[str, str]:
    """Render *labels* as string-keyed, string-valued backend attributes."""
    if not labels:
        return {}
    return {str(k): str(v) for k, v in labels.items()}


def hash_labels(labels: LabelSet | None) -> LabelKey:
    """Return the 64-bit identity key of *labels*.

    Raises
    ------
    LabelHashError
        When the label set cannot be rendered or encoded, e.g. a value whose
        ``str()`` fails or a label containing an unpaired surrogate.
    """
    try:
        pairs = sorted(to_attributes(labels).items())
        canonical = json.dumps(pairs, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        raise LabelHashError(
            f"Cannot hash label set: {exc}",
            detail={"labels": repr(labels)},
            cause=exc,
        ) from exc
    digest = hashlib.blake2b(canonical, digest_size=_DIGEST_SIZE).digest()
    return int.from_bytes(digest, "big")


__all__ = ["LabelKey", "LabelSet", "hash_labels", "to_attributes"]

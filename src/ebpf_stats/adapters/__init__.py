"""Adapters – backend bindings for the metrics ports."""

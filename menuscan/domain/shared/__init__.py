"""Shared domain primitives (errors, queries, ports)."""

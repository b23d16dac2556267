"""
Core utilities shared across the Reparto API.

This package hosts configuration helpers (env vars, storage selection) and
process-wide logging setup. Routers and repositories depend on these
primitives instead of reading the environment directly.
"""

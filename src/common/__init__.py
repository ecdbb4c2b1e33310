"""
Common utilities for record-ledger.

Modules:
- config: environment and SSM parameter resolution
- memory_state: dict-backed world state
- s3_state: S3-backed world state with optional Fernet encryption at rest
- transaction: buffered all-or-nothing view over a world state
"""

__all__ = [
    "config",
    "memory_state",
    "s3_state",
    "transaction",
]

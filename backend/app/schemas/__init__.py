"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate request shape at the system boundary (types, lengths,
      allowed fields); store invariants (non-blank title) stay in core/
    - Bounds come from core/domain_types.py
"""

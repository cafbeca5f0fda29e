"""Core Layer — the todo store, query cache and domain errors. No IO, no async.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - State lives only in TodoStore instances; no module-level mutable state
"""

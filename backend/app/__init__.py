"""Todo Service Application Package — in-memory todo list over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

"""user-dal — soft-delete CRUD store for the user entity.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

"""Infrastructure Layer — database access, id/clock policy and logging.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All driver failures wrapped into the core error taxonomy
"""

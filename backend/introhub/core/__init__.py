"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rule checks return an error instance or None; the shell decides to raise

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""

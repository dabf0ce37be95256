"""Core Layer — pure access policy, field whitelisting and domain types. No IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (timestamps are passed in, never read)

Design Decisions:
    - Functional core separated from imperative shell: policy is testable without a store
"""

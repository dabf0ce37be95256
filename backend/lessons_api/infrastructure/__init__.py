"""Infrastructure Layer — database, repositories, external provider clients, logging.

Invariants:
    - Infrastructure never decides policy: it stores, fetches and delegates
    - All external failures mapped to UpstreamFailureError (core/errors.py)

Design Decisions:
    - Thin wrappers over provider SDKs so tests can swap them through Protocols
"""

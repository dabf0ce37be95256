"""Services Layer — async operation handlers over the injected Store.

Invariants:
    - Handlers load records, apply core policy, then perform at most one durable write
    - Handlers never import FastAPI or SQLAlchemy: only core types and Protocols

Design Decisions:
    - One handler file per resource concern for locality (max 4 public methods each)
"""

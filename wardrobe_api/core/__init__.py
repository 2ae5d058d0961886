"""Core Layer: pure domain logic and boundary contracts, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the reserved-wardrobe guard,
      workflow outcomes and signature check are testable without a database
"""

"""Infrastructure Layer: store session managers, logging setup, gateway client.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every storage and gateway failure is mapped to a WardrobeError subclass
"""

"""Services Layer: cross-store orchestration (onboarding, linking, wardrobes, billing).

Invariants:
    - Services receive repositories through their constructors, never module globals
    - Reserved-wardrobe decisions are delegated to core.wardrobe_guard
    - Activity logging goes through ActivityLogger.record, which never raises
"""

"""
VPP resource dashboard service.

Holds registered energy-resource customers, derives per-city capacity
statistics and chart series from them, and accepts new registrations with
a local-only fallback when the hosted database is unreachable.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

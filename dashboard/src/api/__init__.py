"""
HTTP API package for the dashboard service.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-011)
"""

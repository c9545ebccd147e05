"""ERPNext/Frappe host installer (Python-first, stage-driven).

Core design goals:
- Preflight before any host change
- Idempotent stages
- Fail-fast on the first failing command
- Secrets kept in memory only
- Centralized logging
"""

__all__ = []

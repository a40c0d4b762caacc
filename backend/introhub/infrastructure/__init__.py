"""Infrastructure Layer — database, repositories, email delivery and logging.

Invariants:
    - Infrastructure never imports services/ or api/
    - External failures mapped to core errors or contained (notifications)

Design Decisions:
    - Thin adapters over SQLAlchemy and httpx; rules stay in core/
"""

"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Users own contacts; introduction requests reference two users and one contact

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from introhub.models.user import User  # noqa: F401
from introhub.models.contact import Contact  # noqa: F401
from introhub.models.introduction_request import IntroductionRequest  # noqa: F401

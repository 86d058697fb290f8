"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Dogs reference users by id only; no ORM relationships between them

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from dog_adoption.models.user import User  # noqa: F401
from dog_adoption.models.dog import Dog  # noqa: F401

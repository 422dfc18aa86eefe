# models/base.py
import re

from sqlalchemy import Column, DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, declared_attr

# Named constraints so Alembic batch mode on SQLite can find them again
NAMING_CONVENTION = {
     "ix": "ix_%(column_0_label)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models. Table names are the snake_case
     plural of the class name.
     """

     metadata = MetaData(naming_convention=NAMING_CONVENTION)

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """StoreSnapshot -> store_snapshots, User -> users"""
          name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", cls.__name__).lower()
          if name.endswith("y"):
               return name[:-1] + "ies"
          return name + ("es" if name.endswith("s") else "s")


class TimestampMixin:
     """created_at / updated_at columns maintained by the database."""
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

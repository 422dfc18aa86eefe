# models/store_snapshot.py
from sqlalchemy import Column, Integer, String, Text
from .base import Base, TimestampMixin


class StoreSnapshot(TimestampMixin, Base):
     """
     StoreSnapshot model - the whole application state saved as one JSON
     document per namespace (table: store_snapshots). There is no partial
     persistence: every save replaces the payload.
     """

     namespace = Column(String(100), primary_key=True)
     version = Column(Integer, nullable=False)
     payload = Column(Text, nullable=False)

     def __repr__(self):
          return f"<StoreSnapshot(namespace='{self.namespace}', version={self.version})>"

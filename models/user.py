# models/user.py
from sqlalchemy import Column, Integer, String
from .base import Base, TimestampMixin


class User(TimestampMixin, Base):
     """
     User model - landlord accounts that sign in to manage the store
     (table: users).
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     full_name = Column(String(200), nullable=False, default="")
     phone = Column(String(50), nullable=True)
     user_type = Column(String(20), nullable=False, default="landlord")  # landlord, tenant
     session_id = Column(String(64), nullable=True)  # cleared on sign-out

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', user_type='{self.user_type}')>"

from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String, Text

from .database import Base


class Member(Base):
    __tablename__ = "members"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # JSON: {"verified": bool, "code": str}; "null" once verification is complete
    verification = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

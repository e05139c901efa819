from sqlalchemy import Column, DateTime, Integer, String, Text

from courses_api.core.database import Base
from courses_api.core.timestamps import utcnow


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = {"sqlite_autoincrement": True}

"""Course model owned by a single user."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class Course(Base):
    """Course record; user_id is the owning account."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    estimated_time = Column(String(255), nullable=True)  # free text, e.g. "14 hours"
    materials_needed = Column(Text, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="courses")

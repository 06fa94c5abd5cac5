import datetime as dt
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from hourse.db.base import Base


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime)

    sections = relationship("Section", back_populates="city")


class Section(Base):
    __tablename__ = "sections"
    __table_args__ = (UniqueConstraint("city_id", "name", name="uq_section_city_name"),)

    id = Column(Integer, primary_key=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime)

    city = relationship("City", back_populates="sections")
    hourses = relationship("Hourse", back_populates="section")


class Hourse(Base):
    __tablename__ = "hourses"

    id = Column(Integer, primary_key=True)
    universal_id = Column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    section_id = Column(Integer, ForeignKey("sections.id"), nullable=False)
    link = Column(String, nullable=False, default="")
    layout = Column(String)
    address = Column(String)
    price = Column(Integer, nullable=False)
    floor = Column(String, nullable=False)
    shape = Column(String, nullable=False)
    age = Column(String, nullable=False)
    area = Column(String, nullable=False)
    main_area = Column(String)
    raw = Column(JSON)
    others = Column(JSON, default=list)
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime)

    section = relationship("Section", back_populates="hourses")

import datetime as dt
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hourse.models.listing import City, Hourse, Section
from hourse.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)

LISTING_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://buy.yungching.com.tw/hourse")


def listing_identity(record: ListingRecord) -> uuid.UUID:
    """Stable identity for a listing across crawls.

    Built from location and building fields only, so a changed detail link
    does not produce a second row.
    """
    key = "|".join(
        [
            record.city,
            record.section,
            record.address,
            record.shape,
            record.layout,
            record.floor,
            record.main_area,
            record.area,
        ]
    )
    return uuid.uuid5(LISTING_NAMESPACE, key)


def get_or_create_city(db: Session, name: str) -> City:
    city = db.execute(
        select(City).where(City.name == name, City.deleted_at.is_(None))
    ).scalars().first()
    if city:
        return city

    city = db.execute(select(City).where(City.name == name)).scalars().first()
    if city:
        # Names are unique; revive the soft-deleted row.
        city.deleted_at = None
    else:
        city = City(name=name)
        db.add(city)
    db.flush()
    return city


def get_or_create_section(db: Session, city: City, name: str) -> Section:
    section = db.execute(
        select(Section).where(Section.city_id == city.id, Section.name == name)
    ).scalars().first()
    if section:
        section.deleted_at = None
        return section

    section = Section(city_id=city.id, name=name)
    db.add(section)
    db.flush()
    return section


def save_listing(db: Session, record: ListingRecord, universal_id: Optional[uuid.UUID] = None) -> Hourse:
    city = get_or_create_city(db, record.city)
    section = get_or_create_section(db, city, record.section)
    universal_id = universal_id or listing_identity(record)

    listing = db.execute(select(Hourse).where(Hourse.universal_id == universal_id)).scalars().first()
    created = listing is None
    if created:
        listing = Hourse(universal_id=universal_id)
        db.add(listing)

    listing.section_id = section.id
    listing.link = record.link
    listing.layout = record.layout
    listing.address = record.address
    listing.price = record.price
    listing.floor = record.floor
    listing.shape = record.shape
    listing.age = record.age
    listing.area = record.area
    listing.main_area = record.main_area
    listing.others = list(record.others)
    listing.deleted_at = None
    db.flush()

    logger.debug("%s listing %s in %s%s", "Inserted" if created else "Updated", universal_id, record.city, record.section)
    return listing


def soft_delete_listing(db: Session, universal_id: uuid.UUID) -> bool:
    listing = db.execute(
        select(Hourse).where(Hourse.universal_id == universal_id, Hourse.deleted_at.is_(None))
    ).scalars().first()
    if not listing:
        return False
    listing.deleted_at = dt.datetime.utcnow()
    db.flush()
    return True


def active_listings(db: Session, city_name: str) -> list[Hourse]:
    return list(
        db.execute(
            select(Hourse)
            .join(Section, Hourse.section_id == Section.id)
            .join(City, Section.city_id == City.id)
            .where(
                City.name == city_name,
                City.deleted_at.is_(None),
                Section.deleted_at.is_(None),
                Hourse.deleted_at.is_(None),
            )
            .order_by(Hourse.id)
        ).scalars()
    )

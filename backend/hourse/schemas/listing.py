from typing import List

from pydantic import BaseModel, ConfigDict


class ListingRecord(BaseModel):
    """One search-result entry, normalized for the persistence boundary."""

    model_config = ConfigDict(frozen=True)

    city: str
    section: str
    address: str
    link: str = ""
    price: int
    shape: str
    age: str
    floor: str
    main_area: str
    area: str
    layout: str
    others: List[str] = []

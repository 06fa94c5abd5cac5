import logging
import threading
from typing import List, Optional
from urllib.parse import urljoin, urlparse

from hourse.core.config import get_settings
from hourse.parsers.base import BaseParser, ElementHandle
from hourse.parsers.errors import (
    MalformedLinkError,
    MissingElementError,
    SchemaMismatchError,
    SectionBoundaryNotFoundError,
)
from hourse.parsers.pagination import PaginationState, RowCounter
from hourse.parsers.price import parse_price
from hourse.parsers.selector import QuerySelector
from hourse.schemas.listing import ListingRecord

logger = logging.getLogger(__name__)

BASE_URL = "https://buy.yungching.com.tw"
SECTION_BOUNDARIES = frozenset("鄉鎮市區")
DETAIL_ITEM_COUNT = 9
DETAIL_FIELDS = {0: "shape", 1: "age", 2: "floor", 4: "main_area", 5: "area", 6: "layout"}
NOTE_POSITIONS = (3, 7, 8)


def split_section(address: str, city: str) -> tuple[str, str]:
    """Split ``address`` into its administrative section and the remainder.

    The city is dropped first, since the site repeats it in every address.
    """
    address = address.replace(city, "", 1)
    for index, char in enumerate(address):
        if char in SECTION_BOUNDARIES:
            section = address[: index + 1]
            return section, address.replace(section, "", 1)
    raise ValueError(f"No section boundary in {address!r}")


def normalize_floor(floor: str) -> str:
    return floor.split("~")[-1]


def _compact(text: Optional[str]) -> str:
    return (text or "").strip().replace(" ", "")


class YungChingParser(BaseParser):
    name = "yungching"
    base_url = BASE_URL

    def __init__(
        self,
        city: str,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        page_size: Optional[int] = None,
        base_url: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self.city = city
        self.min_price = settings.yungching_min_price if min_price is None else min_price
        self.max_price = settings.yungching_max_price if max_price is None else max_price
        self.base_url = base_url or settings.yungching_base_url
        self.pagination = PaginationState(page_size or settings.yungching_page_size)

        self.list_item_selector = QuerySelector("li", ("m-list-item",))
        self.link_selector = QuerySelector("a", ("item-img", "ga_click_trace"))
        self.total_selector = QuerySelector(
            "a", ("list-filter", "is-first", "active", "ng-isolate-scope"), ("span",)
        )
        self.address_selector = QuerySelector("div", ("item-description",), ("span",))
        self.detail_selector = QuerySelector("ul", ("item-info-detail",))
        self.price_selector = QuerySelector("span", ("price-num",))

    def url(self) -> str:
        return (
            f"{self.base_url}/region/{self.city}-_c/{self.min_price}-{self.max_price}_price"
            f"/_rm/?pg={self.pagination.current_page}"
        )

    def item_query_selector(self) -> str:
        return self.list_item_selector.build()

    def set_total_row(self, fetch_row_count: RowCounter, cancel: Optional[threading.Event] = None) -> None:
        self.pagination.resolve_total(fetch_row_count, self.total_selector.build(), cancel)

    def resolve_link(self, item: ElementHandle) -> str:
        selector = self.link_selector.build()
        element = item.query_selector(selector)
        if element is None:
            return ""

        href = element.get_attribute("href")
        if not href:
            return ""

        parts = urlparse(href)
        if parts.scheme or parts.netloc:
            raise MalformedLinkError("link", selector, href)
        return urljoin(self.base_url, href)

    def price(self, item: ElementHandle) -> int:
        return parse_price(item, self.price_selector.build())

    def address(self, item: ElementHandle) -> tuple[str, str]:
        selector = self.address_selector.build()
        element = item.query_selector(selector)
        if element is None:
            raise MissingElementError("address", selector)

        text = (element.text_content() or "").strip()
        try:
            return split_section(text, self.city)
        except ValueError:
            raise SectionBoundaryNotFoundError("address", selector, text) from None

    def details(self, item: ElementHandle) -> tuple[dict[str, str], List[str]]:
        selector = self.detail_selector.build()
        element = item.query_selector(selector)
        if element is None:
            raise MissingElementError("detail", selector)

        entries = element.query_selector_all(":scope > li")
        if len(entries) != DETAIL_ITEM_COUNT:
            raise SchemaMismatchError("detail", selector, DETAIL_ITEM_COUNT, len(entries))

        fields = {name: _compact(entries[index].text_content()) for index, name in DETAIL_FIELDS.items()}
        others = []
        for index in NOTE_POSITIONS:
            note = (entries[index].text_content() or "").strip()
            if note:
                others.append(note)
        return fields, others

    def fetch_item(self, item: ElementHandle) -> ListingRecord:
        link = self.resolve_link(item)
        price = self.price(item)
        section, address = self.address(item)
        fields, others = self.details(item)
        fields["floor"] = normalize_floor(fields["floor"])

        logger.debug("Extracted %s listing in %s%s", self.name, self.city, section)
        return ListingRecord(
            city=self.city,
            section=section,
            address=address,
            link=link,
            price=price,
            others=others,
            **fields,
        )

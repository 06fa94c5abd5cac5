import threading
from abc import ABC, abstractmethod
from typing import Optional, Protocol, Sequence

from hourse.parsers.pagination import PaginationState, RowCounter
from hourse.schemas.listing import ListingRecord


class ElementHandle(Protocol):
    """The subset of Playwright's sync ``ElementHandle`` the parsers rely on."""

    def query_selector(self, selector: str) -> Optional["ElementHandle"]: ...

    def query_selector_all(self, selector: str) -> Sequence["ElementHandle"]: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def text_content(self) -> Optional[str]: ...


class BaseParser(ABC):
    name: str
    base_url: str
    pagination: PaginationState

    @abstractmethod
    def url(self) -> str:  # pragma: no cover - interface
        """Search-results URL for the current page."""

    @abstractmethod
    def item_query_selector(self) -> str:  # pragma: no cover - interface
        """Selector matching one listing item on a results page."""

    @abstractmethod
    def set_total_row(
        self, fetch_row_count: RowCounter, cancel: Optional[threading.Event] = None
    ) -> None:  # pragma: no cover - interface
        """Resolve the total page count once, using the site's row counter."""

    @abstractmethod
    def fetch_item(self, item: ElementHandle) -> ListingRecord:  # pragma: no cover - interface
        """Extract one listing item into a record."""

    def has_next(self) -> bool:
        return self.pagination.has_next()

    def advance(self) -> None:
        self.pagination.advance()

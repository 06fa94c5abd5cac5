import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

RowCounter = Callable[[Optional[threading.Event], str], int]


class PaginationState:
    """Page counters for one parser instance.

    ``total_page`` stays 0 until the first successful row-count lookup and is
    never recomputed afterwards. Instances are not thread-safe; a single crawl
    loop owns each one.
    """

    def __init__(self, page_size: int, current_page: int = 1) -> None:
        self.page_size = page_size
        self.current_page = current_page
        self.total_page = 0

    def has_next(self) -> bool:
        return self.total_page == 0 or self.total_page > self.current_page

    def advance(self) -> None:
        self.current_page += 1

    def resolve_total(
        self,
        fetch_row_count: RowCounter,
        selector: str,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        if self.total_page != 0:
            return

        rows = fetch_row_count(cancel, selector)
        extra = 1 if rows % self.page_size != 0 else 0
        self.total_page = rows // self.page_size + extra
        logger.debug("Resolved %s rows into %s pages", rows, self.total_page)

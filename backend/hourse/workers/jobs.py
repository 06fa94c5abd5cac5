import logging
import re
import sys
import threading
from typing import Callable, Optional

from playwright.sync_api import Page, sync_playwright

from hourse.core.config import get_settings
from hourse.core.logging_config import setup_logging
from hourse.db.session import SessionLocal
from hourse.parsers.base import BaseParser
from hourse.parsers.errors import CrawlCancelledError, ExtractionError, MissingElementError
from hourse.parsers.pagination import RowCounter
from hourse.parsers.yungching import BASE_URL as YUNGCHING_BASE_URL
from hourse.parsers.yungching import YungChingParser
from hourse.schemas.listing import ListingRecord
from hourse.services.persistence import save_listing

logger = logging.getLogger(__name__)

ListingSink = Callable[[ListingRecord], object]
PageHook = Callable[[], object]


class ParserConfig:
    def __init__(self, name: str, base_url: str, factory: Callable[..., BaseParser]) -> None:
        self.name = name
        self.base_url = base_url
        self.factory = factory


PARSERS = {
    "yungching": ParserConfig("yungching", YUNGCHING_BASE_URL, YungChingParser),
}


def get_parser_config(name: str) -> ParserConfig:
    config = PARSERS.get(name)
    if config is None:
        logger.warning("Unknown parser %s, falling back to yungching", name)
        return PARSERS["yungching"]
    return config


class CrawlStats:
    def __init__(self) -> None:
        self.pages = 0
        self.saved = 0
        self.failed = 0


def page_row_counter(page: Page) -> RowCounter:
    def fetch_row_count(cancel: Optional[threading.Event], selector: str) -> int:
        if cancel is not None and cancel.is_set():
            raise CrawlCancelledError(f"Crawl cancelled before counting rows ({selector})")
        element = page.query_selector(selector)
        if element is None:
            raise MissingElementError("total", selector)
        digits = re.sub(r"\D", "", element.text_content() or "")
        return int(digits) if digits else 0

    return fetch_row_count


def run_crawl(
    parser: BaseParser,
    page: Page,
    sink: ListingSink,
    cancel: Optional[threading.Event] = None,
    on_page_done: Optional[PageHook] = None,
) -> CrawlStats:
    stats = CrawlStats()
    fetch_row_count = page_row_counter(page)

    while True:
        url = parser.url()
        logger.info("[%s] page=%s url=%s", parser.name, parser.pagination.current_page, url)
        page.goto(url, wait_until="domcontentloaded")
        parser.set_total_row(fetch_row_count, cancel)
        stats.pages += 1

        items = page.query_selector_all(parser.item_query_selector())
        if not items:
            logger.info("[%s] page=%s has no items, stopping", parser.name, parser.pagination.current_page)
            break

        for item in items:
            try:
                record = parser.fetch_item(item)
            except ExtractionError as exc:
                stats.failed += 1
                logger.warning("[%s] skipped item on page %s: %s", parser.name, parser.pagination.current_page, exc)
                continue
            sink(record)
            stats.saved += 1

        if on_page_done is not None:
            on_page_done()

        if not parser.has_next():
            break
        parser.advance()

    logger.info(
        "[%s] pages=%s saved=%s failed=%s total_pages=%s",
        parser.name,
        stats.pages,
        stats.saved,
        stats.failed,
        parser.pagination.total_page,
    )
    return stats


def crawl_city(city: str, parser_name: str = "yungching", cancel: Optional[threading.Event] = None) -> CrawlStats:
    settings = get_settings()
    parser = get_parser_config(parser_name).factory(city=city)

    with SessionLocal() as db, sync_playwright() as p:
        browser = p.chromium.launch(headless=settings.browser_headless)
        try:
            page = browser.new_page()
            page.set_default_timeout(settings.navigation_timeout_ms)
            stats = run_crawl(parser, page, lambda record: save_listing(db, record), cancel, db.commit)
        finally:
            browser.close()
    return stats


if __name__ == "__main__":
    setup_logging()
    for city_name in sys.argv[1:]:
        crawl_city(city_name)

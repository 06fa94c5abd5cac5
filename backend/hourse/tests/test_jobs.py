import threading
from contextlib import contextmanager
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hourse.db.base import Base
from hourse.models.listing import Hourse
from hourse.parsers.errors import CrawlCancelledError, MissingElementError
from hourse.parsers.yungching import YungChingParser
from hourse.tests.fakes import DEFAULT_DETAILS, BrokenElement, FakePage, make_item
from hourse.workers import jobs


def _parser() -> YungChingParser:
    return YungChingParser("台北市", min_price=500, max_price=3000, page_size=2)


def test_parser_registry_returns_yungching():
    config = jobs.get_parser_config("yungching")
    parser = config.factory(city="台北市")

    assert config.base_url == "https://buy.yungching.com.tw"
    assert isinstance(parser, YungChingParser)


def test_parser_registry_falls_back_to_yungching():
    config = jobs.get_parser_config("unknown")
    assert config.name == "yungching"


def test_run_crawl_walks_all_pages_and_skips_bad_items():
    bad = make_item(details=DEFAULT_DETAILS[:8])
    page = FakePage({1: [make_item(), bad], 2: [make_item(address="台北市信義區松仁路")]}, total_text="共 3 筆")
    saved = []

    stats = jobs.run_crawl(_parser(), page, saved.append)

    assert [url.rsplit("pg=", 1)[1] for url in page.visited] == ["1", "2"]
    assert page.row_lookups == 1
    assert stats.pages == 2
    assert stats.saved == 2
    assert stats.failed == 1
    assert [record.section for record in saved] == ["大安區", "信義區"]


def test_run_crawl_stops_on_empty_page():
    page = FakePage({1: [make_item()]}, total_text="0")
    saved = []

    stats = jobs.run_crawl(_parser(), page, saved.append)

    assert len(page.visited) == 2
    assert stats.saved == 1


def test_run_crawl_missing_total_aborts():
    page = FakePage({1: [make_item()]}, total_text=None)
    with pytest.raises(MissingElementError):
        jobs.run_crawl(_parser(), page, lambda record: None)


def test_run_crawl_honours_cancel_at_row_count():
    cancel = threading.Event()
    cancel.set()
    page = FakePage({1: [make_item()]})
    with pytest.raises(CrawlCancelledError):
        jobs.run_crawl(_parser(), page, lambda record: None, cancel)
    assert page.row_lookups == 0


def test_run_crawl_calls_page_hook_after_each_page():
    page = FakePage({1: [make_item()], 2: [make_item()]}, total_text="(3)")
    done = []

    jobs.run_crawl(_parser(), page, lambda record: None, on_page_done=lambda: done.append(len(page.visited)))

    assert done == [1, 2]


def test_crawl_city_keeps_earlier_pages_when_a_later_page_fails(monkeypatch):
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)

    broken = make_item(address="台北市信義區松仁路")
    broken.children["span.price-num"] = BrokenElement()
    page = FakePage(
        {1: [make_item(), make_item(address="台北市中山區南京東路")], 2: [broken]},
        total_text="(61)",
    )
    browser = SimpleNamespace(new_page=lambda: page, close=lambda: None)
    playwright = SimpleNamespace(chromium=SimpleNamespace(launch=lambda headless: browser))

    @contextmanager
    def fake_sync_playwright():
        yield playwright

    monkeypatch.setattr(jobs, "SessionLocal", sessionmaker(bind=engine))
    monkeypatch.setattr(jobs, "sync_playwright", fake_sync_playwright)

    with pytest.raises(RuntimeError):
        jobs.crawl_city("台北市")

    assert len(page.visited) == 2
    with Session(engine) as db:
        sections = sorted(listing.section.name for listing in db.execute(select(Hourse)).scalars())
    assert sections == ["中山區", "大安區"]

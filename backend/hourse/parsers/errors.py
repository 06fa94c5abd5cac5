from typing import Optional


class ExtractionError(Exception):
    """Raised when a listing item cannot be turned into a record."""

    def __init__(self, message: str, field: str, selector: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.selector = selector


class MissingElementError(ExtractionError):
    def __init__(self, field: str, selector: str) -> None:
        super().__init__(f"Missing required element for {field!r} ({selector})", field, selector)


class SchemaMismatchError(ExtractionError):
    def __init__(self, field: str, selector: str, expected: int, actual: int) -> None:
        super().__init__(
            f"Expected {expected} items in {field!r} ({selector}), found {actual}", field, selector
        )
        self.expected = expected
        self.actual = actual


class MalformedLinkError(ExtractionError):
    def __init__(self, field: str, selector: str, href: str) -> None:
        super().__init__(f"Unexpected absolute link {href!r} in {field!r} ({selector})", field, selector)
        self.href = href


class SectionBoundaryNotFoundError(ExtractionError):
    def __init__(self, field: str, selector: str, text: str) -> None:
        super().__init__(f"No section boundary in {field!r} text {text!r}", field, selector)
        self.text = text


class PriceFormatError(ExtractionError):
    def __init__(self, field: str, selector: str, text: str) -> None:
        super().__init__(f"Unparseable price {text!r} ({selector})", field, selector)
        self.text = text


class CrawlCancelledError(Exception):
    """Raised by a row-count lookup when the caller cancelled the crawl."""

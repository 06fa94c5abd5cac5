import re

from hourse.parsers.base import ElementHandle
from hourse.parsers.errors import MissingElementError, PriceFormatError

PRICE_PATTERN = re.compile(r"\d+(?:\.\d+)?")


def parse_price_text(text: str) -> int | None:
    match = PRICE_PATTERN.search(text.replace(",", ""))
    if not match:
        return None
    return int(float(match.group(0)))


def parse_price(item: ElementHandle, selector: str) -> int:
    element = item.query_selector(selector)
    if element is None:
        raise MissingElementError("price", selector)

    text = (element.text_content() or "").strip()
    price = parse_price_text(text)
    if price is None:
        raise PriceFormatError("price", selector, text)
    return price

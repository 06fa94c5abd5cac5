from typing import Dict, List, Optional, Sequence

DEFAULT_DETAILS = [
    "電梯大廈",
    " 25.3年 ",
    "3~5 樓",
    "",
    "主 25.1坪",
    "建 40.2坪",
    "3房2廳2衛",
    "邊間",
    "  ",
]


class FakeElement:
    def __init__(
        self,
        text: Optional[str] = None,
        attrs: Optional[Dict[str, str]] = None,
        children: Optional[Dict[str, "FakeElement"]] = None,
        lists: Optional[Dict[str, List["FakeElement"]]] = None,
    ) -> None:
        self.text = text
        self.attrs = attrs or {}
        self.children = children or {}
        self.lists = lists or {}

    def query_selector(self, selector: str) -> Optional["FakeElement"]:
        return self.children.get(selector)

    def query_selector_all(self, selector: str) -> Sequence["FakeElement"]:
        return self.lists.get(selector, [])

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def text_content(self) -> Optional[str]:
        return self.text


class BrokenElement(FakeElement):
    """An element whose DOM reads fail, as a detached Playwright handle would."""

    def text_content(self) -> Optional[str]:
        raise RuntimeError("element is not attached to the DOM")


def make_item(
    href: Optional[str] = "/house/5043125",
    price: Optional[str] = "1,288",
    address: Optional[str] = "台北市大安區仁愛路四段",
    details: Optional[List[str]] = None,
    with_details: bool = True,
) -> FakeElement:
    children: Dict[str, FakeElement] = {}
    if href is not None:
        children["a.item-img.ga_click_trace"] = FakeElement(attrs={"href": href})
    if price is not None:
        children["span.price-num"] = FakeElement(text=price)
    if address is not None:
        children["div.item-description span"] = FakeElement(text=address)
    if with_details:
        children["ul.item-info-detail"] = FakeElement(
            lists={":scope > li": [FakeElement(text=text) for text in (details or DEFAULT_DETAILS)]}
        )
    return FakeElement(children=children)


class FakePage:
    """Stands in for a Playwright page: one list of items per page number."""

    def __init__(self, pages: Dict[int, List[FakeElement]], total_text: Optional[str] = "(91)") -> None:
        self.pages = pages
        self.total_text = total_text
        self.visited: List[str] = []
        self.row_lookups = 0

    def goto(self, url: str, wait_until: Optional[str] = None) -> None:
        self.visited.append(url)

    def set_default_timeout(self, timeout: float) -> None:
        self.timeout = timeout

    def query_selector(self, selector: str) -> Optional[FakeElement]:
        self.row_lookups += 1
        if self.total_text is None:
            return None
        return FakeElement(text=self.total_text)

    def query_selector_all(self, selector: str) -> List[FakeElement]:
        page_number = int(self.visited[-1].rsplit("pg=", 1)[1])
        return self.pages.get(page_number, [])

"""
Element interface the extractors are written against.

Extraction code only ever asks a node for attributes, text and sub-elements,
so it never touches BeautifulSoup types directly. SoupElement is the
implementation used in production; any other tree can be plugged in by
providing the same methods.
"""

from typing import List, Optional, Protocol

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment


def _collapse(text: str) -> str:
    return " ".join(text.split())


class Element(Protocol):
    def attr(self, name: str) -> str: ...

    def has_attr(self, name: str) -> bool: ...

    def text(self) -> str: ...

    def own_text(self) -> str: ...

    def children(self) -> List["Element"]: ...

    def select(self, selector: str) -> List["Element"]: ...

    def select_one(self, selector: str) -> Optional["Element"]: ...

    def by_class(self, name: str) -> List["Element"]: ...

    def by_attribute(self, name: str, value: Optional[str] = None) -> List["Element"]: ...

    def next_element_sibling(self) -> Optional["Element"]: ...


class SoupElement:
    """Element backed by a BeautifulSoup Tag (or the document itself)."""

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    @classmethod
    def parse(cls, html: str) -> "SoupElement":
        return cls(BeautifulSoup(html, "lxml"))

    def __repr__(self) -> str:
        return f"SoupElement(<{self.tag.name}>)"

    def attr(self, name: str) -> str:
        value = self.tag.get(name)
        if value is None:
            return ""
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_attr(self, name: str) -> bool:
        return self.tag.has_attr(name)

    def text(self) -> str:
        """All descendant text, whitespace collapsed."""
        return _collapse(self.tag.get_text(" "))

    def own_text(self) -> str:
        """Text of direct text children only; nested markup is left out."""
        parts = [
            str(child)
            for child in self.tag.children
            if isinstance(child, NavigableString) and not isinstance(child, Comment)
        ]
        return _collapse(" ".join(parts))

    def children(self) -> List["SoupElement"]:
        return [SoupElement(child) for child in self.tag.children if isinstance(child, Tag)]

    def select(self, selector: str) -> List["SoupElement"]:
        return [SoupElement(tag) for tag in self.tag.select(selector)]

    def select_one(self, selector: str) -> Optional["SoupElement"]:
        tag = self.tag.select_one(selector)
        return SoupElement(tag) if tag is not None else None

    def by_class(self, name: str) -> List["SoupElement"]:
        return [SoupElement(tag) for tag in self.tag.find_all(class_=name)]

    def by_attribute(self, name: str, value: Optional[str] = None) -> List["SoupElement"]:
        attrs = {name: value if value is not None else True}
        return [SoupElement(tag) for tag in self.tag.find_all(attrs=attrs)]

    def next_element_sibling(self) -> Optional["SoupElement"]:
        sibling = self.tag.find_next_sibling()
        return SoupElement(sibling) if sibling is not None else None


def joined_text(elements: List[Element]) -> str:
    """Text of several elements joined by single spaces."""
    return " ".join(text for text in (el.text() for el in elements) if text)

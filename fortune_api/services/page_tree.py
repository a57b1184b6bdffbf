"""Minimal element tree over ``html.parser`` for the scraped feed pages.

Only what the feed parsers need: lookup by id or class, descendant and
following-sibling navigation, and ``text()``. Start tags close the elements
HTML leaves implicitly open (``<li>``, ``<p>``, table cells and so on), so
unclosed markup nests the way a browser would build it.
"""

from __future__ import annotations

from html.parser import HTMLParser
from typing import Dict, Iterator, List, Optional, Union

VOID_TAGS = {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}

_BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "details", "div", "dl", "fieldset",
    "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
    "main", "nav", "ol", "p", "pre", "section", "table", "ul",
}

# start tag -> (open tags it closes, tags that stop the search)
_IMPLIED_END = {
    "li": ({"li"}, {"ul", "ol"}),
    "dt": ({"dt", "dd"}, {"dl"}),
    "dd": ({"dt", "dd"}, {"dl"}),
    "tr": ({"tr"}, {"table"}),
    "td": ({"td", "th"}, {"tr", "table"}),
    "th": ({"td", "th"}, {"tr", "table"}),
    "option": ({"option"}, {"select"}),
}
_P_END = ({"p"}, {"button", "table", "td", "th"})


class Element:
    __slots__ = ("tag", "attrs", "children", "parent")

    def __init__(self, tag: str, attrs: Dict[str, str], parent: Optional["Element"] = None):
        self.tag = tag
        self.attrs = attrs
        self.children: List[Union["Element", str]] = []
        self.parent = parent

    def __repr__(self):
        return f"<Element {self.tag} id={self.attrs.get('id')!r}>"

    @property
    def classes(self) -> List[str]:
        return self.attrs.get("class", "").split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def get(self, attr: str, default: str = "") -> str:
        return self.attrs.get(attr, default)

    def text(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text())
        return "".join(parts)

    def iter(self) -> Iterator["Element"]:
        """Descendant elements in document order, excluding self."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter()

    def find_id(self, el_id: str) -> Optional["Element"]:
        for el in self.iter():
            if el.attrs.get("id") == el_id:
                return el
        return None

    def select(self, ancestor_class: str, name: str) -> List["Element"]:
        """Elements with class ``name`` inside any element with ``ancestor_class``."""
        found = []
        for el in self.iter():
            if el.has_class(name) and el.has_ancestor_class(ancestor_class):
                found.append(el)
        return found

    def has_ancestor_class(self, name: str) -> bool:
        node = self.parent
        while node is not None:
            if node.has_class(name):
                return True
            node = node.parent
        return False

    def next_siblings(self) -> List["Element"]:
        if self.parent is None:
            return []
        siblings = [c for c in self.parent.children if isinstance(c, Element)]
        return siblings[siblings.index(self) + 1:]

    def next_sibling_with_class(self, name: str) -> Optional["Element"]:
        for sib in self.next_siblings():
            if sib.has_class(name):
                return sib
        return None


class _TreeBuilder(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = Element("#document", {})
        self._stack: List[Element] = [self.root]

    def _close_implied(self, tag: str) -> None:
        rules = [_IMPLIED_END[tag]] if tag in _IMPLIED_END else []
        if tag in _BLOCK_TAGS:
            rules.append(_P_END)
        for closes, stops in rules:
            for i in range(len(self._stack) - 1, 0, -1):
                open_tag = self._stack[i].tag
                if open_tag in closes:
                    del self._stack[i:]
                    break
                if open_tag in stops:
                    break

    def handle_starttag(self, tag, attrs):
        self._close_implied(tag)
        parent = self._stack[-1]
        el = Element(tag, {k: (v or "") for k, v in attrs}, parent)
        parent.children.append(el)
        if tag not in VOID_TAGS:
            self._stack.append(el)

    def handle_startendtag(self, tag, attrs):
        self._close_implied(tag)
        parent = self._stack[-1]
        parent.children.append(Element(tag, {k: (v or "") for k, v in attrs}, parent))

    def handle_endtag(self, tag):
        for i in range(len(self._stack) - 1, 0, -1):
            if self._stack[i].tag == tag:
                del self._stack[i:]
                return

    def handle_data(self, data):
        self._stack[-1].children.append(data)


def parse_html(html: Optional[str]) -> Element:
    builder = _TreeBuilder()
    builder.feed(html or "")
    builder.close()
    return builder.root

"""
HTML sample extraction

An element is a sample when its attribute names and class names
include every requested attribute; its text content becomes one code
unit. Only the outermost matching element is taken, so a matching
`<div>` wrapping a matching `<code>` yields one sample.
"""

from html.parser import HTMLParser
from typing import Iterator, Sequence


VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

DEFAULT_SAMPLE_TAG = "code"


def element_tokens(attrs: list[tuple[str, str | None]]) -> set[str]:
    """Attribute names plus class names of an element."""
    tokens: set[str] = set()
    for name, value in attrs:
        tokens.add(name)
        if name == "class" and value:
            tokens.update(value.split())
    return tokens


def matches(tag: str, attrs: list[tuple[str, str | None]], required: Sequence[str]) -> bool:
    """
    Check whether an element carries every required attribute

    A requirement written as `name=value` matches an attribute with that
    exact value. With no requirements only `<code>` elements match.
    """
    if not required:
        return tag == DEFAULT_SAMPLE_TAG
    tokens = element_tokens(attrs)
    values = {name: value for name, value in attrs}
    for requirement in required:
        if "=" in requirement:
            name, _, expected = requirement.partition("=")
            if values.get(name) != expected:
                return False
        elif requirement not in tokens:
            return False
    return True


class SampleParser(HTMLParser):
    """Collect the text of elements matching a set of attributes."""

    def __init__(self, attributes: Sequence[str]):
        super().__init__(convert_charrefs=True)
        self.attributes = list(attributes)
        self.samples: list[str] = []
        self._tag: str | None = None
        self._depth = 0
        self._buffer: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag in VOID_ELEMENTS:
            return
        if self._tag is not None:
            if tag == self._tag:
                self._depth += 1
            return
        if matches(tag, attrs, self.attributes):
            self._tag = tag
            self._depth = 1
            self._buffer = []

    def handle_endtag(self, tag):
        if self._tag is None or tag != self._tag:
            return
        self._depth -= 1
        if self._depth == 0:
            self._flush()

    def handle_data(self, data):
        if self._tag is not None:
            self._buffer.append(data)

    def close(self):
        super().close()
        # unterminated element at end of input
        if self._tag is not None:
            self._flush()

    def _flush(self) -> None:
        self.samples.append("".join(self._buffer))
        self._tag = None
        self._depth = 0
        self._buffer = []


def iter_html_samples(content: str, attributes: Sequence[str]) -> Iterator[str]:
    """
    Yield the raw text of every matching element in an HTML document

    Args:
        content: HTML source
        attributes: Attributes a sample element must carry

    Returns:
        Iterator over sample texts in document order
    """
    parser = SampleParser(attributes)
    parser.feed(content)
    parser.close()
    yield from parser.samples

"""
Markdown sample extraction

Uses markdown-it-py for token parsing. Two layouts are recognised:

1. A fence whose info string carries the attributes:

       ```kotlin runnable
       fun main() {}
       ```

2. A fence wrapped in an HTML element carrying the attributes, as in
   Kotlin docs (`<div class="sample" markdown="1">`). The wrapper
   either stands alone, separated from the fence by a blank line, or
   swallows the fence into one raw HTML block.
"""

import re
from html.parser import HTMLParser
from typing import Iterator, Sequence

from markdown_it import MarkdownIt

from samples_checker.extraction.html import VOID_ELEMENTS, element_tokens, iter_html_samples


INFO_SPLIT = re.compile(r"[\s,{}]+")


class _TagEvents(HTMLParser):
    """Record the start/end tags of an HTML fragment in order."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.events: list[tuple[str, str, set[str]]] = []

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_ELEMENTS:
            self.events.append(("start", tag, element_tokens(attrs)))

    def handle_endtag(self, tag):
        self.events.append(("end", tag, set()))


class _FirstStartTag(HTMLParser):
    """Locate the first complete start tag of an HTML fragment."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.found: tuple[int, int, str] | None = None

    def handle_starttag(self, tag, attrs):
        if self.found is None:
            line, column = self.getpos()
            self.found = (line, column, self.get_starttag_text() or "")


def _info_tokens(info: str) -> set[str]:
    return {word for word in INFO_SPLIT.split(info) if word}


def _split_head(fragment: str) -> tuple[str, str]:
    """Split an HTML block right after its first start tag, which may span lines."""
    finder = _FirstStartTag()
    finder.feed(fragment)
    finder.close()
    if finder.found is None or not finder.found[2]:
        head, _, body = fragment.partition("\n")
        return head, body
    line, column, text = finder.found
    end = sum(len(part) + 1 for part in fragment.split("\n")[:line - 1]) + column + len(text)
    return fragment[:end], fragment[end:]


def _update_wrappers(stack: list[tuple[str, set[str]]], fragment: str) -> None:
    scanner = _TagEvents()
    scanner.feed(fragment)
    scanner.close()
    for kind, tag, tokens in scanner.events:
        if kind == "start":
            stack.append((tag, tokens))
            continue
        for index in range(len(stack) - 1, -1, -1):
            if stack[index][0] == tag:
                del stack[index:]
                break


def _has_fence(md: MarkdownIt, content: str) -> bool:
    return any(token.type == "fence" for token in md.parse(content))


def _iter_samples(
    md: MarkdownIt,
    content: str,
    required: set[str],
    wrappers: list[tuple[str, set[str]]],
) -> Iterator[str]:
    for token in md.parse(content):
        if token.type == "fence":
            tokens = _info_tokens(token.info or "")
            for _, wrapper_tokens in wrappers:
                tokens |= wrapper_tokens
            if required <= tokens:
                yield token.content
        elif token.type == "html_block" and token.content:
            head, body = _split_head(token.content)
            if body.strip() and _has_fence(md, body):
                # wrapper tag directly followed by a fence
                _update_wrappers(wrappers, head)
                yield from _iter_samples(md, body, required, wrappers)
            else:
                # without attributes only fences are samples
                if required:
                    for sample in iter_html_samples(token.content, sorted(required)):
                        # an opening wrapper alone captures only whitespace
                        if sample.strip():
                            yield sample
                _update_wrappers(wrappers, token.content)


def iter_markdown_samples(content: str, attributes: Sequence[str]) -> Iterator[str]:
    """
    Yield the raw text of every matching sample in a Markdown document

    Args:
        content: Markdown source
        attributes: Attributes a sample must carry

    Returns:
        Iterator over sample texts in document order
    """
    yield from _iter_samples(MarkdownIt(), content, set(attributes), [])

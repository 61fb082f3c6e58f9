"""Tests for Markdown and HTML sample extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from samples_checker.extraction import extract_code, iter_html_samples, iter_markdown_samples
from samples_checker.models import Code, FileType


def test_markdown_fence_matches_info_string_words() -> None:
    content = (
        "```kotlin runnable\nfun a() {}\n```\n\n"
        "```kotlin\nfun b() {}\n```\n\n"
        "```java runnable\nclass C {}\n```\n"
    )

    samples = list(iter_markdown_samples(content, ["kotlin", "runnable"]))

    assert samples == ["fun a() {}\n"]


def test_markdown_without_attributes_takes_every_fence() -> None:
    content = "```\none\n```\n\n```kotlin\ntwo\n```\n"

    assert list(iter_markdown_samples(content, [])) == ["one\n", "two\n"]


def test_markdown_without_attributes_ignores_inline_html_code() -> None:
    content = "Intro\n\n<p>Call <code>foo()</code> here</p>\n\n```kotlin\nfun main() {}\n```\n"

    assert list(iter_markdown_samples(content, [])) == ["fun main() {}\n"]


def test_markdown_wrapper_separated_by_blank_line() -> None:
    content = (
        '<div class="sample" markdown="1" theme="idea">\n'
        "\n"
        "```kotlin\n"
        "fun main() = println(listOf<String>())\n"
        "```\n"
        "\n"
        "</div>\n"
        "\n"
        "```kotlin\n"
        "fun outside() {}\n"
        "```\n"
    )

    samples = list(iter_markdown_samples(content, ["sample"]))

    assert samples == ["fun main() = println(listOf<String>())\n"]


def test_markdown_wrapper_swallowing_the_fence() -> None:
    content = (
        '<div class="sample" markdown="1" theme="idea">\n'
        "```kotlin\n"
        "fun main() {\n"
        "    val names = listOf<String>()\n"
        "}\n"
        "```\n"
        "</div>\n"
        "\n"
        "```kotlin\n"
        "fun outside() {}\n"
        "```\n"
    )

    samples = list(iter_markdown_samples(content, ["sample", "theme"]))

    assert samples == ["fun main() {\n    val names = listOf<String>()\n}\n"]


def test_markdown_wrapper_tag_spanning_lines() -> None:
    content = (
        '<div class="sample"\n'
        '     markdown="1" theme="idea">\n'
        "```kotlin\n"
        "fun main() = println(1)\n"
        "```\n"
        "</div>\n"
    )

    assert list(iter_markdown_samples(content, ["sample"])) == ["fun main() = println(1)\n"]


def test_markdown_raw_html_code_is_extracted() -> None:
    content = '<pre><code class="kotlin sample">fun x() = 1 &lt; 2</code></pre>\n'

    assert list(iter_markdown_samples(content, ["sample"])) == ["fun x() = 1 < 2"]


def test_markdown_unterminated_fence_does_not_raise() -> None:
    content = "```kotlin sample\nfun broken() {\n"

    assert list(iter_markdown_samples(content, ["sample"])) == ["fun broken() {\n"]


def test_html_outermost_matching_element_is_one_sample() -> None:
    content = """
    <html><body>
      <div class="sample" data-min-compiler-version="1.3">
        <code class="sample">fun main() {}</code>
      </div>
      <div class="other">skip</div>
    </body></html>
    """

    samples = list(iter_html_samples(content, ["sample", "data-min-compiler-version"]))

    assert len(samples) == 1
    assert samples[0].strip() == "fun main() {}"


def test_html_attribute_value_requirement() -> None:
    content = '<code data-lang="kotlin">a</code><code data-lang="java">b</code>'

    assert list(iter_html_samples(content, ["data-lang=kotlin"])) == ["a"]


def test_html_without_attributes_takes_code_elements() -> None:
    content = "<p>text</p><code>one</code><pre><code>two &amp; three</code></pre>"

    assert list(iter_html_samples(content, [])) == ["one", "two & three"]


def test_html_malformed_document_yields_what_it_can() -> None:
    content = '<div class="sample">fun a() {}<div class="sample">'

    samples = list(iter_html_samples(content, ["sample"]))

    assert samples == ["fun a() {}"]


def test_extract_code_skips_blank_samples_and_trims_newlines(tmp_path: Path) -> None:
    doc = tmp_path / "guide.md"
    doc.write_text("```sample\n\n```\n\n```sample\nval x = 1\n```\n", encoding="utf-8")

    assert list(extract_code(doc, FileType.MD, ["sample"])) == [Code("val x = 1")]


def test_extract_code_reads_html(tmp_path: Path) -> None:
    doc = tmp_path / "page.html"
    doc.write_text('<code class="kotlin">\nprintln(1)\n</code>', encoding="utf-8")

    assert list(extract_code(doc, FileType.HTML, ["kotlin"])) == [Code("println(1)")]


def test_extract_code_tolerates_invalid_utf8(tmp_path: Path) -> None:
    doc = tmp_path / "guide.md"
    doc.write_bytes(b"\xff\xfe garbage\n```sample\nok()\n```\n")

    assert list(extract_code(doc, FileType.MD, ["sample"])) == [Code("ok()")]


def test_extract_code_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        list(extract_code(tmp_path / "missing.md", FileType.MD, []))

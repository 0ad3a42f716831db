"""Tests for HTML utilities module."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from page2md.exceptions import ContentExtractionError
from page2md.html_utils import find_content_root, find_page_title, strip_unwanted_elements


class TestFindContentRoot:
    """Tests for find_content_root function."""

    def test_prefers_wechat_container(self) -> None:
        """#js_content wins over other candidates."""
        soup = BeautifulSoup(
            "<body><article>a</article><div id='js_content'>b</div></body>", "lxml"
        )
        assert find_content_root(soup).get("id") == "js_content"

    def test_article_before_main(self) -> None:
        """Selectors are tried in priority order."""
        soup = BeautifulSoup("<body><main>m</main><article>a</article></body>", "lxml")
        assert find_content_root(soup).name == "article"

    def test_class_selector(self) -> None:
        """Class-based containers are recognized."""
        soup = BeautifulSoup(
            "<body><div class='wrapper'><div class='post-content'>x</div></div></body>", "lxml"
        )
        assert find_content_root(soup)["class"] == ["post-content"]

    def test_falls_back_to_body(self) -> None:
        """Without a known container the body is used."""
        soup = BeautifulSoup("<html><body><div>x</div></body></html>", "lxml")
        assert find_content_root(soup).name == "body"

    def test_raises_without_any_element(self) -> None:
        """An empty document has nothing to convert."""
        soup = BeautifulSoup("", "html.parser")
        with pytest.raises(ContentExtractionError):
            find_content_root(soup)


class TestStripUnwantedElements:
    """Tests for strip_unwanted_elements function."""

    def test_removes_noise(self) -> None:
        """Every deny-listed element goes, content stays."""
        soup = BeautifulSoup(
            "<div id='root'>"
            "<script>a()</script><style>p{}</style><noscript>n</noscript>"
            "<iframe src='x'></iframe><nav>nav</nav><footer>f</footer><aside>s</aside>"
            "<div class='sidebar'>1</div><div class='ads'>2</div><div class='comments'>3</div>"
            "<ul class='menu'><li>4</li></ul><div class='navigation'>5</div>"
            "<header role='banner'>6</header><div role='navigation'>7</div>"
            "<div role='advertisement'>8</div>"
            "<p>keep me</p>"
            "</div>",
            "html.parser",
        )
        root = soup.find(id="root")

        strip_unwanted_elements(root)

        assert root.get_text() == "keep me"

    def test_nested_matches(self) -> None:
        """Matches inside already removed elements are handled."""
        soup = BeautifulSoup(
            "<div id='root'><div class='menu'><div class='menu'><nav>x</nav></div></div>"
            "<p>ok</p></div>",
            "html.parser",
        )
        root = strip_unwanted_elements(soup.find(id="root"))
        assert str(root) == '<div id="root"><p>ok</p></div>'

    def test_no_matches_is_noop(self) -> None:
        """Clean trees are left as they are."""
        soup = BeautifulSoup("<div><p>a</p></div>", "html.parser")
        before = str(soup)
        strip_unwanted_elements(soup.div)
        assert str(soup) == before


class TestFindPageTitle:
    """Tests for find_page_title function."""

    def test_normalizes_title(self) -> None:
        """Surrounding whitespace is stripped."""
        soup = BeautifulSoup("<html><head><title>\n  Hello  </title></head></html>", "lxml")
        assert find_page_title(soup) == "Hello"

    def test_missing_title(self) -> None:
        """Pages without <title> have no title."""
        assert find_page_title(BeautifulSoup("<p>x</p>", "lxml")) is None

    def test_blank_title(self) -> None:
        """A blank <title> counts as missing."""
        soup = BeautifulSoup("<html><head><title>  </title></head></html>", "lxml")
        assert find_page_title(soup) is None

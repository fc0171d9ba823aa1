"""Tests for document rewriting."""

from feed_mirror.transformers import rewrite_document


class TestRewriteDocument:
    """Tests for rewrite_document()."""

    def test_replaces_url(self):
        """A mapped URL is replaced by its local path."""
        html = '<img src="https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0?wx_fmt=jpeg">'
        mapping = {"https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0?wx_fmt=jpeg": "images/abc123.jpg"}

        assert rewrite_document(html, mapping) == '<img src="images/abc123.jpg">'

    def test_replaces_multiple_urls(self):
        """Every mapped URL is replaced."""
        html = (
            '<img src="https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0">'
            '<img src="https://mmbiz.qlogo.cn/mmbiz_png/xyz789/0">'
        )
        mapping = {
            "https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0": "images/abc.jpg",
            "https://mmbiz.qlogo.cn/mmbiz_png/xyz789/0": "images/xyz.png",
        }

        result = rewrite_document(html, mapping)

        assert "images/abc.jpg" in result
        assert "images/xyz.png" in result
        assert "mmbiz" not in result

    def test_replaces_all_occurrences(self):
        """Replacement is global across attributes and styles."""
        html = (
            '<img src="https://mmbiz.qpic.cn/img.jpg">'
            "<div style=\"background: url('https://mmbiz.qpic.cn/img.jpg')\"></div>"
            '<img data-src="https://mmbiz.qpic.cn/img.jpg">'
        )

        result = rewrite_document(html, {"https://mmbiz.qpic.cn/img.jpg": "images/local.jpg"})

        assert result.count("images/local.jpg") == 3

    def test_prefix_url_not_partially_replaced(self):
        """A URL that prefixes another mapped URL does not corrupt the longer one."""
        html = (
            '<img src="https://mmbiz.qpic.cn/long/path/image.jpg">'
            '<img src="https://mmbiz.qpic.cn/long">'
        )
        mapping = {
            "https://mmbiz.qpic.cn/long": "images/short.jpg",
            "https://mmbiz.qpic.cn/long/path/image.jpg": "images/full.jpg",
        }

        result = rewrite_document(html, mapping)

        assert result == '<img src="images/full.jpg"><img src="images/short.jpg">'

    def test_unmapped_urls_untouched(self):
        """URLs missing from the mapping are left as they are."""
        html = '<img src="https://mmbiz.qpic.cn/mapped.jpg"><img src="https://mmbiz.qpic.cn/unmapped.jpg">'

        result = rewrite_document(html, {"https://mmbiz.qpic.cn/mapped.jpg": "images/mapped.jpg"})

        assert "images/mapped.jpg" in result
        assert "https://mmbiz.qpic.cn/unmapped.jpg" in result

    def test_empty_mapping(self):
        """An empty mapping returns the document unchanged."""
        html = '<img src="https://mmbiz.qpic.cn/test.jpg">'
        assert rewrite_document(html, {}) == html

    def test_escaped_ampersand_form(self):
        """The &amp;-escaped form of a mapped URL is rewritten too."""
        html = '<img src="https://mmbiz.qpic.cn/a/0?wx_fmt=png&amp;from=appmsg">'
        mapping = {"https://mmbiz.qpic.cn/a/0?wx_fmt=png&from=appmsg": "../resources/a.png"}

        assert rewrite_document(html, mapping) == '<img src="../resources/a.png">'

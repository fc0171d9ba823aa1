"""Tests for harvestable resource discovery."""

from feed_mirror.extractors import extract_resource_urls

IMG_JPEG = "https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0?wx_fmt=jpeg"
IMG_PNG = "https://mmbiz.qlogo.cn/mmbiz_png/xyz789/0?wx_fmt=png"
IMG_BACKGROUND = "https://mmbiz.qpic.cn/mmbiz_jpg/bg123/0"
IMG_WEBP = "https://wx1.mmbiz.qpic.cn/mmbiz_webp/web123/0?wx_fmt=webp"


class TestImageElements:
    """Tests for <img> handling."""

    def test_src(self):
        """Eager src attributes are collected."""
        assert extract_resource_urls(f'<img src="{IMG_JPEG}">') == {IMG_JPEG}

    def test_data_src(self):
        """Lazy-load data-src attributes are collected."""
        assert extract_resource_urls(f'<img data-src="{IMG_PNG}">') == {IMG_PNG}

    def test_data_src_preferred_over_src(self):
        """The lazy-load URL wins over the placeholder src."""
        html = f'<img src="https://mmbiz.qpic.cn/placeholder.gif" data-src="{IMG_JPEG}">'
        assert extract_resource_urls(html) == {IMG_JPEG}

    def test_src_used_when_data_src_not_harvestable(self):
        """A non-CDN data-src falls back to a CDN src."""
        html = f'<img src="{IMG_JPEG}" data-src="https://example.com/x.jpg">'
        assert extract_resource_urls(html) == {IMG_JPEG}

    def test_escaped_ampersand_decoded(self):
        """Attribute values are decoded before classification."""
        html = '<img src="https://mmbiz.qpic.cn/a/0?wx_fmt=png&amp;from=appmsg">'
        assert extract_resource_urls(html) == {"https://mmbiz.qpic.cn/a/0?wx_fmt=png&from=appmsg"}


class TestBackgroundImages:
    """Tests for url(...) references in inline styles."""

    def test_single_quoted(self):
        html = f"<div style=\"background-image: url('{IMG_BACKGROUND}');\"></div>"
        assert extract_resource_urls(html) == {IMG_BACKGROUND}

    def test_entity_quoted(self):
        html = f'<div style="background-image: url(&quot;{IMG_BACKGROUND}&quot;);"></div>'
        assert extract_resource_urls(html) == {IMG_BACKGROUND}

    def test_double_escaped_entity_quoted(self):
        html = f'<div style="background-image: url(&amp;quot;{IMG_BACKGROUND}&amp;quot;);"></div>'
        assert extract_resource_urls(html) == {IMG_BACKGROUND}

    def test_double_quoted_in_single_quoted_attribute(self):
        html = f"<div style='background-image: url(\"{IMG_BACKGROUND}\")'></div>"
        assert extract_resource_urls(html) == {IMG_BACKGROUND}

    def test_unquoted(self):
        html = f'<div style="background-image: url({IMG_BACKGROUND});"></div>'
        assert extract_resource_urls(html) == {IMG_BACKGROUND}

    def test_non_cdn_background_dropped(self):
        html = '<div style="background: url(https://example.com/bg.png)"></div>'
        assert extract_resource_urls(html) == set()


class TestExtractResourceUrls:
    """Tests for overall extraction behavior."""

    def test_deduplicates(self):
        """Repeated references collapse into one entry."""
        html = f'<img src="{IMG_JPEG}"><img src="{IMG_JPEG}">'
        assert extract_resource_urls(html) == {IMG_JPEG}

    def test_only_cdn_urls(self):
        """URLs outside the allow-list are dropped."""
        html = f'<img src="{IMG_JPEG}"><img src="https://example.com/external.jpg">'
        assert extract_resource_urls(html) == {IMG_JPEG}

    def test_sample_article(self, sample_article_html):
        """All distinct CDN images of a full article page are found."""
        assert extract_resource_urls(sample_article_html) == {
            IMG_JPEG,
            IMG_PNG,
            IMG_BACKGROUND,
            IMG_WEBP,
        }

    def test_no_images(self):
        """Documents without CDN images yield an empty set."""
        html = '<div><p>No images here</p><img src="https://example.com/img.jpg"></div>'
        assert extract_resource_urls(html) == set()

    def test_empty_document(self):
        """Empty and blank documents yield an empty set."""
        assert extract_resource_urls("") == set()
        assert extract_resource_urls("   \n") == set()

    def test_malformed_markup(self):
        """Truncated markup still yields the recoverable images."""
        html = '<img src="https://mmbiz.qpic.cn/test.jpg"><div><img data-src="invalid'
        assert "https://mmbiz.qpic.cn/test.jpg" in extract_resource_urls(html)

    def test_custom_allow_list(self):
        """Extraction honors a custom allow-list."""
        html = '<img src="https://cdn.example.org/a.png">'
        assert extract_resource_urls(html, ("example.org",)) == {"https://cdn.example.org/a.png"}

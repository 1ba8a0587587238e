"""Raw item parsing, normalization and dedup tests"""

from datetime import datetime, timezone

from energy_news.dedup import deduplicate
from energy_news.models import CanonicalItem, RawFeedItem
from energy_news.normalizer import extract_image, get_domain, strip_html, to_canonical_item
from energy_news.parser import parse_raw_item, published_timestamp


class TestStripHtml:
    """strip_html"""

    def test_removes_tags(self):
        assert strip_html("<p>Hello <b>World</b></p>") == "Hello World"

    def test_collapses_whitespace(self):
        assert strip_html("  a\n\n  b\t c ") == "a b c"

    def test_plain_text_unchanged(self):
        """Stripping plain text is a no-op"""
        text = "Pertamina raises output"
        assert strip_html(text) == text
        assert strip_html(strip_html("<i>x</i> y")) == strip_html("<i>x</i> y")

    def test_empty_input(self):
        assert strip_html("") == ""
        assert strip_html(None) == ""


class TestGetDomain:
    """get_domain"""

    def test_strips_www(self):
        assert get_domain("https://www.reuters.com/business/energy") == "reuters.com"

    def test_keeps_other_subdomains(self):
        assert get_domain("https://news.detik.com/x") == "news.detik.com"

    def test_invalid_url(self):
        assert get_domain("not a url") == ""
        assert get_domain("http://[::1") == ""
        assert get_domain(None) == ""


class TestExtractImage:
    """extract_image"""

    def test_first_img(self):
        html = '<p>x</p><IMG class="a" src="https://img/1.jpg"><img src=\'https://img/2.jpg\'>'
        assert extract_image(html) == "https://img/1.jpg"

    def test_single_quotes(self):
        assert extract_image("<img src='https://img/2.jpg'/>") == "https://img/2.jpg"

    def test_none(self):
        assert extract_image("<p>no image</p>") is None
        assert extract_image(None) is None


class TestToCanonicalItem:
    """to_canonical_item"""

    def test_full_item(self):
        raw = RawFeedItem(
            title="Oil prices climb",
            link="https://www.example.com/a",
            pub_date="2024-06-01 10:00:00",
            author="Reuters",
            description='<img src="https://img/x.png"><p>Brent  rose</p>',
            enclosure_link="https://cdn/enc.jpg",
        )
        item = to_canonical_item(raw)
        assert item.title == "Oil prices climb"
        assert item.link == "https://www.example.com/a"
        assert item.pub_date == "2024-06-01 10:00:00"
        assert item.source == "Reuters"
        assert item.description == "Brent rose"
        assert item.summary == item.description
        assert item.image == "https://cdn/enc.jpg"

    def test_source_falls_back_to_domain(self):
        item = to_canonical_item(RawFeedItem(title="t", link="https://www.esdm.go.id/news/1"))
        assert item.source == "esdm.go.id"

    def test_content_used_when_no_description(self):
        item = to_canonical_item(RawFeedItem(title="t", link="l", content="<div>Body</div>"))
        assert item.description == "Body"

    def test_non_http_enclosure_falls_back_to_embedded_image(self):
        raw = RawFeedItem(
            title="t", link="l", enclosure_link="ftp://x/y.jpg",
            description='<img src="https://img/inline.jpg">',
        )
        assert to_canonical_item(raw).image == "https://img/inline.jpg"

    def test_no_image(self):
        item = to_canonical_item(RawFeedItem(title="t", link="l", description="plain"))
        assert item.image is None

    def test_to_dict_shape(self):
        d = to_canonical_item(RawFeedItem(title="t", link="l", pub_date="p")).to_dict()
        assert set(d) == {"title", "link", "pubDate", "source", "description", "summary", "image"}
        assert d["pubDate"] == "p"


class TestParseRawItem:
    """parse_raw_item"""

    def test_maps_service_fields(self):
        raw = parse_raw_item({
            "title": "T",
            "link": "https://x/1",
            "pubDate": "2024-01-01 00:00:00",
            "author": "",
            "description": "<b>d</b>",
            "content": "c",
            "enclosure": {"link": "https://x/1.jpg", "type": "image/jpeg"},
            "thumbnail": "ignored",
        })
        assert raw == RawFeedItem(
            title="T",
            link="https://x/1",
            pub_date="2024-01-01 00:00:00",
            author=None,
            description="<b>d</b>",
            content="c",
            enclosure_link="https://x/1.jpg",
        )

    def test_missing_and_malformed_fields(self):
        raw = parse_raw_item({"title": None, "enclosure": []})
        assert raw.title == ""
        assert raw.link == ""
        assert raw.enclosure_link is None


class TestPublishedTimestamp:
    """published_timestamp"""

    def test_iso_date(self):
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
        assert published_timestamp("2024-01-01") == expected

    def test_service_format(self):
        expected = datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc).timestamp()
        assert published_timestamp("2024-06-01 12:30:00") == expected

    def test_rfc822(self):
        expected = datetime(2024, 1, 1, 12, tzinfo=timezone.utc).timestamp()
        assert published_timestamp("Mon, 01 Jan 2024 12:00:00 GMT") == expected

    def test_missing_or_garbage_is_zero(self):
        assert published_timestamp(None) == 0.0
        assert published_timestamp("") == 0.0
        assert published_timestamp("yesterday-ish") == 0.0

    def test_out_of_range_year_is_zero(self):
        """Dates no datetime can hold rank as missing instead of raising"""
        assert published_timestamp("0000-01-01") == 0.0
        assert published_timestamp("0000-01-01T00:00:00Z") == 0.0


def _item(title="t", link="l"):
    return CanonicalItem(title=title, link=link, pub_date=None, source="", description="", summary="")


class TestDeduplicate:
    """deduplicate"""

    def test_same_link_first_wins(self):
        out = deduplicate([_item("first", "https://x/1"), _item("second", "https://x/1")])
        assert [i.title for i in out] == ["first"]

    def test_title_used_without_link(self):
        out = deduplicate([_item("same", ""), _item("same", ""), _item("other", "")])
        assert [i.title for i in out] == ["same", "other"]

    def test_keyless_dropped(self):
        assert deduplicate([_item("", "")]) == []

    def test_order_preserved(self):
        items = [_item("a", "1"), _item("b", "2"), _item("c", "3")]
        assert deduplicate(items) == items

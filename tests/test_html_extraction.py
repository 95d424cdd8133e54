"""Tests for project link extraction from markup."""

import pytest

from nepa_watch.extraction import (
    build_link_record,
    extract_from_html,
    match_project_id,
    records_from_anchors,
)

HOST = "https://eplanning.blm.gov"


class TestMatchProjectId:
    @pytest.mark.parametrize(
        "href,expected",
        [
            ("/eplanning-ui/project/42/510", "42"),
            ("/eplanning-ui/project/42/510/", "42"),
            ("https://eplanning.blm.gov/eplanning-ui/project/2016719/510", "2016719"),
            ("/eplanning-ui/project/42/570", None),
            ("/eplanning-ui/project/abc/510", None),
            ("/eplanning-ui/project/42/510?tab=docs", None),
            ("/eplanning-ui/search", None),
            ("", None),
            (None, None),
        ],
    )
    def test_patterns(self, href, expected):
        assert match_project_id(href) == expected


class TestBuildLinkRecord:
    def test_relative_href(self):
        record = build_link_record("/eplanning-ui/project/42/510", "Desert Trail", base_url=HOST)

        assert record.id == "42"
        assert record.title == "Desert Trail"
        assert record.url == f"{HOST}/eplanning-ui/project/42/510"

    def test_absolute_href_kept(self):
        href = "https://mirror.example.org/eplanning-ui/project/7/510"
        assert build_link_record(href, "x", base_url=HOST).url == href

    def test_whitespace_collapsed(self):
        record = build_link_record("/eplanning-ui/project/42/510", "  Desert \n\t Trail ")
        assert record.title == "Desert Trail"

    def test_empty_text_falls_back(self):
        record = build_link_record("/eplanning-ui/project/42/510", "   ")
        assert record.title == "BLM Project 42"

    def test_non_project_href(self):
        assert build_link_record("/about", "About") is None


def test_records_from_anchors_skips_other_links():
    anchors = [
        ("/eplanning-ui/project/1/510", "One"),
        ("/help", "Help"),
        ("/eplanning-ui/project/2/510", None),
    ]
    records = records_from_anchors(anchors, base_url=HOST)
    assert [(r.id, r.title) for r in records] == [("1", "One"), ("2", "BLM Project 2")]


class TestExtractFromHtml:
    def test_single_anchor(self):
        html = '<html><body><a href="/eplanning-ui/project/42/510">Desert Trail</a></body></html>'
        [record] = extract_from_html(html, base_url=HOST)

        assert record.id == "42"
        assert record.title == "Desert Trail"
        assert record.state is None
        assert record.office is None
        assert record.nepa_type is None
        assert record.nepa_status is None

    def test_document_order_and_duplicates(self):
        html = """
        <ul>
          <li><a href="/eplanning-ui/project/3/510">Three</a></li>
          <li><a href="/eplanning-ui/home">Home</a></li>
          <li><a href="/eplanning-ui/project/1/510"><span>One</span> <em>Project</em></a></li>
          <li><a href="/eplanning-ui/project/3/510">Three again</a></li>
          <li><a name="anchor-without-href">Nothing</a></li>
        </ul>
        """
        records = extract_from_html(html, base_url=HOST)

        assert [r.id for r in records] == ["3", "1", "3"]
        assert records[1].title == "One Project"

    def test_no_project_links(self):
        assert extract_from_html("<p>Loading…</p>") == []

    @pytest.mark.parametrize("html", [None, "", "   \n"])
    def test_empty_markup(self, html):
        assert extract_from_html(html) == []

    def test_malformed_markup(self):
        html = '<div><a href="/eplanning-ui/project/9/510">Nine<div></span>'
        assert [r.id for r in extract_from_html(html)] == ["9"]

"""Tests for query and search expansion."""

from nepa_watch.config.models import QueryConfig, SearchDefinition
from nepa_watch.domain.models import SearchTerm
from nepa_watch.queries import expand_all, expand_query, expand_search


class TestExpandQuery:
    def test_per_state(self):
        terms = expand_query(QueryConfig(search_text="solar", per_state=True), ["NV", "UT"])
        assert [t.text for t in terms] == ["solar NV", "solar UT"]
        assert {t.label for t in terms} == {"solar"}

    def test_not_per_state_ignores_states(self):
        terms = expand_query(QueryConfig(search_text="land sale"), ["NV", "UT"])
        assert terms == [SearchTerm(text="land sale", label="land sale")]

    def test_per_state_without_states_runs_once(self):
        terms = expand_query(QueryConfig(search_text="solar", per_state=True), [])
        assert [t.text for t in terms] == ["solar"]

    def test_blank_states_skipped(self):
        terms = expand_query(QueryConfig(search_text="solar", per_state=True), ["", " NV ", "  "])
        assert [t.text for t in terms] == ["solar NV"]

    def test_only_blank_states_runs_once(self):
        terms = expand_query(QueryConfig(search_text="solar", per_state=True), ["", " "])
        assert [t.text for t in terms] == ["solar"]

    def test_empty_text_yields_nothing(self):
        assert expand_query(QueryConfig(search_text="   ", per_state=True), ["NV"]) == []

    def test_terms_are_plain(self):
        [term] = expand_query(QueryConfig(search_text="solar"))
        assert not term.is_advanced


class TestExpandSearch:
    def test_inline_filter(self):
        definition = SearchDefinition(name="Nevada ROW", adv_search={"states": ["NV"]})
        [term] = expand_search(definition)

        assert term.text == ""
        assert term.label == "Nevada ROW"
        assert term.adv_search == {"states": ["NV"]}

    def test_filter_from_url(self):
        definition = SearchDefinition(
            name="saved", url="https://eplanning.blm.gov/eplanning-ui/search?advSearch=%7B%22a%22%3A1%7D"
        )
        [term] = expand_search(definition)
        assert term.adv_search == {"a": 1}

    def test_empty_inline_filter_is_posted(self):
        [term] = expand_search(SearchDefinition(name="everything", adv_search={}))
        assert term.adv_search == {}
        assert term.is_advanced

    def test_missing_filter_skipped(self):
        assert expand_search(SearchDefinition(name="broken", url="https://x.gov/search")) == []


def test_expand_all_order():
    queries = [
        QueryConfig(search_text="solar", per_state=True),
        QueryConfig(search_text="land sale"),
        QueryConfig(search_text=""),
    ]
    searches = [SearchDefinition(name="adv", adv_search={"a": 1})]

    terms = list(expand_all(queries, ["NV", "UT"], searches))

    assert [t.describe() for t in terms] == ["solar NV", "solar UT", "land sale", "advSearch:adv"]


def test_expand_all_is_lazy():
    generator = expand_all([QueryConfig(search_text="solar")])
    assert next(generator).text == "solar"

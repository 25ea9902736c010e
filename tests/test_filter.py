"""Tests for lexical relevance filtering."""

from conftest import make_row

from knowledge_grounding.scope.filter import filter_rows, match_rows, row_matches


def test_title_inside_query_matches():
    row = make_row(project="jascore_1_0", title="JasCore")
    assert row_matches(row, "JasCore overview")


def test_project_inside_query_matches():
    assert row_matches(make_row(project="orbit"), "what is ORBIT about?")


def test_facet_must_occur_inside_query():
    row = make_row(project="designing_agents", title="Designing in the Age of AI Agents")
    assert not row_matches(row, "agents")


def test_tag_token_matches():
    row = make_row(tags="accessibility, voice interfaces")
    assert row_matches(row, "anything on voice work")


def test_tags_split_on_whitespace_only():
    row = make_row(tags="voice notes")
    assert not row_matches(row, "voice-first")
    assert row_matches(row, "voice first")


def test_pillar_medium_audience_match():
    assert row_matches(make_row(pillar="research"), "show research work")
    assert row_matches(make_row(medium="video"), "any video?")
    assert row_matches(make_row(audience="executives"), "for executives")


def test_content_is_not_matched():
    row = make_row(content="a deep dive into robotics")
    assert not row_matches(row, "robotics")


def test_empty_facets_never_match():
    row = make_row(project="p", title=None, tags=None)
    assert not row_matches(row, "tell me something")


def test_match_rows_preserves_order(sample_rows):
    matches = match_rows("jascore_1_0 please", sample_rows)
    assert [r.title for r in matches] == ["JasCore", "JasCore interviews"]


def test_filter_rows_narrows(sample_rows):
    result = filter_rows("Tell me about JasCore", sample_rows)
    assert [r.title for r in result] == ["JasCore"]


def test_filter_rows_falls_back_to_full_corpus(sample_rows):
    result = filter_rows("hello", sample_rows)
    assert result == sample_rows
    assert result is not sample_rows


def test_filter_rows_empty_corpus():
    assert filter_rows("hello", []) == []

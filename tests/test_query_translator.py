import pytest

from pinecone_proxy.models.search_model import SearchRequest, SearchType, RerankSpec
from pinecone_proxy.services.query_translator import translate, build_search_url, build_rerank
from pinecone_proxy.utils.errors import TypeMismatch, UnknownSearchType

HOST = "idx-abc.svc.pinecone.io"


def test_text_query_with_fields():
    req = SearchRequest(query="find docs", search_type="text", top_k=5, fields=["title"])
    translated = translate(req, HOST)
    assert translated.payload == {
        "query": {"inputs": {"text": "find docs"}, "top_k": 5},
        "fields": ["title"],
    }
    assert translated.search_type is SearchType.TEXT
    assert translated.has_reranking is False


def test_vector_query_defaults():
    req = SearchRequest(query=[0.1, 0.2], search_type="vector")
    translated = translate(req, HOST)
    assert translated.payload == {"query": {"vector": {"values": [0.1, 0.2]}, "top_k": 10}}


def test_vector_query_accepts_integers():
    translated = translate(SearchRequest(query=[1, 0.5, -2], search_type="vector"), HOST)
    assert translated.payload["query"]["vector"]["values"] == [1, 0.5, -2]


def test_id_query():
    translated = translate(SearchRequest(query="rec-42", search_type="id", top_k=3), HOST)
    assert translated.payload == {"query": {"id": "rec-42", "top_k": 3}}


def test_top_k_clamped():
    translated = translate(SearchRequest(query="q", top_k=50000), HOST)
    assert translated.payload["query"]["top_k"] == 10000
    assert translated.top_k == 10000


def test_top_k_at_limit_unchanged():
    translated = translate(SearchRequest(query="q", top_k=10000), HOST)
    assert translated.payload["query"]["top_k"] == 10000


@pytest.mark.parametrize("query", [[0.1, "x"], [0.1, None], [True, 0.2], "0.1,0.2", {"values": [0.1]}])
def test_vector_query_type_mismatch(query):
    with pytest.raises(TypeMismatch) as exc_info:
        translate(SearchRequest(query=query, search_type="vector"), HOST)
    assert exc_info.value.expected == "number[]"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("search_type", ["text", "id"])
def test_string_query_type_mismatch(search_type):
    with pytest.raises(TypeMismatch) as exc_info:
        translate(SearchRequest(query=[0.1, 0.2], search_type=search_type), HOST)
    assert exc_info.value.expected == "string"
    body = exc_info.value.to_body()
    assert body["details"]["expected"] == "string"
    assert body["example"]["search_type"] == search_type


def test_unknown_search_type():
    with pytest.raises(UnknownSearchType) as exc_info:
        translate(SearchRequest(query="q", search_type="hybrid"), HOST)
    assert exc_info.value.received == "hybrid"
    assert exc_info.value.to_body()["details"] == {"received": "hybrid"}


def test_filters_attached_as_filter():
    filters = {"year": {"$gte": 2023}, "genre": {"$in": ["a", "b"]}}
    translated = translate(SearchRequest(query="q", filters=filters), HOST)
    assert translated.payload["filter"] == filters
    assert "filters" not in translated.payload


def test_empty_fields_and_filters_omitted():
    translated = translate(SearchRequest(query="q", fields=[], filters={}), HOST)
    assert set(translated.payload) == {"query"}


def test_rerank_defaults_from_request():
    req = SearchRequest(query="q", top_k=250, fields=["text"], rerank={"model": "cohere-rerank-3.5"})
    translated = translate(req, HOST)
    assert translated.payload["rerank"] == {
        "model": "cohere-rerank-3.5",
        "top_n": 100,
        "rank_fields": ["text"],
    }
    assert translated.has_reranking is True


def test_rerank_blank_model_uses_default():
    req = SearchRequest(query="q", top_k=5, rerank={"model": ""})
    translated = translate(req, HOST, default_rerank_model="bge-reranker-v2-m3")
    assert translated.payload["rerank"]["model"] == "bge-reranker-v2-m3"
    assert translated.payload["rerank"]["top_n"] == 5
    assert translated.payload["rerank"]["rank_fields"] == []


def test_rerank_without_model_is_ignored():
    translated = translate(SearchRequest(query="q", rerank={"top_n": 3}), HOST)
    assert "rerank" not in translated.payload


def test_rerank_query_dropped_for_text_search():
    req = SearchRequest(query="q", rerank={"model": "m", "query": "other"})
    assert "query" not in translate(req, HOST).payload["rerank"]


def test_rerank_query_kept_for_vector_search():
    req = SearchRequest(query=[0.1], search_type="vector", rerank={"model": "m", "query": "other", "rank_fields": ["body"]})
    rerank = translate(req, HOST).payload["rerank"]
    assert rerank["query"] == "other"
    assert rerank["rank_fields"] == ["body"]


def test_build_rerank_explicit_values():
    spec = RerankSpec(model="m", top_n=7, rank_fields=["a"])
    assert build_rerank(spec, SearchType.ID, 10, ["b"]) == {"model": "m", "top_n": 7, "rank_fields": ["a"]}


def test_url_uses_host_and_default_namespace():
    translated = translate(SearchRequest(query="q"), HOST)
    assert translated.url == f"https://{HOST}/records/namespaces/__default__/search"


def test_namespace_is_url_encoded():
    assert build_search_url(HOST, "my ns/2024") == f"https://{HOST}/records/namespaces/my%20ns%2F2024/search"
    assert build_search_url(HOST, "it's(ok)") == f"https://{HOST}/records/namespaces/it's(ok)/search"

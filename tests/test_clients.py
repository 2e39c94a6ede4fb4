# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

import json
from typing import Callable, List

import httpx
import pytest

from coreason_mesh.clients import MeshServiceError, NcbiMeshClient, QuickUmlsClient

EUTILS = "https://eutils.test/entrez/eutils"

Handler = Callable[[httpx.Request], httpx.Response]


def quickumls_client(handler: Handler) -> QuickUmlsClient:
    transport = httpx.MockTransport(handler)
    return QuickUmlsClient(endpoint="http://umls.test/match", client=httpx.Client(transport=transport))


def ncbi_client(handler: Handler, **kwargs: str) -> NcbiMeshClient:
    transport = httpx.MockTransport(handler)
    return NcbiMeshClient(client=httpx.Client(base_url=EUTILS, transport=transport), **kwargs)


# --- QuickUMLS ---


def test_quickumls_posts_text_and_parses_native_payload() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "matches": [
                    {"preferred_name": "Tremor", "cui": "C0040822", "similarity": 0.92, "ngram": "hands shake"},
                ]
            },
        )

    hits = quickumls_client(handler).match("my hands shake")

    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://umls.test/match"
    assert json.loads(seen[0].content) == {"text": "my hands shake"}
    assert len(hits) == 1
    assert hits[0].term == "Tremor"
    assert hits[0].id == "C0040822"
    assert hits[0].similarity == 0.92
    assert hits[0].matched_phrase == "hands shake"


def test_quickumls_accepts_bare_list_and_endpoint_override() -> None:
    seen: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=[{"term": "Anxiety", "id": "D001007", "matchedPhrase": "nervous"}])

    hits = quickumls_client(handler).match("nervous", endpoint="http://other.test/match")

    assert seen == ["http://other.test/match"]
    assert hits[0].term == "Anxiety"
    assert hits[0].similarity is None


def test_quickumls_empty_matches() -> None:
    hits = quickumls_client(lambda r: httpx.Response(200, json={"matches": []})).match("nothing")
    assert hits == []


def test_quickumls_http_error() -> None:
    client = quickumls_client(lambda r: httpx.Response(500, text="boom"))
    with pytest.raises(MeshServiceError, match="500"):
        client.match("tremor")


def test_quickumls_invalid_json() -> None:
    client = quickumls_client(lambda r: httpx.Response(200, text="<html>"))
    with pytest.raises(MeshServiceError, match="invalid JSON"):
        client.match("tremor")


def test_quickumls_unexpected_payload() -> None:
    client = quickumls_client(lambda r: httpx.Response(200, json="nope"))
    with pytest.raises(MeshServiceError):
        client.match("tremor")


def test_quickumls_hit_without_term_is_rejected() -> None:
    client = quickumls_client(lambda r: httpx.Response(200, json={"matches": [{"cui": "C1"}]}))
    with pytest.raises(ValueError):
        client.match("tremor")


# --- NCBI MeSH ---


def mesh_handler(requests: List[httpx.Request]) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/esearch.fcgi"):
            return httpx.Response(200, json={"esearchresult": {"count": "2", "idlist": ["68014202", "68999999"]}})
        if request.url.path.endswith("/esummary.fcgi"):
            return httpx.Response(
                200,
                json={
                    "result": {
                        "uids": ["68014202", "68999999"],
                        "68014202": {"uid": "68014202", "ds_meshterms": ["Tremor", "Tremors"]},
                        "68999999": {"uid": "68999999", "ds_meshterms": []},
                    }
                },
            )
        return httpx.Response(404)

    return handler


def test_ncbi_lookup_searches_then_resolves() -> None:
    requests: List[httpx.Request] = []
    client = ncbi_client(mesh_handler(requests), api_key="secret", email="dev@coreason.ai")

    hits = client.lookup("shaking hands", limit=5)

    assert [(h.id, h.display_term) for h in hits] == [("68014202", "Tremor")]
    search, summary = requests
    assert search.url.path == "/entrez/eutils/esearch.fcgi"
    assert search.url.params["db"] == "mesh"
    assert search.url.params["term"] == "shaking hands"
    assert search.url.params["retmax"] == "5"
    assert search.url.params["retmode"] == "json"
    assert search.url.params["api_key"] == "secret"
    assert search.url.params["email"] == "dev@coreason.ai"
    assert summary.url.params["id"] == "68014202,68999999"


def test_ncbi_lookup_no_ids_skips_summary() -> None:
    requests: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"esearchresult": {"idlist": []}})

    assert ncbi_client(handler).lookup("zzzz") == []
    assert len(requests) == 1


def test_ncbi_lookup_empty_term_makes_no_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert ncbi_client(handler).lookup("   ") == []


def test_ncbi_lookup_http_error() -> None:
    client = ncbi_client(lambda r: httpx.Response(503))
    with pytest.raises(MeshServiceError, match="503"):
        client.lookup("tremor")


def test_ncbi_lookup_malformed_search_payload() -> None:
    client = ncbi_client(lambda r: httpx.Response(200, json={"error": "API rate limit exceeded"}))
    with pytest.raises(MeshServiceError, match="Malformed esearch"):
        client.lookup("tremor")


def test_ncbi_lookup_malformed_summary_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/esearch.fcgi"):
            return httpx.Response(200, json={"esearchresult": {"idlist": ["1"]}})
        return httpx.Response(200, json=["unexpected"])

    with pytest.raises(MeshServiceError, match="Malformed esummary"):
        ncbi_client(handler).lookup("tremor")


def test_ncbi_lookup_network_error_propagates_from_client() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(httpx.ConnectError):
        ncbi_client(handler).lookup("tremor")


def test_clients_close_only_owned_http_clients() -> None:
    external = httpx.Client()
    with NcbiMeshClient(client=external):
        pass
    assert not external.is_closed

    owned = QuickUmlsClient()
    owned.close()
    assert owned._client.is_closed
    external.close()


@pytest.mark.parametrize("terms", [{"x": "y"}, "Tremor", 42])
def test_ncbi_lookup_malformed_mesh_terms(terms: object) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/esearch.fcgi"):
            return httpx.Response(200, json={"esearchresult": {"idlist": ["1"]}})
        return httpx.Response(200, json={"result": {"1": {"ds_meshterms": terms}}})

    with pytest.raises(MeshServiceError, match="ds_meshterms is not a list"):
        ncbi_client(handler).lookup("tremor")

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

"""HTTP clients for the optional concept-matching and MeSH lookup services."""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from coreason_mesh.interfaces import ConceptMatcher, TerminologyLookup
from coreason_mesh.schemas import ExternalConceptHit, TerminologyHit
from coreason_mesh.settings import DEFAULT_EUTILS_BASE_URL, DEFAULT_HTTP_TIMEOUT, DEFAULT_MATCHER_ENDPOINT

__all__ = ["MeshServiceError", "QuickUmlsClient", "NcbiMeshClient"]

DEFAULT_USER_AGENT = "coreason-mesh (+https://github.com/CoReason-AI/coreason_mesh)"


class MeshServiceError(RuntimeError):
    """Raised when an upstream terminology service returns an unexpected response."""


def _json_body(response: httpx.Response, service: str) -> Any:
    if response.is_error:
        raise MeshServiceError(f"{service} request failed: {response.status_code}")
    try:
        return response.json()
    except ValueError as e:
        raise MeshServiceError(f"{service} returned invalid JSON: {e}") from e


class QuickUmlsClient(ConceptMatcher):
    """
    Client for a QuickUMLS-style matcher that accepts `{"text": ...}` and
    returns `{"matches": [...]}` (a bare list is accepted too).
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_MATCHER_ENDPOINT,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.endpoint = endpoint
        if client is None:
            client = httpx.Client(timeout=timeout, headers={"User-Agent": DEFAULT_USER_AGENT})
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    def match(self, text: str, endpoint: Optional[str] = None) -> List[ExternalConceptHit]:
        url = endpoint or self.endpoint
        response = self._client.post(url, json={"text": text})
        data = _json_body(response, "Concept matcher")

        if isinstance(data, dict):
            raw_matches = data.get("matches") or []
        elif isinstance(data, list):
            raw_matches = data
        else:
            raise MeshServiceError(f"Concept matcher returned unexpected payload type: {type(data).__name__}")

        if not isinstance(raw_matches, list):
            raise MeshServiceError("Concept matcher 'matches' field is not a list")

        return [ExternalConceptHit.model_validate(m) for m in raw_matches]

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "QuickUmlsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        self.close()


class NcbiMeshClient(TerminologyLookup):
    """
    MeSH lookup through NCBI E-utilities.

    Two calls per lookup:
    1. `esearch.fcgi?db=mesh` to find descriptor UIDs for the free-text term.
    2. `esummary.fcgi?db=mesh` to resolve each UID to its first `ds_meshterms` entry.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_EUTILS_BASE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        api_key: Optional[str] = None,
        tool: Optional[str] = None,
        email: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._common_params: Dict[str, str] = {"db": "mesh", "retmode": "json"}
        if api_key:
            self._common_params["api_key"] = api_key
        if tool:
            self._common_params["tool"] = tool
        if email:
            self._common_params["email"] = email

        if client is None:
            client = httpx.Client(
                base_url=base_url.rstrip("/"),
                timeout=timeout,
                headers={"Accept": "application/json", "User-Agent": DEFAULT_USER_AGENT},
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    def search_ids(self, term: str, limit: int = 5) -> List[str]:
        params = {**self._common_params, "term": term, "retmax": str(limit)}
        data = _json_body(self._client.get("/esearch.fcgi", params=params), "MeSH esearch")

        try:
            ids = data["esearchresult"].get("idlist", [])
        except (KeyError, TypeError, AttributeError) as e:
            raise MeshServiceError(f"Malformed esearch payload: {e}") from e

        if not isinstance(ids, list):
            raise MeshServiceError("Malformed esearch payload: idlist is not a list")
        return [str(i) for i in ids][:limit]

    def fetch_terms(self, ids: List[str]) -> List[TerminologyHit]:
        if not ids:
            return []

        params = {**self._common_params, "id": ",".join(ids)}
        data = _json_body(self._client.get("/esummary.fcgi", params=params), "MeSH esummary")

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise MeshServiceError("Malformed esummary payload: missing 'result'")

        hits: List[TerminologyHit] = []
        for uid in ids:
            record = result.get(uid)
            if not isinstance(record, dict):
                continue
            terms = record.get("ds_meshterms") or []
            if not isinstance(terms, list):
                raise MeshServiceError(f"Malformed esummary record for {uid}: ds_meshterms is not a list")
            if terms:
                hits.append(TerminologyHit(id=uid, display_term=str(terms[0])))
        return hits

    def lookup(self, term: str, limit: int = 5) -> List[TerminologyHit]:
        if not term.strip():
            return []

        ids = self.search_ids(term, limit=limit)
        logger.debug(f"MeSH esearch for '{term}' returned {len(ids)} ids")
        return self.fetch_terms(ids)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "NcbiMeshClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[no-untyped-def]
        self.close()

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import Generator, List, Optional

import pytest

from coreason_mesh.pipeline import MeshContext
from coreason_mesh.schemas import ExternalConceptHit, TerminologyHit

# --- Fakes ---


class FakeConceptMatcher:
    """Returns canned hits and records every call."""

    def __init__(self, hits: Optional[List[ExternalConceptHit]] = None, error: Optional[Exception] = None):
        self.hits = hits or []
        self.error = error
        self.calls: List[tuple] = []

    def match(self, text: str, endpoint: Optional[str] = None) -> List[ExternalConceptHit]:
        self.calls.append((text, endpoint))
        if self.error is not None:
            raise self.error
        return list(self.hits)


class FakeTerminologyLookup:
    """Returns canned hits and records every call."""

    def __init__(self, hits: Optional[List[TerminologyHit]] = None, error: Optional[Exception] = None):
        self.hits = hits or []
        self.error = error
        self.calls: List[tuple] = []

    def lookup(self, term: str, limit: int = 5) -> List[TerminologyHit]:
        self.calls.append((term, limit))
        if self.error is not None:
            raise self.error
        return list(self.hits)[:limit]


# --- Fixtures ---


@pytest.fixture(autouse=True)
def reset_context() -> Generator[None, None, None]:
    yield
    MeshContext.reset()


@pytest.fixture
def fake_lookup() -> FakeTerminologyLookup:
    return FakeTerminologyLookup(
        hits=[
            TerminologyHit(id="68012345", display_term="Comorbidity"),
            TerminologyHit(id="68054321", display_term="Risk Factors"),
        ]
    )


@pytest.fixture
def fake_matcher() -> FakeConceptMatcher:
    return FakeConceptMatcher(
        hits=[
            ExternalConceptHit(term="Tremor", id="C0040822", similarity=0.9, matched_phrase="hands shake"),
            ExternalConceptHit(term="Hand", id="C0018563", matched_phrase="hands"),
        ]
    )

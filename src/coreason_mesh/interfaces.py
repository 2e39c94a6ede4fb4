# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import List, Optional, Protocol

from coreason_mesh.schemas import ExternalConceptHit, TerminologyHit


class ConceptMatcher(Protocol):
    """
    Protocol for an external concept-matching service (e.g. a QuickUMLS server).
    """

    def match(self, text: str, endpoint: Optional[str] = None) -> List[ExternalConceptHit]:
        """
        Returns the concepts recognized in `text`. `endpoint` overrides the configured URL.
        """
        ...


class TerminologyLookup(Protocol):
    """
    Protocol for a terminology search service (e.g. NCBI MeSH E-utilities).
    """

    def lookup(self, term: str, limit: int = 5) -> List[TerminologyHit]:
        """
        Searches for `term` and resolves up to `limit` identifiers to display terms.
        """
        ...

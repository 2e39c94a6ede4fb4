# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import Optional

from coreason_mesh import synthesizer
from coreason_mesh.aggregator import aggregate_matches
from coreason_mesh.clients import NcbiMeshClient, QuickUmlsClient
from coreason_mesh.interfaces import ConceptMatcher, TerminologyLookup
from coreason_mesh.matcher import MeshTermMatcher
from coreason_mesh.residual import extract_unmatched_fragments
from coreason_mesh.schemas import MappingResult, MeshOptions, ProcessedQuery, QueryOptions, QuerySummary
from coreason_mesh.settings import MeshSettings
from coreason_mesh.utils.logger import logger


class MeshContext:
    """
    Global context/singleton holding the HTTP collaborators.

    The lexicon tables are module constants; the only state kept here are the
    clients, which are safe to share between independent mapping requests.
    """

    _instance: Optional["MeshContext"] = None

    def __init__(
        self,
        settings: Optional[MeshSettings] = None,
        concept_matcher: Optional[ConceptMatcher] = None,
        terminology_lookup: Optional[TerminologyLookup] = None,
    ):
        self.settings = settings or MeshSettings.from_env()
        logger.info(f"Initializing MeSH Context (E-utilities: {self.settings.eutils_base_url})")

        self.concept_matcher = concept_matcher or QuickUmlsClient(
            endpoint=self.settings.matcher_endpoint,
            timeout=self.settings.http_timeout,
        )
        self.terminology_lookup = terminology_lookup or NcbiMeshClient(
            base_url=self.settings.eutils_base_url,
            timeout=self.settings.http_timeout,
            api_key=self.settings.ncbi_api_key,
            tool=self.settings.ncbi_tool,
            email=self.settings.ncbi_email,
        )
        self.matcher = MeshTermMatcher(
            concept_matcher=self.concept_matcher,
            terminology_lookup=self.terminology_lookup,
        )

    def map_query(self, text: str, options: Optional[MeshOptions] = None) -> MappingResult:
        """
        Maps a patient question to ranked MeSH concepts.
        """
        options = options or MeshOptions()
        normalized = text.lower().strip()

        pool = self.matcher.collect(normalized, options)
        aggregated = aggregate_matches(pool, min_confidence=options.min_confidence)
        fragments = extract_unmatched_fragments(normalized, aggregated.pool)

        logger.debug(
            f"Mapped '{text}' to {[m.concept for m in aggregated.matches]} "
            f"(confidence={aggregated.overall_confidence:.2f}, unmatched={fragments})"
        )
        return MappingResult(
            original_query=text,
            matches=aggregated.matches,
            unmatched_fragments=fragments,
            overall_confidence=aggregated.overall_confidence,
            method=aggregated.method,
        )

    def close(self) -> None:
        for client in (self.concept_matcher, self.terminology_lookup):
            close = getattr(client, "close", None)
            if callable(close):
                close()

    @classmethod
    def initialize(
        cls,
        settings: Optional[MeshSettings] = None,
        concept_matcher: Optional[ConceptMatcher] = None,
        terminology_lookup: Optional[TerminologyLookup] = None,
    ) -> None:
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = cls(settings, concept_matcher=concept_matcher, terminology_lookup=terminology_lookup)

    @classmethod
    def get_instance(cls) -> "MeshContext":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None


# --- Public API Functions ---


def initialize(
    settings: Optional[MeshSettings] = None,
    concept_matcher: Optional[ConceptMatcher] = None,
    terminology_lookup: Optional[TerminologyLookup] = None,
) -> None:
    """Initializes the process-wide MeSH context."""
    MeshContext.initialize(settings, concept_matcher=concept_matcher, terminology_lookup=terminology_lookup)


def map_query(text: str, options: Optional[MeshOptions] = None) -> MappingResult:
    """
    Maps free text to ranked MeSH concepts with unmatched fragments.
    """
    return MeshContext.get_instance().map_query(text, options)


def synthesize_query(mapping: MappingResult, options: Optional[QueryOptions] = None) -> str:
    """
    Builds the PubMed boolean query for a mapping result.
    """
    return synthesizer.synthesize_query(mapping, options)


def process_query(text: str, options: Optional[MeshOptions] = None) -> ProcessedQuery:
    """
    Maps the question and builds its query in one call.
    """
    options = options or MeshOptions()
    mapping = map_query(text, options)
    query = synthesize_query(mapping, options)

    return ProcessedQuery(
        mapping=mapping,
        query=query,
        summary=QuerySummary(
            original_query=text,
            mesh_terms=[m.concept for m in mapping.matches],
            confidence=mapping.overall_confidence,
            unmapped=mapping.unmatched_fragments,
        ),
    )

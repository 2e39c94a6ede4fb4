# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import Callable, List, Mapping, Optional, Tuple

import httpx
from loguru import logger

from coreason_mesh.clients import MeshServiceError
from coreason_mesh.interfaces import ConceptMatcher, TerminologyLookup
from coreason_mesh.lexicon import LAY_TERM_MAPPINGS, MESH_SYNONYMS
from coreason_mesh.schemas import ConceptMatch, MatchOrigin, MeshOptions

SYNONYM_CONFIDENCE = 0.95
LAY_TERM_BASE_CONFIDENCE = 0.85
LAY_TERM_DECAY = 0.10
EXTERNAL_MATCHER_DEFAULT_CONFIDENCE = 0.8
EXTERNAL_LOOKUP_CONFIDENCE = 0.7
LOOKUP_TRIGGER_THRESHOLD = 3
LOOKUP_LIMIT = 5

RECOVERABLE_ERRORS = (httpx.HTTPError, MeshServiceError, OSError, ValueError)


def _best_effort(stage: str, call: Callable[[], List[ConceptMatch]]) -> List[ConceptMatch]:
    """Runs an upstream stage, mapping any recoverable failure to an empty contribution."""
    try:
        return call()
    except RECOVERABLE_ERRORS as e:
        logger.warning(f"{stage} unavailable, continuing without it: {e}")
        return []


class MeshTermMatcher:
    """
    The Term Matcher. Builds the raw candidate pool for a normalized question.

    Stages run strictly in order and append to the pool:
    1. External concept matcher (optional).
    2. Synonym table scan.
    3. Lay-term table scan.
    4. External terminology lookup, only while the pool holds fewer than three distinct concepts.

    The pool is not deduplicated here; earlier stages take precedence downstream.
    """

    def __init__(
        self,
        concept_matcher: Optional[ConceptMatcher] = None,
        terminology_lookup: Optional[TerminologyLookup] = None,
        synonyms: Mapping[str, str] = MESH_SYNONYMS,
        lay_terms: Mapping[str, Tuple[str, ...]] = LAY_TERM_MAPPINGS,
    ):
        self.concept_matcher = concept_matcher
        self.terminology_lookup = terminology_lookup
        self.synonyms = synonyms
        self.lay_terms = lay_terms

    def collect(self, text: str, options: Optional[MeshOptions] = None) -> List[ConceptMatch]:
        """
        Returns the candidate pool for `text`, which must already be lower-cased and trimmed.
        Never raises for upstream service failures.
        """
        options = options or MeshOptions()
        pool: List[ConceptMatch] = []

        if options.use_external_matcher:
            if self.concept_matcher is None:
                logger.warning("External concept matcher requested but none is configured")
            else:
                pool.extend(
                    _best_effort(
                        "External concept matcher",
                        lambda: self.match_external(text, options.external_matcher_endpoint),
                    )
                )

        pool.extend(self.match_synonyms(text))
        pool.extend(self.match_lay_terms(text))

        # Distinct concepts, since duplicates are dropped downstream.
        distinct = len({m.concept for m in pool})
        if options.use_external_lookup and distinct < LOOKUP_TRIGGER_THRESHOLD:
            if self.terminology_lookup is None:
                logger.debug("No terminology lookup configured, skipping")
            else:
                pool.extend(_best_effort("MeSH terminology lookup", lambda: self.lookup_terms(text)))

        logger.debug(f"Collected {len(pool)} candidate matches for '{text}'")
        return pool

    def match_external(self, text: str, endpoint: Optional[str] = None) -> List[ConceptMatch]:
        if self.concept_matcher is None:
            raise RuntimeError("No external concept matcher configured")
        hits = self.concept_matcher.match(text, endpoint=endpoint)
        return [
            ConceptMatch(
                concept=hit.term,
                source_phrase=hit.matched_phrase or text,
                confidence=hit.similarity if hit.similarity is not None else EXTERNAL_MATCHER_DEFAULT_CONFIDENCE,
                origin=MatchOrigin.EXTERNAL_MATCHER,
                concept_id=hit.id,
            )
            for hit in hits
        ]

    def match_synonyms(self, text: str) -> List[ConceptMatch]:
        # Every entry is checked; one question can hit several synonyms.
        return [
            ConceptMatch(
                concept=concept,
                source_phrase=synonym,
                confidence=SYNONYM_CONFIDENCE,
                origin=MatchOrigin.SYNONYM,
            )
            for synonym, concept in self.synonyms.items()
            if synonym in text
        ]

    def match_lay_terms(self, text: str) -> List[ConceptMatch]:
        matches: List[ConceptMatch] = []
        for phrase, concepts in self.lay_terms.items():
            if phrase not in text:
                continue
            # Linear decay, not clamped. The confidence floor removes long-tail candidates.
            for index, concept in enumerate(concepts):
                matches.append(
                    ConceptMatch(
                        concept=concept,
                        source_phrase=phrase,
                        confidence=LAY_TERM_BASE_CONFIDENCE - LAY_TERM_DECAY * index,
                        origin=MatchOrigin.LAY_DICTIONARY,
                    )
                )
        return matches

    def lookup_terms(self, text: str) -> List[ConceptMatch]:
        if self.terminology_lookup is None:
            raise RuntimeError("No terminology lookup configured")
        hits = self.terminology_lookup.lookup(text, limit=LOOKUP_LIMIT)
        return [
            ConceptMatch(
                concept=hit.display_term,
                source_phrase=text,
                confidence=EXTERNAL_LOOKUP_CONFIDENCE,
                origin=MatchOrigin.EXTERNAL_LOOKUP,
                concept_id=hit.id,
            )
            for hit in hits[:LOOKUP_LIMIT]
        ]

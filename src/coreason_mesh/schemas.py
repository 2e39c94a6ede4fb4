# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MatchOrigin(str, Enum):
    """Pipeline stage that produced a ConceptMatch."""

    EXTERNAL_MATCHER = "external_matcher"
    SYNONYM = "synonym"
    LAY_DICTIONARY = "lay_dictionary"
    EXTERNAL_LOOKUP = "external_lookup"


class MappingMethod(str, Enum):
    EXTERNAL_MATCHER = "external_matcher"
    HYBRID = "hybrid"


class ConceptMatch(BaseModel):
    """
    One candidate mapping of a phrase to a MeSH heading.

    Frozen: the confidence is assigned by the producing stage and never changes afterwards.
    """

    model_config = ConfigDict(frozen=True)

    concept: str
    source_phrase: str
    confidence: float
    origin: MatchOrigin
    concept_id: Optional[str] = None


class MappingResult(BaseModel):
    """
    Output of the mapping stage for one patient question.

    `matches` is ranked by confidence and unique by concept name.
    `overall_confidence` is the mean over the deduplicated pool before the confidence floor.
    """

    model_config = ConfigDict(frozen=True)

    original_query: str
    matches: List[ConceptMatch] = Field(default_factory=list)
    unmatched_fragments: List[str] = Field(default_factory=list)
    overall_confidence: float = 0.0
    method: MappingMethod = MappingMethod.HYBRID


class DateRange(BaseModel):
    """Publication date bounds, passed through verbatim (e.g. "2020/01/01")."""

    start: str
    end: str


class QueryOptions(BaseModel):
    """Options consumed by the query synthesizer."""

    max_concept_terms: int = 3
    include_subheadings: bool = True
    date_range: Optional[DateRange] = None


class MeshOptions(QueryOptions):
    """Options recognized across map_query, synthesize_query and process_query."""

    use_external_matcher: bool = False
    external_matcher_endpoint: Optional[str] = None
    use_external_lookup: bool = True
    min_confidence: float = 0.3


class QuerySummary(BaseModel):
    original_query: str
    mesh_terms: List[str]
    confidence: float
    unmapped: List[str]


class ProcessedQuery(BaseModel):
    mapping: MappingResult
    query: str
    summary: QuerySummary


# --- Wire models for the external collaborators ---


class ExternalConceptHit(BaseModel):
    """
    A single hit returned by a QuickUMLS-style concept matcher.

    Accepts both the `{term, id, similarity, matchedPhrase}` shape and the native
    QuickUMLS `{preferred_name, cui, similarity, ngram}` shape.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    term: str = Field(validation_alias=AliasChoices("preferred_name", "term"))
    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "cui"))
    similarity: Optional[float] = None
    matched_phrase: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("matchedPhrase", "matched_phrase", "ngram")
    )


class TerminologyHit(BaseModel):
    """A resolved entry from the terminology lookup service."""

    id: str
    display_term: str

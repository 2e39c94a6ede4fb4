# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import Iterable, List, NamedTuple

from coreason_mesh.schemas import ConceptMatch, MappingMethod, MatchOrigin

DEFAULT_MIN_CONFIDENCE = 0.3


class AggregatedMatches(NamedTuple):
    pool: List[ConceptMatch]
    matches: List[ConceptMatch]
    overall_confidence: float
    method: MappingMethod


def deduplicate(pool: Iterable[ConceptMatch]) -> List[ConceptMatch]:
    """
    Keeps the first match seen for each concept name.
    """
    seen = set()
    unique: List[ConceptMatch] = []
    for match in pool:
        if match.concept in seen:
            continue
        seen.add(match.concept)
        unique.append(match)
    return unique


def mean_confidence(matches: List[ConceptMatch]) -> float:
    if not matches:
        return 0.0
    return sum(m.confidence for m in matches) / len(matches)


def mapping_method(matches: List[ConceptMatch]) -> MappingMethod:
    if matches and all(m.origin == MatchOrigin.EXTERNAL_MATCHER for m in matches):
        return MappingMethod.EXTERNAL_MATCHER
    return MappingMethod.HYBRID


def aggregate_matches(
    pool: Iterable[ConceptMatch], min_confidence: float = DEFAULT_MIN_CONFIDENCE
) -> AggregatedMatches:
    """
    Turns the raw candidate pool into ranked matches.

    The overall confidence is the mean of the deduplicated pool, taken before the
    confidence floor is applied, so excluded matches still count towards it.
    Python's sort is stable, so equal confidences keep pool order.
    """
    unique = deduplicate(pool)
    overall = mean_confidence(unique)

    kept = [m for m in unique if m.confidence >= min_confidence]
    kept.sort(key=lambda m: m.confidence, reverse=True)

    return AggregatedMatches(pool=unique, matches=kept, overall_confidence=overall, method=mapping_method(unique))

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

from coreason_mesh.schemas import DateRange, MappingResult, QueryOptions

CLINICAL_SUBHEADINGS = ("therapy", "diagnosis", "etiology", "pathophysiology")


def mesh_clause(concept: str) -> str:
    return f'"{concept}"[MeSH Terms]'


def free_text_clause(text: str) -> str:
    return f'"{text}"[Title/Abstract]'


def subheading_clause() -> str:
    return "(" + " OR ".join(f'"{s}"[Subheading]' for s in CLINICAL_SUBHEADINGS) + ")"


def date_clause(date_range: DateRange) -> str:
    return f'("{date_range.start}"[Date - Publication] : "{date_range.end}"[Date - Publication])'


def synthesize_query(mapping: MappingResult, options: Optional[QueryOptions] = None) -> str:
    """
    Builds a PubMed boolean query from a mapping result.

    Shape: `(("A"[MeSH Terms] OR ...) OR "<question>"[Title/Abstract])`, optionally
    AND-ed with the clinical subheadings and a publication date range. With no
    concepts the result is a bare free-text clause on the original question.

    Terms are quoted but not escaped.
    """
    options = options or QueryOptions()
    limit = max(0, options.max_concept_terms)
    concepts = mapping.matches[:limit]

    if not concepts:
        return free_text_clause(mapping.original_query)

    core = "(" + " OR ".join(mesh_clause(m.concept) for m in concepts) + ")"
    query = f"({core} OR {free_text_clause(mapping.original_query)})"

    if options.include_subheadings:
        query = f"{query} AND {subheading_clause()}"

    # Bounds are passed through as given; ordering is the caller's concern.
    if options.date_range is not None:
        query = f"{query} AND {date_clause(options.date_range)}"

    return query

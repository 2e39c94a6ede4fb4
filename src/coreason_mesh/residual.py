# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from typing import AbstractSet, Iterable, List

from coreason_mesh.lexicon import STOP_WORDS
from coreason_mesh.schemas import ConceptMatch

TRAILING_PUNCTUATION = ".,!?;:'\"()"
MIN_FRAGMENT_LENGTH = 3


def extract_unmatched_fragments(
    text: str, pool: Iterable[ConceptMatch], stop_words: AbstractSet[str] = STOP_WORDS
) -> List[str]:
    """
    Returns the significant words of `text` that no match accounts for.

    Each match removes only the first occurrence of its source phrase. Tokens of two
    characters or fewer and stop words are dropped before trailing punctuation is stripped.
    Fragments are unique and keep their left-to-right order.
    """
    remaining = text
    for match in pool:
        if match.source_phrase:
            remaining = remaining.replace(match.source_phrase, " ", 1)

    fragments: List[str] = []
    for token in remaining.split():
        if len(token) < MIN_FRAGMENT_LENGTH or token in stop_words:
            continue
        cleaned = token.rstrip(TRAILING_PUNCTUATION)
        if cleaned and cleaned not in fragments:
            fragments.append(cleaned)
    return fragments

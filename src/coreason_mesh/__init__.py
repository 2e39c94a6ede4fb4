# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

"""
coreason-mesh
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .aggregator import aggregate_matches
from .clients import MeshServiceError, NcbiMeshClient, QuickUmlsClient
from .matcher import MeshTermMatcher
from .pipeline import MeshContext, initialize, map_query, process_query, synthesize_query
from .schemas import ConceptMatch, DateRange, MappingMethod, MappingResult, MatchOrigin, MeshOptions, QueryOptions

__all__ = [
    "MeshContext",
    "MeshTermMatcher",
    "QuickUmlsClient",
    "NcbiMeshClient",
    "MeshServiceError",
    "ConceptMatch",
    "MappingResult",
    "MatchOrigin",
    "MappingMethod",
    "MeshOptions",
    "QueryOptions",
    "DateRange",
    "aggregate_matches",
    "initialize",
    "map_query",
    "synthesize_query",
    "process_query",
]

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

import coreason_mesh


def test_public_api_exposure() -> None:
    """
    Verify that the core functions and classes are exposed at the package level.
    """
    expected_symbols = [
        "MeshContext",
        "MeshTermMatcher",
        "QuickUmlsClient",
        "NcbiMeshClient",
        "ConceptMatch",
        "MappingResult",
        "MeshOptions",
        "initialize",
        "map_query",
        "synthesize_query",
        "process_query",
    ]

    for symbol in expected_symbols:
        assert hasattr(coreason_mesh, symbol), f"{symbol} not exposed in coreason_mesh"


def test_entry_points_callable() -> None:
    assert callable(coreason_mesh.map_query)
    assert callable(coreason_mesh.synthesize_query)
    assert callable(coreason_mesh.process_query)


def test_version_exposure() -> None:
    assert isinstance(coreason_mesh.__version__, str)

# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

import os
from typing import Optional

from pydantic import BaseModel

DEFAULT_MATCHER_ENDPOINT = "http://localhost:5000/match"
DEFAULT_EUTILS_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
DEFAULT_HTTP_TIMEOUT = 10.0


class MeshSettings(BaseModel):
    """
    Process-level configuration for the external collaborators.
    """

    matcher_endpoint: str = DEFAULT_MATCHER_ENDPOINT
    eutils_base_url: str = DEFAULT_EUTILS_BASE_URL
    ncbi_api_key: Optional[str] = None
    ncbi_tool: Optional[str] = None
    ncbi_email: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> "MeshSettings":
        """Builds settings from MESH_* / NCBI_* environment variables."""
        timeout = os.getenv("MESH_HTTP_TIMEOUT")
        try:
            http_timeout = float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT
        except ValueError as e:
            raise ValueError(f"Invalid MESH_HTTP_TIMEOUT value: {timeout!r}") from e

        return cls(
            matcher_endpoint=os.getenv("MESH_MATCHER_ENDPOINT", DEFAULT_MATCHER_ENDPOINT),
            eutils_base_url=os.getenv("MESH_EUTILS_BASE_URL", DEFAULT_EUTILS_BASE_URL),
            ncbi_api_key=os.getenv("NCBI_API_KEY") or None,
            ncbi_tool=os.getenv("NCBI_TOOL") or None,
            ncbi_email=os.getenv("NCBI_EMAIL") or None,
            http_timeout=http_timeout,
        )

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
import sys
from typing import Any

from loguru import logger as _logger

__all__ = ["logger"]

# Remove default handler
_logger.remove()

# Single stderr sink. Applications embedding the mapper can add their own sinks.
_logger.add(
    sys.stderr,
    level=os.getenv("MESH_LOG_LEVEL", "INFO").upper(),
    format=(
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
)

logger: Any = _logger

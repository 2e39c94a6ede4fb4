# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from loguru import logger
from pydantic import BaseModel

from coreason_mesh.pipeline import MeshContext, process_query
from coreason_mesh.schemas import MappingResult, MeshOptions, ProcessedQuery
from coreason_mesh.settings import MeshSettings


# Pydantic Models for Requests
class MappingRequest(BaseModel):
    text: str
    options: Optional[MeshOptions] = None


# Lifespan Management
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager that builds the MeSH context on startup.
    """
    try:
        MeshContext.initialize(MeshSettings.from_env())
        logger.info("MeSH mapper ready.")
    except Exception as e:
        logger.exception("Failed to initialize MeSH mapper.")
        raise RuntimeError(f"Server initialization failed: {e}") from e

    yield

    logger.info("Shutting down MeSH mapper.")
    MeshContext.reset()


app = FastAPI(title="Coreason MeSH Mapper API", lifespan=lifespan)


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ready"}


# Plain `def` endpoints: the mapping call blocks on HTTP, so FastAPI runs it in the threadpool.
@app.post("/map", response_model=MappingResult)
def map_text(request: MappingRequest) -> MappingResult:
    """
    Map a patient question to ranked MeSH concepts.
    """
    return MeshContext.get_instance().map_query(request.text, request.options)


@app.post("/query", response_model=ProcessedQuery)
def build_query(request: MappingRequest) -> ProcessedQuery:
    """
    Map a patient question and build its PubMed query.
    """
    return process_query(request.text, request.options)

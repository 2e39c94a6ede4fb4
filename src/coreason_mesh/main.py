# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

import sys
from typing import Annotated, Optional

import typer

from coreason_mesh import __version__
from coreason_mesh.pipeline import map_query, process_query
from coreason_mesh.schemas import DateRange, MeshOptions
from coreason_mesh.utils.logger import logger

app = typer.Typer(
    name="coreason-mesh",
    help="CLI for coreason-mesh: plain-language questions to MeSH concepts and PubMed queries.",
    add_completion=False,
)

ExternalMatcherOpt = Annotated[
    bool, typer.Option("--external-matcher/--no-external-matcher", help="Query the external concept matcher")
]
MatcherEndpointOpt = Annotated[Optional[str], typer.Option("--matcher-endpoint", help="Concept matcher URL")]
LookupOpt = Annotated[bool, typer.Option("--lookup/--no-lookup", help="Fall back to the NCBI MeSH lookup")]
MinConfidenceOpt = Annotated[float, typer.Option("--min-confidence", "-c", help="Confidence floor for matches")]


def _build_options(
    external_matcher: bool,
    matcher_endpoint: Optional[str],
    lookup: bool,
    min_confidence: float,
    max_terms: int = 3,
    subheadings: bool = True,
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
) -> MeshOptions:
    if (date_start is None) != (date_end is None):
        raise typer.BadParameter("--date-start and --date-end must be given together")

    date_range = DateRange(start=date_start, end=date_end) if date_start and date_end else None
    return MeshOptions(
        use_external_matcher=external_matcher,
        external_matcher_endpoint=matcher_endpoint,
        use_external_lookup=lookup,
        min_confidence=min_confidence,
        max_concept_terms=max_terms,
        include_subheadings=subheadings,
        date_range=date_range,
    )


@app.command("map")
def map_command(
    text: Annotated[str, typer.Argument(help="Patient question to map")],
    external_matcher: ExternalMatcherOpt = False,
    matcher_endpoint: MatcherEndpointOpt = None,
    lookup: LookupOpt = True,
    min_confidence: MinConfidenceOpt = 0.3,
) -> None:
    """
    Map a question to MeSH concepts and print the result as JSON.
    """
    options = _build_options(external_matcher, matcher_endpoint, lookup, min_confidence)
    try:
        result = map_query(text, options)
        typer.echo(result.model_dump_json(indent=2))
    except Exception:
        logger.exception("Mapping Failed")
        sys.exit(1)


@app.command()
def query(
    text: Annotated[str, typer.Argument(help="Patient question to turn into a PubMed query")],
    external_matcher: ExternalMatcherOpt = False,
    matcher_endpoint: MatcherEndpointOpt = None,
    lookup: LookupOpt = True,
    min_confidence: MinConfidenceOpt = 0.3,
    max_terms: Annotated[int, typer.Option("--max-terms", "-n", help="Maximum MeSH terms in the query")] = 3,
    subheadings: Annotated[
        bool, typer.Option("--subheadings/--no-subheadings", help="Restrict to clinical subheadings")
    ] = True,
    date_start: Annotated[Optional[str], typer.Option("--date-start", help="Publication date lower bound")] = None,
    date_end: Annotated[Optional[str], typer.Option("--date-end", help="Publication date upper bound")] = None,
    summary: Annotated[bool, typer.Option("--summary", help="Print the mapping summary as well")] = False,
) -> None:
    """
    Build a PubMed boolean query for a question.
    """
    options = _build_options(
        external_matcher, matcher_endpoint, lookup, min_confidence, max_terms, subheadings, date_start, date_end
    )
    try:
        processed = process_query(text, options)
        typer.echo(processed.query)
        if summary:
            typer.echo(processed.summary.model_dump_json(indent=2))
    except Exception:
        logger.exception("Query Synthesis Failed")
        sys.exit(1)


@app.command()
def version() -> None:
    """Print the version of coreason-mesh."""
    typer.echo(f"coreason-mesh v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()  # pragma: no cover

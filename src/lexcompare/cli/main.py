"""Command-line interface for lexcompare."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Tuple

import click

from ..bootstrap import build_engine
from ..caselaw import CourtLevel
from ..choice_of_law import ApproachKind, ContactingFactorKind, FactPattern
from ..engine import ComparativeLawEngine
from ..errors import LexCompareError
from ..observability import run_scope
from ..topics import LegalTopic


def _engine(ctx: click.Context) -> ComparativeLawEngine:
    try:
        return build_engine(ctx.obj.get("data_root"))
    except LexCompareError as exc:
        raise click.ClickException(f"{exc.kind}: {exc.message}") from exc


def _parse_pairs(values: Tuple[str, ...], option: str) -> list[tuple[str, str]]:
    pairs = []
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=option)
        pairs.append((key.strip(), value.strip()))
    return pairs


def _fail(exc: LexCompareError) -> None:
    click.echo(json.dumps({"error": exc.to_dict()}, indent=2), err=True)
    raise SystemExit(1)


@click.group()
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding rules/*.json and cases/*.jsonl (defaults to LEXC_DATA_ROOT).",
)
@click.pass_context
def cli(ctx: click.Context, data_root: Optional[Path]) -> None:
    """Comparative-law decision engine."""

    ctx.ensure_object(dict)
    ctx.obj["data_root"] = data_root
    ctx.with_resource(run_scope())


@cli.command("compare")
@click.argument("topic")
@click.argument("jurisdictions", nargs=-1, required=True)
@click.pass_context
def compare_cmd(ctx: click.Context, topic: str, jurisdictions: Tuple[str, ...]) -> None:
    """Compare TOPIC across JURISDICTIONS and emit majority/minority as JSON."""

    engine = _engine(ctx)
    try:
        result = engine.compare(LegalTopic.parse(topic), jurisdictions)
    except LexCompareError as exc:
        _fail(exc)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TOPIC") from exc
    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command("report")
@click.argument("topic")
@click.argument("jurisdictions", nargs=-1, required=True)
@click.pass_context
def report_cmd(ctx: click.Context, topic: str, jurisdictions: Tuple[str, ...]) -> None:
    """Print a plain-text comparison report."""

    engine = _engine(ctx)
    try:
        result = engine.compare(LegalTopic.parse(topic), jurisdictions)
    except LexCompareError as exc:
        _fail(exc)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TOPIC") from exc
    click.echo(engine.generate_report(result))


@cli.command("choice-of-law")
@click.argument("topic")
@click.option("--forum", required=True, help="Forum jurisdiction code, e.g. US-NY.")
@click.option(
    "--factor",
    "factors",
    multiple=True,
    help="Contacting factor as KIND=JURISDICTION, e.g. place_of_injury=US-CA. Repeatable.",
)
@click.option(
    "--approach",
    type=click.Choice([kind.value for kind in ApproachKind]),
    default=None,
    help="Override the forum's choice-of-law approach.",
)
@click.option("--interest", "interests", multiple=True, help="Policy interest as JURISDICTION=POLICY.")
@click.option("--quality", "qualities", multiple=True, help="Law quality as JURISDICTION=SCORE (better-law only).")
@click.option("--notes", default="", help="Free-text policy notes.")
@click.pass_context
def choice_of_law_cmd(
    ctx: click.Context,
    topic: str,
    forum: str,
    factors: Tuple[str, ...],
    approach: Optional[str],
    interests: Tuple[str, ...],
    qualities: Tuple[str, ...],
    notes: str,
) -> None:
    """Resolve which jurisdiction's law governs a dispute heard in FORUM."""

    factor_pairs = _parse_pairs(factors, "--factor")
    for kind, _ in factor_pairs:
        try:
            ContactingFactorKind(kind)
        except ValueError as exc:
            raise click.BadParameter(f"unknown factor kind {kind!r}", param_hint="--factor") from exc
    try:
        quality = {code: float(score) for code, score in _parse_pairs(qualities, "--quality")}
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--quality") from exc

    engine = _engine(ctx)
    try:
        fact_pattern = FactPattern.build(
            LegalTopic.parse(topic),
            factor_pairs,
            policy_notes=notes,
            interests=dict(_parse_pairs(interests, "--interest")),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TOPIC") from exc
    try:
        result = engine.analyze_choice_of_law(fact_pattern, forum, approach, law_quality=quality or None)
    except LexCompareError as exc:
        _fail(exc)
    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command("search")
@click.argument("keywords", nargs=-1)
@click.option(
    "--court-level",
    type=click.Choice([level.value for level in CourtLevel]),
    default=None,
    help="Only return decisions from this court level.",
)
@click.option("--topic", default=None, help="Only return decisions on this topic.")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Maximum number of results.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    keywords: Tuple[str, ...],
    court_level: Optional[str],
    topic: Optional[str],
    limit: Optional[int],
) -> None:
    """Search indexed decisions; every KEYWORD must match."""

    engine = _engine(ctx)
    results = engine.search(keywords, court_level=court_level, topic=topic, limit=limit)
    payload = {
        "count": len(results),
        "results": [
            {
                "id": result.decision.id,
                "score": result.score,
                "court_level": result.decision.court_level.value,
                "decided": result.decision.decided.isoformat(),
                "matched_keywords": list(result.matched_keywords),
                "rationale": result.rationale,
            }
            for result in results
        ],
    }
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    cli()

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
import structlog

from ethics_engine.log_config import configure_logging

if TYPE_CHECKING:
    from ethics_engine.config.settings import Settings
    from ethics_engine.engine.runner import EthicsEngine
    from ethics_engine.screening.client import ScreeningLookup

logger = structlog.get_logger(__name__)


def _load_settings(policy: str | None, screening_table: str | None) -> Settings:
    from ethics_engine.config.settings import Settings

    overrides: dict[str, Any] = {}
    if policy:
        overrides["policy_path"] = Path(policy)
    if screening_table:
        overrides["screening_table_path"] = Path(screening_table)
    return Settings(**overrides)


async def _evaluate_all(
    engine: EthicsEngine,
    lookup: ScreeningLookup,
    payloads: list[Any],
) -> list[Any]:
    try:
        return [await engine.evaluate(payload) for payload in payloads]
    finally:
        close = getattr(lookup, "close", None)
        if close is not None:
            await close()


@click.group()  # type: ignore[misc]
@click.option("--log-level", default=None, help="Minimum log level (defaults to EE_LOG_LEVEL)")  # type: ignore[misc]
def cli(log_level: str | None) -> None:
    """Ethics Engine: policy-aware risk aggregation for cross-border cases."""
    from ethics_engine.config.settings import Settings

    configure_logging(log_level or Settings().log_level)


@cli.command()  # type: ignore[misc]
@click.argument("case_file", type=click.Path(exists=True, dir_okay=False))  # type: ignore[misc]
@click.option("--policy", default=None, help="Policy JSON file")  # type: ignore[misc]
@click.option("--screening-table", default=None, help="JSON name->score screening table")  # type: ignore[misc]
@click.option("--explain", is_flag=True, help="Include per-category weighted contributions")  # type: ignore[misc]
def evaluate(case_file: str, policy: str | None, screening_table: str | None, explain: bool) -> None:
    """Evaluate one case payload and print the ethics report as JSON."""
    from ethics_engine.engine.factory import build_engine, build_lookup
    from ethics_engine.errors import EthicsEngineError

    settings = _load_settings(policy, screening_table)
    payload = json.loads(Path(case_file).read_text(encoding="utf-8"))
    lookup = build_lookup(settings)
    engine = build_engine(settings, lookup=lookup)

    try:
        (report,) = asyncio.run(_evaluate_all(engine, lookup, [payload]))
    except EthicsEngineError as exc:
        raise click.ClickException(str(exc)) from exc

    output: dict[str, Any] = report.model_dump(mode="json", by_alias=True)
    if explain:
        weights = engine.policy_store.read_policy().weights
        output["contributions"] = engine.aggregator.decompose(
            report.breakdown.category_scores(), weights
        )
    click.echo(json.dumps(output, indent=2))


@cli.command()  # type: ignore[misc]
@click.argument("cases_file", type=click.Path(exists=True, dir_okay=False))  # type: ignore[misc]
@click.option("--output", "output_path", default="outputs/ethics_reports.parquet", help="Parquet summary path")  # type: ignore[misc]
@click.option("--policy", default=None, help="Policy JSON file")  # type: ignore[misc]
@click.option("--screening-table", default=None, help="JSON name->score screening table")  # type: ignore[misc]
def batch(cases_file: str, output_path: str, policy: str | None, screening_table: str | None) -> None:
    """Evaluate a JSON Lines file of case payloads and write a summary table."""
    import polars as pl

    from ethics_engine.engine.factory import build_engine, build_lookup
    from ethics_engine.errors import EthicsEngineError

    settings = _load_settings(policy, screening_table)
    lines = Path(cases_file).read_text(encoding="utf-8").splitlines()
    payloads = [json.loads(line) for line in lines if line.strip()]

    click.echo(f"Evaluating {len(payloads)} cases...")
    lookup = build_lookup(settings)
    engine = build_engine(settings, lookup=lookup)
    try:
        reports = asyncio.run(_evaluate_all(engine, lookup, payloads))
    except EthicsEngineError as exc:
        raise click.ClickException(str(exc)) from exc

    rows = []
    for i, (payload, report) in enumerate(zip(payloads, reports)):
        case_id = payload.get("id") if isinstance(payload, dict) else None
        rows.append(
            {
                "case_id": str(case_id) if case_id is not None else f"case_{i:05d}",
                "overall_score": report.overall_score,
                "overall_flag": report.overall_flag.value,
                **report.breakdown.model_dump(),
                "category_flags": ",".join(f"{f.name}={f.flag.value}" for f in report.flags),
                "degraded_categories": ",".join(report.degraded_categories),
                "requires_manual_review": report.requires_manual_review,
                "timestamp": report.timestamp,
            }
        )

    summary = pl.DataFrame(rows)
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    summary.write_parquet(out)

    click.echo(f"\nResults saved to {out}")
    for flag in ["BLOCK", "CAUTION", "OK"]:
        count = summary.filter(pl.col("overall_flag") == flag).height
        click.echo(f"  {flag}: {count}")
    click.echo(f"  Manual review: {summary.filter(pl.col('requires_manual_review')).height}")


@cli.command()  # type: ignore[misc]
@click.option("--host", default=None, help="Server host")  # type: ignore[misc]
@click.option("--port", default=None, type=int, help="Server port")  # type: ignore[misc]
@click.option("--reload", is_flag=True, help="Enable auto-reload")  # type: ignore[misc]
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from ethics_engine.config.settings import Settings

    api = Settings().api
    uvicorn.run(
        "ethics_engine.api.app:create_app",
        host=host or api.host,
        port=port or api.port,
        reload=reload,
        factory=True,
    )


def run_server() -> None:
    cli(["serve"])


if __name__ == "__main__":
    cli()

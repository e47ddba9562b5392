"""trainchinese CLI: training loop, statistics and maintenance commands."""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Annotated

import typer

from trainchinese.application.config import resolve_config
from trainchinese.interface._common import _load_pool, _resolve_with_overrides

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="trainchinese: spaced-repetition trainer for Chinese vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage trainchinese configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for trainchinese."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    if verbose:
        logging.getLogger("trainchinese").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def train(
    ctx: typer.Context,
    vocabulary_file: Annotated[
        Path | None, typer.Option("--vocabulary", help="Vocabulary text file.")
    ] = None,
    save_file: Annotated[Path | None, typer.Option("--save", help="JSON progress file.")] = None,
    stats_file: Annotated[
        Path | None, typer.Option("--stats", help="Text stats report written after each round.")
    ] = None,
    batch_size: Annotated[int | None, typer.Option(help="Items per review round.")] = None,
    seed: Annotated[int | None, typer.Option(help="Seed for reproducible sessions.")] = None,
    max_ephemeral_words: Annotated[
        int | None, typer.Option(help="Introduce new items while fewer are ephemeral.")
    ] = None,
    max_fleeting_words: Annotated[
        int | None, typer.Option(help="Cap on ephemeral + fleeting items.")
    ] = None,
    max_total_words: Annotated[int | None, typer.Option(help="Cap on due items.")] = None,
):
    """[bold green]Train[/bold green] due vocabulary, introducing new words as you go."""
    from trainchinese.application.session import TrainingSession
    from trainchinese.application.stats import PoolStatsService
    from trainchinese.application.vocabulary import update_pool_from_file
    from trainchinese.domain.ports import SystemClock
    from trainchinese.infrastructure.persistence import (
        JsonKnownItemsRepository,
        write_stats_report,
    )
    from trainchinese.interface.terminal import TerminalTrainer

    config = _resolve_with_overrides(
        vocabulary_file=vocabulary_file,
        save_file=save_file,
        stats_file=stats_file,
        batch_size=batch_size,
        seed=seed,
        max_ephemeral_words=max_ephemeral_words,
        max_fleeting_words=max_fleeting_words,
        max_total_words=max_total_words,
        verbose=1 + ctx.obj["verbose_bonus"] if ctx.obj.get("verbose_bonus") else None,
    )

    clock = SystemClock()
    pool = _load_pool(config)
    if config.vocabulary_file.exists():
        update_pool_from_file(pool, config.vocabulary_file, clock.now())
    else:
        typer.secho(f"Vocabulary file not found: {config.vocabulary_file}", fg="yellow")

    repo = JsonKnownItemsRepository(config.save_file)
    stats_service = PoolStatsService(repo, clock=clock)
    session = TrainingSession(
        pool,
        TerminalTrainer(),
        params=config.training_params(),
        clock=clock,
        rng=random.Random(config.seed),
        batch_size=config.batch_size,
    )

    while True:
        result = session.run_round()

        if result.introduced is not None or result.trained:
            repo.save(pool.known)
            write_stats_report(stats_service.item_rows(pool.known), config.stats_file)

        if result.nothing_to_train:
            typer.echo("No words to train. You can add new words or come back later.")
            break

        if not typer.confirm("\nContinue training?", default=True):
            typer.echo("Training finished.")
            break


@app.command()
def stats(
    save_file: Annotated[Path | None, typer.Option("--save", help="JSON progress file.")] = None,
    vocabulary_file: Annotated[
        Path | None, typer.Option("--vocabulary", help="Vocabulary text file.")
    ] = None,
):
    """Show progress: known/new counts, memory phases and per-task priorities."""
    from trainchinese.application.stats import PoolStatsService
    from trainchinese.application.vocabulary import update_pool_from_file
    from trainchinese.domain.constants import GRADATION_LABELS
    from trainchinese.domain.models import task_to_string
    from trainchinese.domain.ports import SystemClock
    from trainchinese.infrastructure.persistence import JsonKnownItemsRepository

    config = _resolve_with_overrides(save_file=save_file, vocabulary_file=vocabulary_file)
    clock = SystemClock()
    pool = _load_pool(config)
    if config.vocabulary_file.exists():
        update_pool_from_file(pool, config.vocabulary_file, clock.now())

    summary = PoolStatsService(JsonKnownItemsRepository(config.save_file), clock).summarize(pool)

    typer.echo("Statistics:")
    typer.echo(f"Known words: {summary.known}")
    typer.echo(f"New words:   {summary.new}")

    typer.echo("\nWords by memory phase (based on global level):")
    for key, count in summary.gradations.items():
        typer.echo(f"{GRADATION_LABELS[key]:<30} {count}")

    for task in summary.tasks:
        typer.echo(f"\nTask stats: {task_to_string(task.task)}")
        typer.echo(f"Average level: {task.average_level:.2f}")
        typer.echo(f"High priority (>= 1.0): {task.high_priority}")
        typer.echo(f"Medium priority (0.5-1.0): {task.medium_priority}")
        typer.echo(f"Average priority: {task.average_priority:.3f}")


@app.command("import")
def import_cmd(
    vocabulary_file: Annotated[
        Path | None, typer.Argument(help="Vocabulary text file. Defaults to config.")
    ] = None,
    save_file: Annotated[Path | None, typer.Option("--save", help="JSON progress file.")] = None,
):
    """Check a vocabulary file and report what it would add."""
    from trainchinese.application.vocabulary import update_pool_from_file
    from trainchinese.domain.ports import SystemClock

    config = _resolve_with_overrides(vocabulary_file=vocabulary_file, save_file=save_file)
    if not config.vocabulary_file.exists():
        typer.secho(f"Vocabulary file not found: {config.vocabulary_file}", fg="red", err=True)
        raise typer.Exit(1)

    pool = _load_pool(config)
    result = update_pool_from_file(pool, config.vocabulary_file, SystemClock().now())
    typer.echo(f"Known: {len(pool.known)}  New: {result.added}  Context updates: {result.updated}")


@app.command()
def history(
    item_id: Annotated[str, typer.Argument(help="Item id, e.g. hsk1.98.")],
    save_file: Annotated[Path | None, typer.Option("--save", help="JSON progress file.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the review history of one known item."""
    from trainchinese.application.stats import MetricsCalculator
    from trainchinese.domain.models import task_to_string

    config = _resolve_with_overrides(save_file=save_file)
    pool = _load_pool(config)
    item = pool.known.get(item_id)
    if item is None:
        typer.secho(f"Unknown item: {item_id}", fg="red", err=True)
        raise typer.Exit(1)

    calc = MetricsCalculator()
    events = list(calc.iter_review_history(item))
    replay = calc.replay_global_levels(item)

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "id": item.id,
                    "hanzi": item.hanzi,
                    "global_level": item.global_level,
                    "events": [
                        {
                            "task": task_to_string(task),
                            "date_reviewed": e.date_reviewed.isoformat(),
                            "result": e.result,
                            "level_old": e.level_old,
                            "level_new": e.level_new,
                            "priority": e.priority,
                            "memory_strength": e.memory_strength,
                        }
                        for task, e in events
                    ],
                    "global_levels": [
                        {"date": p.date.isoformat(), "level": p.global_level} for p in replay
                    ],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    typer.echo(f"{item.hanzi}  {item.pinyin}  {item.translation}  (global level {item.global_level})")
    if not events:
        typer.secho("No reviews yet.", fg="yellow")
        return
    for task, e in events:
        typer.echo(
            f"  {task_to_string(task):<24} {e.date_reviewed:%Y-%m-%d %H:%M}"
            f"  result={e.result:+d}  level {e.level_old} -> {e.level_new}"
        )
    typer.echo(f"Global level over time: {' '.join(str(p.global_level) for p in replay)}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()

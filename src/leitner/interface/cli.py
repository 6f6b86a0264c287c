"""leitner CLI: scheduling, progress and hint commands."""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from leitner.application.buckets import get_bucket_range, to_bucket_sets
from leitner.application.config import AppConfig, resolve_config
from leitner.application.hints import get_hint
from leitner.application.scheduler import practice, update
from leitner.application.stats.progress_calculator import ProgressCalculator
from leitner.application.stats.service import ProgressService
from leitner.consts import VERSION
from leitner.domain.errors import InvalidInputError
from leitner.infrastructure.state_loader import StudyState, load_study_state

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="leitner: Leitner-box spaced repetition scheduler.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage leitner configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> typer.Exit:
    typer.secho(f"Error: {message}", fg="red", err=True)
    return typer.Exit(2)


def _log_level(verbose: int) -> int:
    """Map a verbosity count to a log level: 0 warnings, 1 info, 2+ debug."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def _load_state(config: AppConfig) -> StudyState:
    if config.state_file is None:
        raise _fail("No state file given. Pass one or set LEITNER_STATE_FILE.")
    if not config.state_file.exists():
        raise _fail(f"State file not found: {config.state_file}")
    try:
        return load_study_state(config.state_file)
    except InvalidInputError as e:
        raise _fail(str(e)) from e


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
    """Global settings for leitner."""
    ctx.ensure_object(dict)
    # Configured verbosity is the baseline; each -v adds one level
    level = resolve_config().verbose + verbose
    ctx.obj["verbose"] = level
    logging.getLogger("leitner").setLevel(_log_level(level))


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Print the leitner version."""
    typer.echo(VERSION)


@app.command()
def due(
    state_file: Annotated[
        Path | None,
        typer.Argument(help="YAML snapshot with buckets and history. Defaults to config."),
    ] = None,
    day: Annotated[int | None, typer.Option(help="Day counter, starting at 1.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List the cards [bold green]due[/bold green] on a given day."""
    config = resolve_config({"state_file": state_file})
    state = _load_state(config)
    day = config.start_day if day is None else day

    try:
        cards = sorted(practice(to_bucket_sets(state.bucket_map), day))
    except InvalidInputError as e:
        raise _fail(str(e)) from e

    if json_output:
        typer.echo(json.dumps({"day": day, "cards": cards}, indent=2))
        return

    typer.echo(f"Day {day}: {len(cards)} cards due")
    for card_id in cards:
        typer.echo(f"  {card_id}")


@app.command("range")
def bucket_range(
    state_file: Annotated[
        Path | None,
        typer.Argument(help="YAML snapshot with buckets and history. Defaults to config."),
    ] = None,
):
    """Show the lowest and highest occupied buckets."""
    config = resolve_config({"state_file": state_file})
    state = _load_state(config)

    try:
        low, high = get_bucket_range(to_bucket_sets(state.bucket_map))
    except InvalidInputError as e:
        raise _fail(str(e)) from e

    if low == -1:
        typer.secho("No cards.", fg="yellow")
    else:
        typer.echo(f"Buckets {low}..{high}")


@app.command()
def progress(
    state_file: Annotated[
        Path | None,
        typer.Argument(help="YAML snapshot with buckets and history. Defaults to config."),
    ] = None,
    retired_bucket: Annotated[
        int | None, typer.Option(min=0, help="Bucket that marks a card as mastered.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summarize learning progress from the practice history."""
    config = resolve_config({"state_file": state_file, "retired_bucket": retired_bucket})
    state = _load_state(config)

    service = ProgressService(
        state.to_repository(),
        calculator=ProgressCalculator(
            window_days=config.improvement_window_days,
            max_difficult=config.max_difficult_cards,
        ),
        retired_bucket=config.retired_bucket,
    )
    stats = service.get_progress()

    if json_output:
        typer.echo(json.dumps(asdict(stats), indent=2))
        return

    typer.echo(f"Cards: {stats.total_cards}  Retired: {stats.retired_cards}")
    typer.echo(f"Average attempts: {stats.average_attempts:.2f}")
    for bucket, (count, share) in enumerate(
        zip(stats.cards_by_bucket, stats.bucket_distribution())
    ):
        typer.echo(f"  Bucket {bucket}: {count} ({share:.0f}%)")

    if stats.most_difficult_cards:
        typer.secho(f"Most difficult: {', '.join(stats.most_difficult_cards)}", fg="yellow")
    if stats.recent_improvements:
        typer.secho(f"Recently improved: {', '.join(stats.recent_improvements)}", fg="green")


@app.command("update")
def update_cmd(
    bucket: Annotated[int, typer.Argument(help="Current bucket of the card.")],
    outcome: Annotated[str, typer.Argument(help="Answer: wrong, hard or easy.")],
    retired_bucket: Annotated[
        int | None, typer.Option(min=0, help="Bucket that marks a card as mastered.")
    ] = None,
):
    """Compute a card's next bucket after an answer."""
    config = resolve_config({"retired_bucket": retired_bucket})
    try:
        next_bucket = update(bucket, outcome.lower(), config.retired_bucket)
    except InvalidInputError as e:
        raise _fail(str(e)) from e
    typer.echo(next_bucket)


@app.command()
def hint(text: Annotated[str, typer.Argument(help="Answer text to mask.")]):
    """Print a hint: the first character followed by underscores."""
    typer.echo(get_hint(text))


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))

"""slicebox command line."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated

import typer
from rich.console import Console

from slicebox.config import Settings, get_settings
from slicebox.demo import build_store, run_demo, to_jsonable
from slicebox.logging_utils import configure_logging

app = typer.Typer(name="slicebox", help="Slices, thunks and a store for asyncio programs", add_completion=False)

DelayOption = Annotated[float | None, typer.Option("--delay", min=0.0, help="Simulated fetch latency in seconds")]
UserIdOption = Annotated[int | None, typer.Option("--user-id", help="User id to fetch")]


def _load_settings(delay: float | None, user_id: int | None) -> Settings:
    settings = get_settings(fetch_delay_seconds=delay, demo_user_id=user_id)
    configure_logging(profile=settings.log_format, level=settings.log_level)
    return settings


@app.command("demo")
def demo(delay: DelayOption = None, user_id: UserIdOption = None) -> None:
    """Run the todo list and user fetch demo, printing every state update."""
    settings = _load_settings(delay, user_id)
    console = Console(highlight=False, soft_wrap=True)
    store = build_store(settings)
    asyncio.run(run_demo(store, user_id=settings.demo_user_id, emit=lambda line: console.print(line, markup=False)))


@app.command("state")
def state(delay: DelayOption = None, user_id: UserIdOption = None) -> None:
    """Run the demo quietly and print the final state tree as JSON."""
    settings = _load_settings(delay, user_id)
    store = build_store(settings)
    result = asyncio.run(run_demo(store, user_id=settings.demo_user_id))
    typer.echo(json.dumps(to_jsonable(result.state), indent=2, ensure_ascii=False))

from __future__ import annotations
import typer, asyncio, logging
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import Iterable, List, Optional
from pydantic import ValidationError
from .filters.config import load_config
from .filters.smoother import Smoother
from .io.replay import read_messages
from .io.simulator import simulate as simulate_session, scripted_path, random_targets
from .runtime.client import GazeClient
from .runtime.events import Gaze, GazeMessage, Request, ws_stream

app = typer.Typer(add_completion=False, help="GazeSmoothKit CLI (gsk)")
logger = logging.getLogger("gazesmoothkit")

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s",
                        handlers=[RichHandler(console=Console(stderr=True), show_path=False)], force=True)

def _client(config: Optional[str]) -> GazeClient:
    return GazeClient(Smoother(load_config(config))) if config else GazeClient()

def _gaze(client: GazeClient, point) -> Gaze:
    raw = client.last_sample
    return Gaze(ts=point.timestamp, x=point.x, y=point.y, raw_x=raw.x, raw_y=raw.y,
                state=client.smoother.state.value)

def _run(client: GazeClient, messages: Iterable[str|GazeMessage]):
    for msg in messages:
        try:
            point = client.handle(msg)
        except ValidationError as e:
            logger.warning("skipping malformed message: %s", e.errors()[0]["msg"])
            continue
        if point is not None:
            yield _gaze(client, point)

@app.command()
def smooth(input: str = typer.Argument("-", help="JSONL message log, '-' for stdin"),
           config: Optional[str] = typer.Option(None, help="YAML smoother config")):
    """
    Replay a recorded message log and print smoothed samples as JSONL.
    """
    client = _client(config)
    for g in _run(client, read_messages(input)):
        typer.echo(g.model_dump_json())

@app.command()
def simulate(targets:int=typer.Option(5), per_target:int=typer.Option(20), noise:float=typer.Option(5.0),
             seed:Optional[int]=typer.Option(None), width:int=1280, height:int=720,
             config:Optional[str]=typer.Option(None), table:bool=typer.Option(False, help="Print a table instead of JSONL")):
    """
    Smooth a synthetic fixation/saccade trace.
    """
    client = _client(config)
    path = scripted_path(random_targets(targets, (width,height), seed=seed), per_target, noise, seed)
    rows = list(_run(client, simulate_session(path)))
    if not table:
        for g in rows: typer.echo(g.model_dump_json())
        return
    t = Table(title=f"{client.device_name}: {len(rows)} samples")
    for col in ("ts","raw x","raw y","x","y","state"): t.add_column(col, justify="right")
    for g in rows:
        t.add_row(str(g.ts), f"{g.raw_x:.1f}", f"{g.raw_y:.1f}", f"{g.x:.1f}", f"{g.y:.1f}", g.state)
    print(t)

@app.command()
def listen(url:str=typer.Option("ws://localhost:8086/"), toggle:bool=typer.Option(False, help="Start tracking on connect, stop it on exit"),
           request:List[Request]=typer.Option([], "--request", "-r", help="Command to send on connect (repeatable)"),
           cursor:bool=typer.Option(False, help="Move the OS cursor"), config:Optional[str]=typer.Option(None)):
    """
    Smooth samples streamed by a running tracker service.
    """
    client = _client(config)
    move = None
    if cursor:
        from .demos.mouse import move_cursor
        move = move_cursor

    opening = list(request) + ([Request.TOGGLE_TRACKING] if toggle else [])
    def closing():
        # undo --toggle if tracking is still on
        return [Request.TOGGLE_TRACKING] if toggle and client.is_tracking else []

    async def consume():
        async for msg in ws_stream(url, opening, closing):
            for g in _run(client, [msg]):
                if move: move(client.location)
                else: typer.echo(g.model_dump_json())

    try:
        asyncio.run(consume())
    except KeyboardInterrupt:
        pass
    except OSError as e:
        print(f"[red]Cannot connect to {url}[/red]: {e}")
        raise typer.Exit(1)

if __name__ == "__main__":
    app()

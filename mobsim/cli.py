#!filepath: mobsim/cli.py
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from mobsim import __version__, init_logging
from mobsim.config.app_config import AppConfig
from mobsim.config.parameters import parse_parameter_string
from mobsim.trace.reader import TraceReader
from mobsim.utils.errors import SimulationError
from mobsim.utils.filesystem import FileSystem
from mobsim.workflows.run_simulation import run_batch, run_simulation

app = typer.Typer(help="Mobility Simulation CLI")


def _load(config: Optional[str], params: Optional[str], overwrite: bool = False) -> AppConfig:
    cfg = AppConfig.load(config)
    if params:
        cfg = cfg.with_params(parse_parameter_string(params))
    if overwrite:
        cfg = AppConfig(log=cfg.log, simulation=cfg.simulation.with_overrides(overwrite=True))
    init_logging(cfg.log)
    return cfg


def _fail(e: Exception) -> typer.Exit:
    print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
    return typer.Exit(code=1)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    params: Optional[str] = typer.Option(None, "--params", "-p", help='"MODEL=RWP,TIME=100,SEED=7"'),
    overwrite: bool = typer.Option(False, "--overwrite", help="replace an existing trace file"),
):
    """
    Run one simulation and write its trace.
    """
    try:
        cfg = _load(config, params, overwrite)
        sim = cfg.simulation
        print(f"[green]Running {sim.model} run={sim.run_name} seed={sim.seed}[/green]")

        result = run_simulation(sim)
    except (SimulationError, FileNotFoundError) as e:
        raise _fail(e)

    table = Table(title=f"run {result.run_name}")
    table.add_column("metric")
    table.add_column("value", justify="right")
    for key, value in result.to_dict().items():
        table.add_row(key, str(value))
    print(table)


@app.command()
def batch(
    seeds: str = typer.Option(..., "--seeds", help="comma separated seeds, e.g. 1,2,3"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="parallel runs"),
    config: Optional[str] = typer.Option(None, "--config", "-c"),
    params: Optional[str] = typer.Option(None, "--params", "-p"),
    report: Optional[str] = typer.Option(None, "--report", help="CSV summary path"),
):
    """
    One independent run per seed, in parallel threads.
    """
    try:
        seed_list = [int(s) for s in seeds.split(",") if s.strip()]
    except ValueError:
        print(f"[red]--seeds must be integers, got {seeds!r}[/red]")
        raise typer.Exit(code=2)

    try:
        cfg = _load(config, params)
        print(f"[blue]Running batch of {len(seed_list)} runs ({cfg.simulation.model})[/blue]")
        df = run_batch(cfg.simulation, seed_list, max_workers=workers, report=report)
    except (SimulationError, FileNotFoundError) as e:
        raise _fail(e)

    print(df[["run_name", "seed", "unique_nodes", "avg_nodes", "avg_node_time", "status"]].to_string(index=False))

    if (df["status"] == "FAILED").any():
        raise typer.Exit(code=1)


@app.command()
def inspect(path: str):
    """
    Print a trace header and check the file size.
    """
    try:
        header = TraceReader.read_header(path)
        TraceReader.verify(path, header)
    except (SimulationError, FileNotFoundError) as e:
        raise _fail(e)

    print(f"[green]{path}[/green] ({FileSystem.format_size(header.file_size)})")
    print(f"nodes={header.node_count} steps={header.duration_steps}")
    print(
        f"mbr=({header.mbr_min_x}, {header.mbr_min_y}) - ({header.mbr_max_x}, {header.mbr_max_y})"
    )


if __name__ == "__main__":
    app()

# python -m mobsim.cli run --params "MODEL=RWP,TIME=100,SEED=7"

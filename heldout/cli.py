#!filepath: heldout/cli.py
import signal
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from heldout import __version__, init_logging
from heldout.config.app_config import AppConfig
from heldout.evaluation.curve import LearningCurve
from heldout.observability.monitor import StandardTaskMonitor
from heldout.reports.learning_curve import LearningCurveReport
from heldout.workflows.periodic_heldout import apply_overrides, run_periodic_heldout

app = typer.Typer(help="Periodic held-out evaluation for online learners")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    config: Path = typer.Argument(..., exists=True, dir_okay=False),
    test_size: Optional[int] = typer.Option(None, "--test-size", "-n"),
    train_size: Optional[int] = typer.Option(None, "--train-size", "-i"),
    train_time: Optional[int] = typer.Option(None, "--train-time", "-t"),
    sample_frequency: Optional[int] = typer.Option(None, "--sample-frequency", "-f"),
    pretrain_size: Optional[int] = typer.Option(None, "--pretrain-size", "-k"),
    cache_test: Optional[bool] = typer.Option(None, "--cache-test/--no-cache-test"),
    dump_file: Optional[Path] = typer.Option(None, "--dump-file", "-d"),
    output_prediction_file: Optional[Path] = typer.Option(
        None, "--output-prediction-file", "-o"
    ),
    ensemble_size: Optional[int] = typer.Option(None, "--ensemble-size"),
    plot: Optional[Path] = typer.Option(None, "--plot"),
    plot_measurement: str = typer.Option(
        "classifications correct (percent)", "--plot-measurement"
    ),
):
    """
    Run one periodic held-out evaluation from a YAML config
    """
    app_cfg = AppConfig.load(str(config))
    init_logging(app_cfg.log)

    task_cfg = apply_overrides(
        app_cfg.task,
        {
            "test_size": test_size,
            "train_size": train_size,
            "train_time": train_time,
            "sample_frequency": sample_frequency,
            "pretrain_size": pretrain_size,
            "cache_test": cache_test,
            "dump_file": dump_file,
            "output_prediction_file": output_prediction_file,
            "prediction_ensemble_size": ensemble_size,
        },
    )
    app_cfg = app_cfg.model_copy(update={"task": task_cfg})

    monitor = StandardTaskMonitor()
    previous = signal.signal(signal.SIGINT, lambda *_: monitor.request_abort())

    print(f"[green]Running periodic held-out evaluation: {config}[/green]")
    try:
        curve = run_periodic_heldout(app_cfg, monitor=monitor, run_name=config.stem)
    finally:
        signal.signal(signal.SIGINT, previous)

    if curve is None:
        print("[yellow]Aborted, no result[/yellow]")
        raise typer.Exit(code=1)

    print(_curve_table(curve))

    if plot is not None:
        LearningCurveReport(plot, plot_measurement).render(curve)
        print(f"[blue]Plot saved to {plot}[/blue]")


def _curve_table(curve: LearningCurve) -> Table:
    table = Table(title=f"Learning curve ({curve.num_entries()} entries)")
    for name in curve.measurement_names():
        table.add_column(name, justify="right")
    for i in range(curve.num_entries()):
        table.add_row(*(f"{v:.4g}" for v in curve.entry(i).values))
    return table


if __name__ == "__main__":
    app()

# python -m heldout.cli run configs/hyperplane.yml --cache-test

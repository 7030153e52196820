"""CLI for the bundled sample pipelines."""

import asyncio
from pathlib import Path

from loguru import logger
import typer
from typing_extensions import Annotated

from orca.config.logging import configure_logging
from orca.containers import container
from orca.pipelines import Task
from orca.samples.basic import CalculationContext, build_basic_orchestrator
from orca.samples.payroll import PayrollContainer, PayrollContext

app = typer.Typer()


@app.command("basic")
def run_basic(
    num1: Annotated[int, typer.Option("--num1", help="First operand.")] = 1,
    num2: Annotated[int, typer.Option("--num2", help="Second operand.")] = 2,
):
    """Runs the arithmetic sample: (num1 + num2) * 10."""
    configure_logging(container.settings())

    def on_started(task: Task[CalculationContext], context: CalculationContext) -> None:
        typer.echo(f"Started {task.name}")

    orchestrator = build_basic_orchestrator(on_started=on_started)
    context = CalculationContext(num1=num1, num2=num2)
    asyncio.run(orchestrator.run(context))

    typer.echo(context.result)


@app.command("payroll")
def run_payroll(
    input_file: Annotated[
        Path,
        typer.Argument(help="Timesheet CSV with 'Rate' and 'Hours' columns."),
    ],
    archive_dir: Annotated[
        Path,
        typer.Option("--archive-dir", "-a", help="Folder the input file is moved to."),
    ] = Path("archive"),
):
    """Runs the payroll sample: load the timesheet, compute the total, archive the file."""
    configure_logging(container.settings())

    payroll_container = PayrollContainer()
    payroll_container.settings.override(container.settings())
    orchestrator = payroll_container.orchestrator()

    context = PayrollContext(input_file=input_file, archive_folder=archive_dir)
    try:
        asyncio.run(orchestrator.run(context))
    except Exception as e:  # noqa: BLE001
        logger.exception(f"Payroll pipeline failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Total payroll: {context.total_payroll:.2f}")

"""Payroll sample: load a CSV timesheet, compute the total payroll, archive the input file.

Tasks receive their logger through constructor injection and are resolved by type from
`PayrollContainer`.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
import shutil
from typing import Any

from dependency_injector import providers
import polars as pl

from orca.containers import Container, orchestrator_provider
from orca.pipelines import CancellationToken, OrchestratorBuilder


@dataclass
class PayrollContext:
    input_file: Path
    archive_folder: Path = field(default_factory=lambda: Path("archive"))
    timesheet: pl.DataFrame | None = None
    total_payroll: float = 0.0


class LoadCsvTask:
    """Reads the timesheet CSV into the context."""

    name = "LoadCsvTask"

    def __init__(self, log: Any) -> None:
        self._log = log

    async def execute(self, context: PayrollContext, token: CancellationToken) -> None:
        timesheet = await asyncio.to_thread(pl.read_csv, context.input_file)
        context.timesheet = timesheet
        self._log.info(f"Loaded {timesheet.height} rows from {context.input_file}")


class ComputePayrollTask:
    """Sums `Rate * Hours` over the loaded timesheet."""

    name = "ComputePayrollTask"

    def __init__(self, log: Any) -> None:
        self._log = log

    async def execute(self, context: PayrollContext, token: CancellationToken) -> None:
        if context.timesheet is None:
            raise ValueError("Timesheet has not been loaded")

        total = context.timesheet.select(
            (pl.col("Rate").cast(pl.Float64) * pl.col("Hours").cast(pl.Float64)).sum()
        ).item()
        context.total_payroll = float(total or 0.0)
        self._log.info(f"Computed total payroll: {context.total_payroll:.2f}")


class ArchiveFileTask:
    """Moves the input file into the archive folder, replacing any previous copy."""

    name = "ArchiveFileTask"

    def __init__(self, log: Any) -> None:
        self._log = log

    async def execute(self, context: PayrollContext, token: CancellationToken) -> None:
        context.archive_folder.mkdir(parents=True, exist_ok=True)
        archive_path = context.archive_folder / context.input_file.name

        archive_path.unlink(missing_ok=True)
        await asyncio.to_thread(shutil.move, context.input_file, archive_path)
        self._log.info(f"[Archive] Moved {context.input_file} -> {archive_path}")


def configure_payroll_pipeline(builder: OrchestratorBuilder[PayrollContext]) -> None:
    builder.add_step(LoadCsvTask).add_step(ComputePayrollTask).add_step(ArchiveFileTask)


class PayrollContainer(Container):
    """Container wiring the payroll tasks and their orchestrator.

    Settings and the logger are inherited from the base `Container`.
    """

    __self__ = providers.Self()

    # --- Tasks ---

    load_csv_task = providers.Factory(LoadCsvTask, log=Container.log)

    compute_payroll_task = providers.Factory(ComputePayrollTask, log=Container.log)

    archive_file_task = providers.Factory(ArchiveFileTask, log=Container.log)

    # --- Orchestrator ---

    orchestrator = orchestrator_provider(
        configure_payroll_pipeline,
        container=__self__,
        settings=Container.settings,
    )

#!/usr/bin/env python
"""
Run the peer-evaluation statistics engine over a CSV and display results.
"""

import json
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from audit_service.core.constants import REDUNDANCY_THRESHOLD
from audit_service.core.data import load_evaluations_csv
from audit_service.core.data_models import Exam, StatisticsRecord
from audit_service.core.exceptions import NoCompletedEvaluationsError
from audit_service.statistics.engine import StatisticsEngine
from audit_service.storage.memory import (
    InMemoryEvaluationStore,
    InMemoryExamStore,
    Stores,
)

BACKEND_DIR = Path(__file__).parent.parent.absolute()
DEFAULT_OUTPUT_DIR = BACKEND_DIR / "reports" / "statistics"

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def print_statistics_table(records: list[StatisticsRecord]) -> None:
    """Pretty-print per-student statistics as a rich Table."""
    table = Table(title="Student Statistics")
    table.add_column("Student", style="bold")
    table.add_column("Scores")
    table.add_column("Average", justify="right")
    table.add_column("SD", justify="right")
    table.add_column("Class Avg", justify="right")
    table.add_column("Flagged", justify="center")

    for r in sorted(records, key=lambda r: r.student):
        class_avg = (
            f"{r.class_average:.2f}" if r.class_average is not None else "-"
        )
        table.add_row(
            r.student,
            ", ".join(f"{m:g}" for m in r.individual_marks),
            f"{r.average:.2f}",
            f"{r.standard_deviation:.2f}",
            class_avg,
            "[red]yes[/red]" if r.was_flagged else "no",
        )

    console.print(table)


def save_report(
    output_dir: Path, exam_id: str, data: dict[str, object]
) -> Path:
    """Save the run summary and records as JSON in output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = output_dir / f"{timestamp}_{exam_id}.json"
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return path


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        help="Path to CSV file with peer evaluations",
    ),
    k: int = typer.Option(
        ...,
        help="Number of evaluators assigned per student",
    ),
    exam_id: str | None = typer.Option(
        None,
        help="Exam to analyse (required if the CSV holds several exams)",
    ),
    generate_tickets: bool = typer.Option(
        False,
        help="Open tickets for flagged students",
    ),
    redundancy_threshold: int = typer.Option(
        REDUNDANCY_THRESHOLD,
        help="Largest k judged against the class average",
    ),
    output_dir: Path | None = typer.Option(
        None,
        help="Directory for JSON report output",
    ),
) -> None:
    """Flag unreliable peer evaluations in a CSV export."""

    # 1. Validate input
    if not input_path.exists():
        console.print(f"[red]File not found: {input_path}[/red]")
        raise typer.Exit(1)

    # 2. Read CSV
    try:
        evaluations = load_evaluations_csv(input_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    exam_ids = sorted({e.exam_id for e in evaluations})
    if exam_id is None:
        if len(exam_ids) != 1:
            console.print(
                f"[red]CSV holds exams {exam_ids}, pass --exam-id[/red]"
            )
            raise typer.Exit(1)
        exam_id = exam_ids[0]

    console.print(
        Panel(
            f"[bold]Statistics Run[/bold]\n\n"
            f"File: [cyan]{input_path}[/cyan]\n"
            f"Exam: [cyan]{exam_id}[/cyan]\n"
            f"Evaluations: [cyan]{len(evaluations)}[/cyan]\n"
            f"k: [cyan]{k}[/cyan]",
            title="Configuration",
        )
    )

    # 3. Run engine against in-memory stores
    stores = Stores(
        exams=InMemoryExamStore([Exam(exam_id=exam_id, k=k)]),
        evaluations=InMemoryEvaluationStore(evaluations),
    )
    engine = StatisticsEngine(
        exams=stores.exams,
        evaluations=stores.evaluations,
        statistics=stores.statistics,
        tickets=stores.tickets,
        users=stores.users,
        batches=stores.batches,
        redundancy_threshold=redundancy_threshold,
    )
    try:
        summary = engine.run(exam_id, generate_tickets=generate_tickets)
    except NoCompletedEvaluationsError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    # 4. Display
    records = stores.statistics.find_by_exam(exam_id)
    print_statistics_table(records)
    console.print(
        f"{summary.flagged_count} of {summary.total_students} "
        "students flagged"
    )
    if generate_tickets:
        console.print(f"Tickets opened: {len(summary.tickets_created)}")

    # 5. Save report
    if output_dir is not None:
        report_path = save_report(
            output_dir,
            exam_id,
            {
                "summary": summary.model_dump(),
                "records": [r.model_dump() for r in records],
                "tickets": [
                    t.model_dump(mode="json")
                    for t in stores.tickets.find_by_exam(exam_id)
                ],
            },
        )
        console.print(f"Report saved: [cyan]{report_path}[/cyan]")


if __name__ == "__main__":
    app()

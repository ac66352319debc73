"""Runplan CLI.

Developer CLI to generate training plans and compile structured workouts
locally, without persistence or a device.
"""

import json
from datetime import date, timedelta
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from runplan.calendar.display import format_duration
from runplan.config.settings import settings
from runplan.core.logger import setup_logger
from runplan.plans.catalog import SUGGESTED_WORKOUT_DAYS, plan_name, timeline_warnings
from runplan.plans.errors import RunPlanError
from runplan.plans.generator import generate_workouts
from runplan.plans.phase import phase_ranges, resolve_phase, total_weeks_between
from runplan.plans.types import FitnessLevel, PlanSpecification, RunningGoal, TimeOfDay, Weekday
from runplan.workouts.compiler import create_interval_workout, create_progressive_run, create_simple_run
from runplan.workouts.exporters.fit_exporter import FitWorkoutExporter
from runplan.workouts.models import IntervalBlock, StepPurpose, StructuredWorkout, WorkoutInterval, WorkoutStep

console = Console()

app = typer.Typer(
    name="runplan",
    help="Runplan CLI - training plan generation and workout compilation",
    add_completion=False,
)


class WorkoutKind(StrEnum):
    SIMPLE = "simple"
    INTERVALS = "intervals"
    PROGRESSIVE = "progressive"


def _parse_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"{option} must be an ISO date (YYYY-MM-DD), got {value!r}") from e


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


@app.command()
def generate(
    goal: RunningGoal = typer.Option(..., "--goal", "-g", help="Running goal"),
    fitness: FitnessLevel = typer.Option(FitnessLevel.BEGINNER, "--fitness", "-f", help="Fitness level"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), default today"),
    end: str | None = typer.Option(None, "--end", help="End date (YYYY-MM-DD)"),
    weeks: int | None = typer.Option(None, "--weeks", "-w", help="Plan length in weeks (instead of --end)"),
    days: list[Weekday] | None = typer.Option(None, "--day", "-d", help="Training weekday (repeatable)"),
    time_of_day: TimeOfDay = typer.Option(TimeOfDay.MORNING, "--time", help="Preferred time of day"),
    race_distance: float | None = typer.Option(None, "--race-distance", help="Race distance in km"),
    race_time: float | None = typer.Option(None, "--race-time", help="Race goal time in minutes"),
    as_json: bool = typer.Option(False, "--json", help="Print workouts as JSON"),
) -> None:
    """Generate a training plan and print its schedule."""
    start_date = _parse_date(start, "--start") if start else date.today()
    if end:
        end_date = _parse_date(end, "--end")
    elif weeks is not None:
        end_date = start_date + timedelta(weeks=weeks)
    else:
        raise typer.BadParameter("Either --end or --weeks is required")

    spec = PlanSpecification(
        goal=goal,
        fitness_level=fitness,
        start_date=start_date,
        end_date=end_date,
        weekday_set=days or SUGGESTED_WORKOUT_DAYS[fitness],
        preferred_time_of_day=time_of_day,
        target_race_distance_km=race_distance,
        target_race_time_sec=race_time * 60 if race_time is not None else None,
    )

    try:
        workouts = generate_workouts(spec)
    except RunPlanError as e:
        console.print(f"[red]Cannot generate plan:[/red] {e}")
        raise typer.Exit(code=1) from e

    if as_json:
        console.print(JSON(json.dumps([workout.model_dump(mode="json") for workout in workouts])))
        return

    total_weeks = total_weeks_between(spec.start_date, spec.end_date)
    phases = ", ".join(f"{phase.value.title()} (weeks {first + 1}-{last + 1})" for phase, first, last in phase_ranges(total_weeks))
    console.print(Panel(f"{total_weeks} weeks · {len(workouts)} workouts\n{phases}", title=plan_name(spec)))
    for warning in timeline_warnings(spec):
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Week", justify="right")
    table.add_column("Phase")
    table.add_column("Workout")
    table.add_column("Duration", justify="right")
    table.add_column("Distance", justify="right")
    table.add_column("Intensity")
    table.add_column("Description")
    for workout in workouts:
        week_index = (workout.date - spec.start_date).days // 7
        table.add_row(
            workout.date.isoformat(),
            str(week_index + 1),
            resolve_phase(total_weeks, week_index).value,
            workout.workout_type.title,
            format_duration(workout.duration_sec),
            f"{workout.distance_km:.1f} km" if workout.distance_km is not None else "-",
            workout.intensity.label,
            workout.description,
        )
    console.print(table)


def _describe_segment(segment: WorkoutStep | IntervalBlock) -> str:
    if isinstance(segment, WorkoutStep):
        return f"{segment.goal.value:g} {segment.goal.unit.value}"
    parts = []
    for step in segment.steps:
        text = f"{step.purpose.value} {step.goal.value:.2f} {step.goal.unit.value}"
        if step.alert is not None:
            text += f" @ {step.alert.low:.2f}-{step.alert.high:.2f} {step.alert.unit.value}"
        parts.append(text)
    return f"{segment.iterations} x [" + ", ".join(parts) + "]"


def _print_structured(workout: StructuredWorkout) -> None:
    table = Table(title=workout.display_name, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Segment")
    table.add_column("Detail")
    for index, segment in enumerate(workout.segments, start=1):
        if segment is workout.warmup:
            label = "Warmup"
        elif segment is workout.cooldown:
            label = "Cooldown"
        else:
            label = "Block"
        table.add_row(str(index), label, _describe_segment(segment))
    console.print(table)


@app.command("compile")
def compile_workout(
    kind: WorkoutKind = typer.Option(WorkoutKind.SIMPLE, "--kind", "-k", help="Workout kind"),
    name: str = typer.Option("", "--name", "-n", help="Workout display name"),
    distance: float = typer.Option(5.0, "--distance", help="Distance in km (simple) or segment distance (progressive)"),
    pace: float = typer.Option(5.5, "--pace", help="Target or base pace in min/km"),
    work_distance: float = typer.Option(0.4, "--work-distance", help="Work interval distance in km"),
    work_pace: float = typer.Option(4.25, "--work-pace", help="Work interval pace in min/km"),
    recovery_distance: float = typer.Option(0.4, "--recovery-distance", help="Recovery interval distance in km"),
    recovery_pace: float = typer.Option(6.25, "--recovery-pace", help="Recovery interval pace in min/km"),
    repeats: int = typer.Option(8, "--repeats", help="Iterations of work and recovery intervals"),
    progressions: int = typer.Option(5, "--progressions", help="Number of progressive segments"),
    pace_increase: float = typer.Option(0.5, "--pace-increase", help="Pace drop per progressive segment"),
    units: str = typer.Option(settings.device_units, "--units", help="imperial or metric"),
    fit_out: Path | None = typer.Option(None, "--fit-out", help="Write the workout as a FIT file"),
) -> None:
    """Compile a structured interval workout."""
    if units not in {"imperial", "metric"}:
        raise typer.BadParameter("--units must be 'imperial' or 'metric'")

    try:
        if kind == WorkoutKind.SIMPLE:
            workout = create_simple_run(name, distance, pace, units=units)
        elif kind == WorkoutKind.INTERVALS:
            workout = create_interval_workout(
                name,
                WorkoutInterval(StepPurpose.WORK, work_distance, (work_pace - 0.25, work_pace + 0.25), repeats),
                WorkoutInterval(StepPurpose.RECOVERY, recovery_distance, (recovery_pace - 0.25, recovery_pace + 0.25), repeats),
                units=units,
            )
        else:
            workout = create_progressive_run(name, distance, pace, progressions, pace_increase, units=units)
    except ValueError as e:
        console.print(f"[red]Cannot compile workout:[/red] {e}")
        raise typer.Exit(code=1) from e

    _print_structured(workout)

    if fit_out is not None:
        written = FitWorkoutExporter().write(workout, fit_out)
        console.print(f"[green]Wrote {written}[/green]")


if __name__ == "__main__":
    app()

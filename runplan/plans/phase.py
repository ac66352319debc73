"""Deterministic phase resolution.

A plan is split into three equal blocks of whole weeks:
Foundation, Development, Peak. Peak absorbs the remainder.

Plans shorter than three weeks have an empty Foundation and Development
block, so every week resolves to Peak.
"""

from datetime import date

from runplan.plans.types import TrainingPhase

PHASE_ORDER: tuple[TrainingPhase, ...] = (
    TrainingPhase.FOUNDATION,
    TrainingPhase.DEVELOPMENT,
    TrainingPhase.PEAK,
)

PHASE_FOCUS: dict[TrainingPhase, str] = {
    TrainingPhase.FOUNDATION: "Build endurance and consistency",
    TrainingPhase.DEVELOPMENT: "Increase distance and intensity",
    TrainingPhase.PEAK: "Fine-tune and prepare for goal",
}


def total_weeks_between(start_date: date, end_date: date) -> int:
    """Whole weeks between two dates (partial trailing week is dropped)."""
    return (end_date - start_date).days // 7


def resolve_phase(total_weeks: int, week_index: int) -> TrainingPhase:
    """Resolve the training phase of a week.

    Args:
        total_weeks: Number of weeks in the plan (>= 1)
        week_index: 0-based week index (< total_weeks)

    Returns:
        TrainingPhase for that week

    Raises:
        ValueError: If total_weeks < 1 or week_index is out of range
    """
    if total_weeks < 1:
        raise ValueError(f"total_weeks must be >= 1, got {total_weeks}")
    if not 0 <= week_index < total_weeks:
        raise ValueError(f"week_index must be in [0, {total_weeks}), got {week_index}")

    phase_length = total_weeks // 3
    if week_index < phase_length:
        return TrainingPhase.FOUNDATION
    if week_index < 2 * phase_length:
        return TrainingPhase.DEVELOPMENT
    return TrainingPhase.PEAK


def phase_ranges(total_weeks: int) -> list[tuple[TrainingPhase, int, int]]:
    """Contiguous (phase, first_week, last_week) ranges of a plan.

    Empty phases are omitted, so a two-week plan yields a single Peak range.
    """
    ranges: list[tuple[TrainingPhase, int, int]] = []
    for week_index in range(total_weeks):
        phase = resolve_phase(total_weeks, week_index)
        if ranges and ranges[-1][0] == phase:
            ranges[-1] = (phase, ranges[-1][1], week_index)
        else:
            ranges.append((phase, week_index, week_index))
    return ranges

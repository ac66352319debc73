"""Runplan - deterministic running training-plan generation.

Turns a runner's goal, fitness level and available weekdays into a dated
multi-week schedule, and compiles individual workouts into structured
interval workouts for device scheduling.
"""

__version__ = "0.1.0"

"""Canonical error types for plan generation and its collaborators.

Generation errors:
- PlanValidationError: the specification cannot produce a plan. Raised
  before any workout is generated.
- UnmappedRuleError: the rule table has no entry for a combination. This
  is a programming error and is never caught by the engine.

Downstream errors (reported to the caller, never retried internally):
- IdentityUnavailableError: no current user to own the plan
- AuthorizationRequiredError: device scheduling is not permitted yet
- PersistenceFailure: remote save or fetch failed
- SchedulingFailure: the device rejected a structured workout
"""


class RunPlanError(Exception):
    """Base class for all runplan errors."""


class PlanValidationError(RunPlanError, ValueError):
    """Raised when a plan specification violates an invariant.

    Attributes:
        code: Error code (e.g., "EMPTY_WEEKDAYS", "INVALID_DATE_RANGE")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class UnmappedRuleError(RunPlanError, LookupError):
    """Raised when the workout rule table has no entry for a combination."""


class IdentityUnavailableError(RunPlanError):
    """Raised when no current user is available to own a plan."""


class AuthorizationRequiredError(RunPlanError):
    """Raised when device scheduling is attempted without authorization.

    Attributes:
        state: The authorization state reported by the device client
    """

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Device scheduling not authorized (state={state})")


class PersistenceFailure(RunPlanError):
    """Raised when the persistence client fails to save or fetch a plan.

    Attributes:
        plan: The already generated plan, when the failure happened while
            storing a new plan (retry with that value, do not regenerate)
    """

    def __init__(self, message: str, plan: object | None = None):
        self.plan = plan
        super().__init__(message)


class SchedulingFailure(RunPlanError):
    """Raised when the device rejects a structured workout.

    Attributes:
        workout: The planned workout the device rejected, when scheduling
            a plan
        scheduled: Number of workouts the device accepted before the failure
        remaining: The rejected workout and every one after it; retry with
            these, the accepted ones are already on the device
    """

    def __init__(
        self,
        message: str,
        workout: object | None = None,
        scheduled: int = 0,
        remaining: tuple = (),
    ):
        self.workout = workout
        self.scheduled = scheduled
        self.remaining = remaining
        super().__init__(message)

class StepTrackingError(Exception):
    """Base error for step tracking failures."""


class StepStateError(StepTrackingError, RuntimeError):
    """Raised when steps are opened, closed or reconciled out of order."""


class StepsAlreadyPublishedError(StepTrackingError, AssertionError):
    """Raised when the steps of a run are published a second time."""

from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterator, Optional, Union

from step_report.tracking.step import StepNode
from step_report.tracking.tracker import StepTracker


def resolve_step_name(
    name: Union[str, Callable],
    args: Optional[tuple] = None,
    kwargs: Optional[dict] = None,
) -> str:
    """
    Resolve a step name, which can either be a string or a callable.

    If `name` is a callable, it is called with `args` and `kwargs`, and the
    result is returned as the resolved step name. If the callable raises an
    exception, the exception is caught and a string describing the exception is
    returned.

    If `name` is a string, it is returned unchanged.

    :param name: The step name to resolve, which can be a string or a callable.
    :param args: The arguments to pass to the callable, if `name` is a callable.
    :param kwargs: The keyword arguments to pass to the callable, if `name` is a callable.
    :return: The resolved step name, which is a string.
    """
    if callable(name):
        try:
            return name(*(args or []), **(kwargs or {}))
        except Exception as e:
            return f"<error evaluating step name: {e}>"
    return name


@contextmanager
def track_step_cm(
    tracker: StepTracker, description: Union[str, Callable]
) -> Iterator[StepNode]:
    step = tracker.open(resolve_step_name(description))
    try:
        yield step
    except BaseException as e:
        tracker.close(step, e)
        raise
    tracker.close(step)


def track_step(tracker: StepTracker, description: Union[str, Callable]):
    """Run the decorated function as a step; a callable description gets its arguments."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            resolved_name = resolve_step_name(description, args=args, kwargs=kwargs)
            step = tracker.open(resolved_name)
            try:
                result = fn(*args, **kwargs)
            except BaseException as e:
                tracker.close(step, e)
                raise
            tracker.close(step)
            return result

        return wrapper

    return decorator

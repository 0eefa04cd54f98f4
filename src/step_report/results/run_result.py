from dataclasses import dataclass, field
from typing import Iterable, Optional

from step_report.tracking.errors import StepsAlreadyPublishedError
from step_report.tracking.step import StepNode, StepStatus, iter_steps


@dataclass
class RunResult:
    """Outcome of one test run: its name, its steps and its final error."""

    test_name: str
    run_error: Optional[BaseException] = None
    _steps: list[StepNode] = field(default_factory=list, init=False, repr=False)
    _published: bool = field(default=False, init=False, repr=False)

    @property
    def steps(self) -> tuple[StepNode, ...]:
        return tuple(self._steps)

    @property
    def published(self) -> bool:
        return self._published

    def publish_steps(self, steps: Iterable[StepNode]) -> None:
        """The step slot is write-once, even when the first write was empty."""
        if self._published:
            raise StepsAlreadyPublishedError(
                f"Steps of test '{self.test_name}' were already published"
            )
        self._steps.extend(steps)
        self._published = True

    def failed_steps(self) -> list[StepNode]:
        return [
            step
            for step in iter_steps(self._steps)
            if step.status == StepStatus.FAILED
        ]

    @property
    def status(self) -> StepStatus:
        if not self._published:
            return StepStatus.PENDING
        if self.run_error is not None:
            return StepStatus.FAILED
        if any(step.status == StepStatus.FAILED for step in self._steps):
            return StepStatus.FAILED
        return StepStatus.SUCCESS

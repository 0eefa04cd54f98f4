import logging
from typing import Optional

from step_report.config.config_dataclass import TrackerConfig
from step_report.results.run_result import RunResult
from step_report.tracking.errors import StepStateError
from step_report.tracking.step import (
    StepNode,
    StepStatus,
    log_step_finished,
    log_step_starting,
)

logger = logging.getLogger(__name__)


class StepTracker:
    """
    Builds the step hierarchy of one test run and numbers its steps.

        open("A")
            open("B"); close(B)
            open("C")
                open("D"); close(D)
            close(C)
        close(A)

    gives A: 1, B: 1.1, C: 1.2, D: 1.2.1. A step opened while another one is
    current becomes its last child, otherwise it is appended to the top-level
    steps. Steps must be closed in reverse order of opening.

    At the end of the run `finalize` fails every step that was left open and
    hands the top-level steps over to the run result.
    """

    def __init__(self, run_result: RunResult, config: Optional[TrackerConfig] = None):
        self.run_result = run_result
        self.config = config or TrackerConfig()
        self._steps: list[StepNode] = []
        self._current: Optional[StepNode] = None
        self._steps_counter = 0
        self._finalized = False

    def current(self) -> Optional[StepNode]:
        return self._current

    @property
    def steps(self) -> tuple[StepNode, ...]:
        return tuple(self._steps)

    @property
    def steps_count(self) -> int:
        return self._steps_counter

    @property
    def finalized(self) -> bool:
        return self._finalized

    def open(self, description: str) -> StepNode:
        self._check_not_finalized(f"open step '{description}'")
        parent = self._current
        if parent is None:
            path: tuple[int, ...] = (len(self._steps) + 1,)
        else:
            path = parent.path + (len(parent.children) + 1,)

        step = StepNode(
            description=description,
            path=path,
            ordinal=self._steps_counter + 1,
            test_name=self.run_result.test_name,
            parent=parent,
        )
        self._steps_counter += 1

        if parent is None:
            self._steps.append(step)
        else:
            parent.add_step(step)
        self._current = step

        logger.log(
            self.config.log_level_number,
            log_step_starting(step, self.config.indent_marker),
        )
        return step

    def close(self, step: StepNode, error: Optional[BaseException] = None) -> None:
        self._check_not_finalized(f"finish step {step.number}")
        current = self._current
        if step is not current:
            raise StepStateError(
                f"Unable to finish step {step.number} '{step.description}' "
                f"because it is not current. "
                f"Current step is {self._describe(current)}. All steps: {self._steps}"
            )

        step.status = StepStatus.SUCCESS if error is None else StepStatus.FAILED
        step.error = error
        self._current = step.parent

        logger.log(
            self.config.log_level_number,
            log_step_finished(step, self.config.indent_marker),
        )

    def finalize(self) -> None:
        """
        Finish the run: fail the steps left open and publish all steps.

        Walking up from the current step, every open step is marked as failed.
        The error of the most recent failed child of the innermost open step
        is given to that step and all its open ancestors.

        :raises StepStateError: An open step has no failed child explaining
            why it never finished (unless the config attaches an error instead).
            The tracker is unusable afterwards and nothing is published.
        :raises StepsAlreadyPublishedError: The run result already holds steps.
        """
        step = self._current
        error: Optional[BaseException] = None

        while step is not None:
            step.status = StepStatus.FAILED

            if error is None:
                try:
                    error = self._last_failed_child_error(step)
                except StepStateError:
                    # the tree is half reconciled, it must not be closed into
                    self._current = None
                    self._finalized = True
                    raise

            step.error = error
            logger.warning(
                "Step %s '%s' was never finished, marked as failed: %r",
                step.number,
                step.description,
                error,
            )
            step = step.parent

        self._current = None
        self._finalized = True

        self.run_result.publish_steps(self._steps)
        logger.debug(
            "Published %d top-level steps (%d in total) for test '%s'",
            len(self._steps),
            self._steps_counter,
            self.run_result.test_name,
        )

    def record_run_error(self, error: Optional[BaseException] = None) -> None:
        """Store the final error of the run, raised outside of any step."""
        self.run_result.run_error = error

    def _last_failed_child_error(self, step: StepNode) -> BaseException:
        failed_child = next(
            (
                child
                for child in reversed(step.children)
                if child.status == StepStatus.FAILED
            ),
            None,
        )
        if failed_child is not None and failed_child.error is not None:
            return failed_child.error

        unexplained = StepStateError(
            f"Unable to find error to finish failed step {step.number} "
            f"'{step.description}'. Check all steps {self._steps}"
        )
        if self.config.unexplained_open_step == "attach":
            return unexplained
        raise unexplained

    def _check_not_finalized(self, action: str) -> None:
        if self._finalized:
            raise StepStateError(
                f"Unable to {action}: steps of test "
                f"'{self.run_result.test_name}' are already finalized"
            )

    @staticmethod
    def _describe(step: Optional[StepNode]) -> str:
        if step is None:
            return "none"
        return f"{step.number} '{step.description}'"

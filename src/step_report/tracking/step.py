import weakref
from enum import Enum
from typing import Iterable, Iterator, Optional


class StepStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class StepNode:
    """
    A single step of a test run.

    The identity of a step (description, path, ordinal) is fixed when the
    tracker creates it. Status, error and children are filled in while the
    run goes on. The parent is held through a weak reference: a step is
    owned by the list it was appended to, never by its children.
    """

    def __init__(
        self,
        description: str,
        path: tuple[int, ...],
        ordinal: int,
        test_name: str = "",
        parent: Optional["StepNode"] = None,
    ):
        if not description:
            raise ValueError("Step must have a description")
        if not path or any(position < 1 for position in path):
            raise ValueError(f"Invalid step path: {path}")
        if ordinal < 1:
            raise ValueError(f"Invalid step ordinal: {ordinal}")

        self._description = description
        self._path = tuple(path)
        self._ordinal = ordinal
        self._test_name = test_name
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._children: list[StepNode] = []
        self.status = StepStatus.PENDING
        self.error: Optional[BaseException] = None

    @property
    def description(self) -> str:
        return self._description

    @property
    def path(self) -> tuple[int, ...]:
        return self._path

    @property
    def number(self) -> str:
        return ".".join(str(position) for position in self._path)

    @property
    def level(self) -> int:
        return len(self._path)

    @property
    def ordinal(self) -> int:
        return self._ordinal

    @property
    def test_name(self) -> str:
        return self._test_name

    @property
    def parent(self) -> Optional["StepNode"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> tuple["StepNode", ...]:
        return tuple(self._children)

    def add_step(self, step: "StepNode") -> None:
        self._children.append(step)

    def _repr(self, indent: int = 0) -> str:
        indent_str = "  " * indent
        rep = (
            f"{indent_str}{self.number} {self.description}: "
            f"Step(ordinal={self.ordinal}, status={self.status.value})"
        )
        for substep in self._children:
            rep += f"\n{substep._repr(indent + 1)}"
        return rep

    def __repr__(self) -> str:
        return self._repr()


def iter_steps(steps: Iterable[StepNode]) -> Iterator[StepNode]:
    """Walk the steps and all their descendants depth first, in creation order."""
    for step in steps:
        yield step
        yield from iter_steps(step.children)


def find_step(steps: Iterable[StepNode], number: str) -> Optional[StepNode]:
    for step in steps:
        if step.number == number:
            return step
        # numbers are prefixes of their descendants' numbers
        if number.startswith(step.number + "."):
            return find_step(step.children, number)
    return None


def indent_str(indent: int, marker: str = "===") -> str:
    return marker * indent


def log_step_starting(step: StepNode, indent_marker: str = "===") -> str:
    prefix = indent_str(step.level - 1, indent_marker)
    return f"{prefix}  ▶️  {step.number} {step.description}"


def log_step_finished(step: StepNode, indent_marker: str = "===") -> str:
    prefix = indent_str(step.level - 1, indent_marker)
    emoji = "✅" if step.status == StepStatus.SUCCESS else "❌"
    return f"{prefix}  {emoji} {step.number} {step.description}"

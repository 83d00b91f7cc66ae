"""Generic multi-step wizard engine.

A wizard is a table of steps keyed by integer id. Each step names the
fields it edits, a pure validator ``(fields) -> {field: message}`` and a
transition ``(fields) -> next step id``. The step without a transition is
the terminal (summary) step; arriving there runs the wizard's calculation.

The machine itself holds no session data. Every user session owns a
WizardState, which is passed in to each operation and mutated in place.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..schemas import AWWResult, CommutedValueResult

logger = logging.getLogger(__name__)

Fields = Mapping[str, str]
Validator = Callable[[Fields], Dict[str, str]]
Transition = Callable[[Fields], int]
Result = Union[AWWResult, CommutedValueResult]


class WizardPreconditionError(Exception):
    """Raised when a calculation is requested for a path that did not validate."""
    pass


def no_errors(fields: Fields) -> Dict[str, str]:
    return {}


def goto(step_id: int) -> Transition:
    """Unconditional transition."""
    return lambda fields: step_id


def branch_on(field_name: str, targets: Mapping[str, int], default: Optional[int] = None) -> Transition:
    """Transition picked by the value of one field."""
    def transition(fields: Fields) -> int:
        value = (fields.get(field_name) or "").strip()
        if value in targets:
            return targets[value]
        if default is None:
            raise KeyError(f"No branch for {field_name}={value!r}")
        return default
    return transition


@dataclass(frozen=True)
class Step:
    """One wizard step."""

    id: int
    name: str
    title: Union[str, Callable[[Fields], str]]
    fields: Tuple[str, ...] = ()
    validate: Validator = no_errors
    next: Optional[Transition] = None  # None marks the terminal step
    description: Union[str, Callable[[Fields], str]] = ""
    options: Tuple[Tuple[str, str], ...] = ()  # (value, label) for choice steps

    @property
    def terminal(self) -> bool:
        return self.next is None

    def heading(self, fields: Fields) -> str:
        if callable(self.title):
            return self.title(fields)
        return self.title

    def describe(self, fields: Fields) -> str:
        if callable(self.description):
            return self.description(fields)
        return self.description


class WizardState(BaseModel):
    """Per-session wizard state. Serialisable with ``model_dump(mode="json")``."""

    model_config = ConfigDict(extra="forbid")

    wizard: str
    current_step: int = 1
    fields: Dict[str, str] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
    results: Optional[Annotated[Result, Field(discriminator="kind")]] = None
    history: List[int] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


@dataclass
class WizardMachine:
    """Step table plus the operations that move a WizardState through it."""

    name: str
    steps: Dict[int, Step]
    seed: Callable[[], Dict[str, str]]
    calculate: Callable[[Fields], Result]
    initial_step: int = 1
    field_names: Tuple[str, ...] = field(init=False)

    def __post_init__(self):
        if self.initial_step not in self.steps:
            raise ValueError(f"{self.name}: initial step {self.initial_step} is not defined")
        terminals = [s.id for s in self.steps.values() if s.terminal]
        if len(terminals) != 1:
            raise ValueError(f"{self.name}: expected exactly one terminal step, found {terminals}")
        names = []
        for step in self.steps.values():
            for name in step.fields:
                if name not in names:
                    names.append(name)
        self.field_names = tuple(names)

    @classmethod
    def from_steps(cls, name: str, steps: Iterable[Step], seed, calculate, initial_step: int = 1) -> "WizardMachine":
        return cls(name=name, steps={s.id: s for s in steps}, seed=seed,
                   calculate=calculate, initial_step=initial_step)

    @property
    def terminal_step(self) -> int:
        return next(s.id for s in self.steps.values() if s.terminal)

    # --- Session lifecycle ---

    def start(self) -> WizardState:
        """Fresh session seeded with default values."""
        return WizardState(wizard=self.name, current_step=self.initial_step, fields=self.seed())

    def reset(self, state: WizardState) -> None:
        """Restore seed defaults, return to the first step, clear everything else."""
        state.fields = self.seed()
        state.current_step = self.initial_step
        state.errors = {}
        state.results = None
        state.history = []

    def step_for(self, state: WizardState) -> Step:
        self._check_state(state)
        return self.steps[state.current_step]

    # --- Field edits ---

    def set_field(self, state: WizardState, name: str, value: Optional[str]) -> None:
        """Edit a field. Clears that field's error and any computed results.

        Values are stored with surrounding whitespace removed, the form the
        validators and transitions compare against.
        """
        self._check_state(state)
        if name not in self.field_names:
            raise KeyError(f"{self.name} has no field {name!r}")
        state.fields[name] = "" if value is None else str(value).strip()
        state.errors.pop(name, None)
        state.results = None

    def set_fields(self, state: WizardState, values: Mapping[str, Optional[str]]) -> None:
        for name, value in values.items():
            self.set_field(state, name, value)

    # --- Validation ---

    def validate_step(self, step_id: int, fields: Fields) -> Dict[str, str]:
        return dict(self.steps[step_id].validate(fields))

    def validate_current(self, state: WizardState) -> bool:
        """Run the current step's validator, storing its errors on the state."""
        state.errors = self.validate_step(state.current_step, state.fields)
        return not state.errors

    # --- Navigation ---

    def preview_next(self, state: WizardState) -> Optional[int]:
        """Step a Next button would move to (None on the terminal step)."""
        step = self.step_for(state)
        if step.terminal:
            return None
        try:
            return step.next(state.fields)
        except KeyError:
            return None

    def preview_previous(self, state: WizardState) -> Optional[int]:
        """Step a Back button would return to (None on the first step)."""
        return state.history[-1] if state.history else None

    def next_step(self, state: WizardState) -> bool:
        """Advance if the current step validates. Returns True if it moved."""
        step = self.step_for(state)
        if step.terminal:
            return False
        if not self.validate_current(state):
            logger.debug(f"{self.name}: step {step.id} ({step.name}) blocked by {sorted(state.errors)}")
            return False

        target = step.next(state.fields)
        if target not in self.steps:
            raise KeyError(f"{self.name}: step {step.id} routed to undefined step {target}")

        state.history.append(step.id)
        state.current_step = target
        logger.debug(f"{self.name}: step {step.id} ({step.name}) -> {target} ({self.steps[target].name})")

        if self.steps[target].terminal:
            state.results = self.run_calculation(state)
        return True

    def previous_step(self, state: WizardState) -> bool:
        """Return to the step actually visited before. Never blocked by validation."""
        self._check_state(state)
        if not state.history:
            return False
        state.current_step = state.history.pop()
        state.errors = {}
        return True

    # --- Calculation ---

    def run_calculation(self, state: WizardState) -> Result:
        """Run the calculation for a session that reached the terminal step.

        Raises:
            WizardPreconditionError: If the session is not on the terminal
                step or any visited step fails validation
        """
        if state.current_step != self.terminal_step or not state.history:
            raise WizardPreconditionError(
                f"{self.name}: calculation requested from step {state.current_step}, "
                f"not the summary step"
            )
        for step_id in state.history:
            errors = self.validate_step(step_id, state.fields)
            if errors:
                raise WizardPreconditionError(
                    f"{self.name}: step {step_id} ({self.steps[step_id].name}) has errors: {errors}"
                )
        return self.calculate(state.fields)

    def run(self, values: Mapping[str, Optional[str]]) -> WizardState:
        """Drive a fresh session with ``values`` as far as validation allows.

        Returns the final state: on the terminal step with results, or
        stopped on the first step whose validator reported errors.
        """
        state = self.start()
        self.set_fields(state, {k: v for k, v in values.items() if k in self.field_names})
        for _ in range(len(self.steps)):
            if not self.next_step(state):
                break
        return state

    def _check_state(self, state: WizardState) -> None:
        if state.wizard != self.name:
            raise ValueError(f"State belongs to wizard {state.wizard!r}, not {self.name!r}")
        if state.current_step not in self.steps:
            raise ValueError(f"{self.name}: unknown step {state.current_step}")

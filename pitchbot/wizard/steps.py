"""
Step definitions — the declarative shape of a booking flow.

A `ServiceFlowConfig` is an ordered sequence of `StepDefinition`s plus the
typed form model the steps fill in, the payload builder handed to the
Booking API and the summary shown on the review step and after checkout.

Flows are checked when they are built: a malformed flow raises
`FlowConfigError` at import time instead of misbehaving in a chat.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from pydantic import BaseModel

from pitchbot.wizard.catalog import Option
from pitchbot.wizard.validators import FIELD_RULES


class FlowConfigError(Exception):
    """Raised for a flow definition that breaks the step-sequence rules."""


class ServiceType(str, Enum):
    FIELD_RENTAL = "field_rental"
    LEAGUE       = "league"
    PICKUP       = "pickup"
    TRAINING     = "training"
    CAMP         = "camp"
    BIRTHDAY     = "birthday"


class StepKind(str, Enum):
    SELECTION = "selection"   # what is being booked
    DETAILS   = "details"     # date/time, player or camper details, preferences
    CONTACT   = "contact"     # personal details; regulated fields checked on advance
    REVIEW    = "review"      # read-only summary
    PAYMENT   = "payment"     # simulated card checkout


class InputKind(str, Enum):
    TEXT   = "text"
    CHOICE = "choice"
    MULTI  = "multi"


@dataclass(frozen=True)
class FlowContext:
    """Per-session inputs for derived options: the session's today and its seed."""

    today: date
    token: str

    def rng(self, purpose: str) -> random.Random:
        return random.Random(f"{self.token}:{purpose}")


OptionsProvider = Callable[[BaseModel, FlowContext], List[Option]]
FormCheck = Callable[[BaseModel, FlowContext], bool]


@dataclass(frozen=True)
class FieldInput:
    name: str
    label: str
    kind: InputKind = InputKind.TEXT
    options: Optional[OptionsProvider] = None
    optional: bool = False
    # Only offered when this predicate holds (e.g. youth gender for youth leagues)
    visible: Optional[Callable[[BaseModel], bool]] = None

    def is_visible(self, form: BaseModel) -> bool:
        return self.visible is None or self.visible(form)


def is_present(value: Any) -> bool:
    """Presence check used by every step: non-empty strings and lists, any number."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, set)):
        return len(value) > 0
    return True


@dataclass(frozen=True)
class StepDefinition:
    number: int
    label: str
    kind: StepKind
    required_fields: Tuple[str, ...] = ()
    inputs: Tuple[FieldInput, ...] = ()
    check: Optional[FormCheck] = None

    @property
    def validated_fields(self) -> Tuple[str, ...]:
        """Regulated fields whose format is enforced when leaving this step."""
        if self.kind not in (StepKind.CONTACT, StepKind.PAYMENT):
            return ()
        names = [f.name for f in self.inputs] + list(self.required_fields)
        return tuple(dict.fromkeys(n for n in names if n in FIELD_RULES))

    def required_for(self, form: BaseModel) -> Tuple[str, ...]:
        """Required fields, plus visible non-optional inputs the form currently shows."""
        names = list(self.required_fields)
        for inp in self.inputs:
            if not inp.optional and inp.is_visible(form) and inp.name not in names:
                names.append(inp.name)
        return tuple(names)

    def is_satisfied(self, form: BaseModel, ctx: FlowContext) -> bool:
        if self.kind is StepKind.REVIEW:
            return True
        if not all(is_present(getattr(form, name)) for name in self.required_for(form)):
            return False
        return self.check is None or self.check(form, ctx)


@dataclass
class BookingSummary:
    """Who / what / when / price, for the review step and the confirmation."""

    title: str
    who: str
    what: str
    when: str
    total_price: int
    details: List[str] = field(default_factory=list)
    reference: Optional[str] = None


PayloadBuilder = Callable[[BaseModel, FlowContext], Dict[str, Any]]
Summarizer = Callable[[BaseModel, FlowContext], BookingSummary]


@dataclass(frozen=True)
class ServiceFlowConfig:
    service_type: ServiceType
    title: str
    steps: Tuple[StepDefinition, ...]
    form_model: Type[BaseModel]
    build_payload: PayloadBuilder
    summarize: Summarizer
    # Changing the key field clears the listed fields
    dependents: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    emoji: str = "⚽"

    def __post_init__(self) -> None:
        _check_flow(self)

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def step(self, number: int) -> StepDefinition:
        if not 1 <= number <= self.total_steps:
            raise IndexError(f"{self.service_type.value} has no step {number}")
        return self.steps[number - 1]

    def new_form(self) -> BaseModel:
        return self.form_model()


def _check_flow(flow: ServiceFlowConfig) -> None:
    steps: Sequence[StepDefinition] = flow.steps
    name = flow.service_type.value

    if len(steps) not in (4, 5):
        raise FlowConfigError(f"{name}: a flow has 4 or 5 steps, got {len(steps)}")
    if [s.number for s in steps] != list(range(1, len(steps) + 1)):
        raise FlowConfigError(f"{name}: step numbers must run 1..{len(steps)}")
    if steps[0].kind is not StepKind.SELECTION:
        raise FlowConfigError(f"{name}: the first step must be a selection step")
    if steps[-1].kind is not StepKind.PAYMENT:
        raise FlowConfigError(f"{name}: the last step must be the payment step")
    for i, s in enumerate(steps):
        if s.kind is StepKind.REVIEW and i != len(steps) - 2:
            raise FlowConfigError(f"{name}: review must come right before payment")
        if s.kind is StepKind.PAYMENT and i != len(steps) - 1:
            raise FlowConfigError(f"{name}: only the last step may be a payment step")
        if s.kind is not StepKind.REVIEW and not (s.required_fields or s.inputs or s.check):
            raise FlowConfigError(f"{name}: step {s.number} has nothing to check")

        known = flow.form_model.model_fields
        for f in list(s.required_fields) + [inp.name for inp in s.inputs]:
            if f not in known:
                raise FlowConfigError(f"{name}: step {s.number} names unknown field {f!r}")

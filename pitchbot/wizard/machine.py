"""
BookingWizard — one generic step machine driven by a ServiceFlowConfig.

State lives on the instance (current step, completed steps, furthest step
reached, the typed form, per-field validation errors, the submitting flag)
and round-trips through `to_state()` / `from_state()` so a chat's wizard can
be kept in the aiogram FSM storage between updates.

Transitions:
    advance()    current step satisfied (+ regulated fields valid) -> next step
    retreat()    one step back, never below 1
    jump_to(n)   any step up to the furthest one reached
"""
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Set

from pydantic import BaseModel

from pitchbot.wizard.catalog import Option
from pitchbot.wizard.flows import get_flow
from pitchbot.wizard.formatters import (
    format_card_expiry,
    format_card_number,
    format_cvv,
    format_phone,
    format_zip_code,
)
from pitchbot.wizard.steps import (
    BookingSummary,
    FieldInput,
    FlowContext,
    ServiceFlowConfig,
    ServiceType,
    StepDefinition,
    is_present,
)
from pitchbot.wizard.validators import check_field

logger = logging.getLogger(__name__)

# Raw keystrokes for these fields are shaped before they reach the form
FORMATTERS: Dict[str, Callable[[str, str], str]] = {
    "phone":           format_phone,
    "emergency_phone": format_phone,
    "card_number":     format_card_number,
    "card_expiry":     format_card_expiry,
    "card_cvv":        format_cvv,
    "billing_zip":     format_zip_code,
}


class BookingWizard:
    def __init__(
        self,
        flow: ServiceFlowConfig,
        *,
        today: Optional[date] = None,
        token: Optional[str] = None,
    ) -> None:
        self.flow = flow
        self.today = today or date.today()
        self._initial_state(token)

    @classmethod
    def for_service(cls, service_type: ServiceType | str, **kwargs: Any) -> "BookingWizard":
        return cls(get_flow(service_type), **kwargs)

    def _initial_state(self, token: Optional[str] = None) -> None:
        self.current_step = 1
        self.max_step_reached = 1
        self.completed_steps: Set[int] = set()
        self.form: BaseModel = self.flow.new_form()
        self.validation_errors: Dict[str, str] = {}
        self.is_submitting = False
        self.token = token or uuid.uuid4().hex

    # ── Read-only views ───────────────────────────────────────────────────────

    @property
    def service_type(self) -> ServiceType:
        return self.flow.service_type

    @property
    def total_steps(self) -> int:
        return self.flow.total_steps

    @property
    def current(self) -> StepDefinition:
        return self.flow.step(self.current_step)

    @property
    def context(self) -> FlowContext:
        return FlowContext(today=self.today, token=self.token)

    @property
    def is_final_step(self) -> bool:
        return self.current_step == self.total_steps

    @property
    def progress_percentage(self) -> float:
        return (self.current_step - 1) / (self.total_steps - 1) * 100

    def is_complete(self, step: int) -> bool:
        return step in self.completed_steps

    def can_jump_to(self, step: int) -> bool:
        return 1 <= step <= self.max_step_reached

    def visible_inputs(self) -> List[FieldInput]:
        return [inp for inp in self.current.inputs if inp.is_visible(self.form)]

    def options_for(self, inp: FieldInput) -> List[Option]:
        if inp.options is None:
            return []
        return inp.options(self.form, self.context)

    def missing_fields(self) -> List[str]:
        """Required fields of the current step that are still empty."""
        return [
            name for name in self.current.required_for(self.form)
            if not is_present(getattr(self.form, name))
        ]

    # ── Transitions ───────────────────────────────────────────────────────────

    def validate_step(self) -> bool:
        """
        Full validation pass over the current step's regulated fields.
        Failing fields get an error entry, passing ones lose theirs.
        """
        ok = True
        for name in self.current.validated_fields:
            error = check_field(name, getattr(self.form, name), self.today)
            if error:
                self.validation_errors[name] = error
                ok = False
            else:
                self.validation_errors.pop(name, None)
        return ok

    def advance(self) -> bool:
        """
        Leave the current step if it is satisfied and its regulated fields are
        valid. On the final step nothing moves: a True result means the
        booking is ready to submit.
        """
        step = self.current
        valid = self.validate_step()
        if not valid or not step.is_satisfied(self.form, self.context):
            logger.debug(
                "%s: step %s blocked (errors=%s)",
                self.service_type.value, step.number, sorted(self.validation_errors),
            )
            return False

        self.completed_steps.add(step.number)
        if self.current_step < self.total_steps:
            self.current_step += 1
            self.max_step_reached = max(self.max_step_reached, self.current_step)
        return True

    def first_unsatisfied_step(self) -> Optional[int]:
        for step in self.flow.steps:
            if not step.is_satisfied(self.form, self.context):
                return step.number
        return None

    def can_submit(self) -> bool:
        """
        On the payment step, payment fields valid, and every earlier step
        still satisfied (a later edit may have cleared one of them).
        """
        if not self.is_final_step:
            return False
        valid = self.validate_step()
        return valid and self.first_unsatisfied_step() is None

    def retreat(self) -> bool:
        if self.current_step <= 1:
            return False
        self.current_step -= 1
        return True

    def jump_to(self, step: int) -> bool:
        if not self.can_jump_to(step):
            return False
        self.current_step = step
        return True

    def reset(self) -> None:
        """Back to the initial state under a fresh session token."""
        self._initial_state()

    # ── Field updates ─────────────────────────────────────────────────────────

    def update_field(self, name: str, value: Any) -> None:
        """
        Merge one value into the form. A field's error entry is dropped once the
        new value passes its validator; changing a parent field clears the
        fields that depend on it.
        """
        if name not in self.flow.form_model.model_fields:
            raise ValueError(f"{self.service_type.value} form has no field {name!r}")
        previous = getattr(self.form, name)
        setattr(self.form, name, value)
        current = getattr(self.form, name)

        dependents = self.flow.dependents.get(name, ())
        if current != previous and dependents:
            for dependent in dependents:
                default = self.flow.form_model.model_fields[dependent].get_default(
                    call_default_factory=True
                )
                setattr(self.form, dependent, default)
                self.validation_errors.pop(dependent, None)
            self._rewind_progress()

        if name in self.validation_errors and check_field(name, current, self.today) is None:
            del self.validation_errors[name]

    def _rewind_progress(self) -> None:
        # Steps past the first unsatisfied one can no longer be reached by jumping
        first = self.first_unsatisfied_step()
        if first is None or first >= self.max_step_reached:
            return
        self.completed_steps = {n for n in self.completed_steps if n < first}
        self.max_step_reached = max(first, self.current_step)

    def input_field(self, name: str, raw: str) -> Any:
        """Typed text for a field: formatted against the previous value, then merged."""
        formatter = FORMATTERS.get(name)
        if formatter is not None:
            value = formatter(raw, getattr(self.form, name))
        else:
            value = raw.strip()
        self.update_field(name, value)
        return getattr(self.form, name)

    def choose(self, name: str, value: str) -> None:
        """Single choice; picking the selected value again deselects it."""
        if str(getattr(self.form, name)) == value:
            default = self.flow.form_model.model_fields[name].get_default(call_default_factory=True)
            self.update_field(name, default)
        else:
            self.update_field(name, value)

    def toggle_option(self, name: str, value: str) -> None:
        """Add or remove one value of a multi-select field."""
        selected = list(getattr(self.form, name))
        if value in selected:
            selected.remove(value)
        else:
            selected.append(value)
        self.update_field(name, selected)

    # ── Submission helpers ────────────────────────────────────────────────────

    def build_payload(self) -> Dict[str, Any]:
        return self.flow.build_payload(self.form, self.context)

    def summary(self) -> BookingSummary:
        return self.flow.summarize(self.form, self.context)

    # ── Persistence (FSM data) ────────────────────────────────────────────────

    def to_state(self) -> Dict[str, Any]:
        return {
            "service": self.service_type.value,
            "current_step": self.current_step,
            "max_step": self.max_step_reached,
            "completed": sorted(self.completed_steps),
            "form": self.form.model_dump(),
            "errors": dict(self.validation_errors),
            "token": self.token,
            "opened_on": self.today.isoformat(),
            "is_submitting": self.is_submitting,
        }

    @classmethod
    def from_state(cls, data: Dict[str, Any]) -> "BookingWizard":
        wizard = cls.for_service(
            data["service"],
            today=date.fromisoformat(data["opened_on"]),
            token=data["token"],
        )
        wizard.current_step = data["current_step"]
        wizard.max_step_reached = data["max_step"]
        wizard.completed_steps = set(data["completed"])
        wizard.form = wizard.flow.form_model.model_validate(data["form"])
        wizard.validation_errors = dict(data["errors"])
        wizard.is_submitting = data["is_submitting"]
        return wizard

"""
Keyboards for the customer booking wizard.

A step screen lists the step's visible inputs: text fields as edit
buttons, single choices as option grids (collapsed to one button once a
value is picked, unless re-opened), multi-selects as toggle grids. Below
them sit the step navigation row and the jump bar of reachable steps.
"""
from typing import List, Optional

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from pitchbot.keyboards.callbacks import MainMenuCb, ServiceCb, WizardCb
from pitchbot.models.models import Booking
from pitchbot.wizard import FLOWS, BookingWizard, FieldInput, InputKind, StepKind
from pitchbot.wizard.catalog import Option
from pitchbot.wizard.steps import is_present

SELECTED = "✅"


def service_list_kb() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    for flow in FLOWS.values():
        builder.row(InlineKeyboardButton(
            text=f"{flow.emoji} {flow.title}",
            callback_data=ServiceCb(service=flow.service_type.value).pack(),
        ))
    builder.row(InlineKeyboardButton(text="🔙 Back", callback_data=MainMenuCb(action="main").pack()))
    return builder.as_markup()


def display_value(wizard: BookingWizard, inp: FieldInput) -> str:
    """Human-readable current value of an input ("" when unset)."""
    value = getattr(wizard.form, inp.name)
    if not is_present(value):
        return ""
    labels = {o.value: o.label for o in wizard.options_for(inp)}
    if isinstance(value, list):
        return ", ".join(labels.get(v, v) for v in value)
    return labels.get(str(value), str(value))


def _row_width(inp: FieldInput, options: List[Option]) -> int:
    if inp.name == "day":
        return 7
    longest = max((len(o.label) for o in options), default=0)
    if longest > 18:
        return 1
    return 2 if longest > 9 else 4


def _option_rows(
    builder: InlineKeyboardBuilder,
    wizard: BookingWizard,
    inp: FieldInput,
    options: List[Option],
) -> None:
    current = getattr(wizard.form, inp.name)
    chosen = {str(v) for v in current} if isinstance(current, list) else {str(current)}
    action = "toggle" if inp.kind is InputKind.MULTI else "choose"

    buttons = [
        InlineKeyboardButton(
            text=f"{SELECTED} {o.label}" if o.value in chosen else o.label,
            callback_data=WizardCb(action=action, field=inp.name, value=o.value).pack(),
        )
        for o in options
    ]
    width = _row_width(inp, options)
    for i in range(0, len(buttons), width):
        builder.row(*buttons[i:i + width])


def step_kb(wizard: BookingWizard, open_field: Optional[str] = None) -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    step = wizard.current

    for inp in wizard.visible_inputs():
        shown = display_value(wizard, inp)
        tag = "" if not inp.optional else " (optional)"

        if inp.kind is InputKind.TEXT:
            builder.row(InlineKeyboardButton(
                text=f"✏️ {inp.label}: {shown}" if shown else f"✏️ {inp.label}{tag}",
                callback_data=WizardCb(action="input", field=inp.name).pack(),
            ))
            continue

        options = wizard.options_for(inp)
        collapsed = (
            inp.kind is InputKind.CHOICE
            and is_present(getattr(wizard.form, inp.name))
            and shown
            and inp.name != open_field
        )
        if collapsed:
            builder.row(InlineKeyboardButton(
                text=f"{inp.label}: {SELECTED} {shown}",
                callback_data=WizardCb(action="open", field=inp.name).pack(),
            ))
            continue

        if not options:
            continue
        builder.row(InlineKeyboardButton(text=f"— {inp.label}{tag} —", callback_data="noop"))
        _option_rows(builder, wizard, inp, options)

    # ── Navigation ────────────────────────────────────────────────────────────
    nav = []
    if wizard.current_step > 1:
        nav.append(InlineKeyboardButton(text="⬅️ Back", callback_data=WizardCb(action="back").pack()))
    if step.kind is StepKind.PAYMENT:
        price = wizard.summary().total_price
        nav.append(InlineKeyboardButton(text=f"💳 Pay ${price}", callback_data=WizardCb(action="next").pack()))
    elif step.kind is StepKind.REVIEW:
        nav.append(InlineKeyboardButton(text="✅ Looks good", callback_data=WizardCb(action="next").pack()))
    else:
        nav.append(InlineKeyboardButton(text="Next ➡️", callback_data=WizardCb(action="next").pack()))
    builder.row(*nav)

    jumps = []
    for s in wizard.flow.steps:
        if s.number == wizard.current_step:
            text = f"• {s.number} •"
        elif wizard.is_complete(s.number):
            text = f"{s.number} ✓"
        else:
            text = str(s.number)
        callback = (
            WizardCb(action="jump", step=s.number).pack()
            if wizard.can_jump_to(s.number) and s.number != wizard.current_step
            else "noop"
        )
        jumps.append(InlineKeyboardButton(text=text, callback_data=callback))
    builder.row(*jumps)

    builder.row(InlineKeyboardButton(text="✖️ Cancel booking", callback_data=WizardCb(action="cancel").pack()))
    return builder.as_markup()


def cancel_input_kb() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="↩️ Back to step", callback_data=WizardCb(action="resume").pack()))
    return builder.as_markup()


def booking_done_kb() -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="⚽ Book something else", callback_data=MainMenuCb(action="book").pack()))
    builder.row(InlineKeyboardButton(text="🔙 Main menu", callback_data=MainMenuCb(action="main").pack()))
    return builder.as_markup()


def my_bookings_kb(bookings: List[Booking]) -> InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    for b in bookings:
        builder.row(InlineKeyboardButton(
            text=f"{b.status_emoji} {b.short_reference} · ${b.total_price}",
            callback_data="noop",
        ))
    builder.row(InlineKeyboardButton(text="🔙 Main menu", callback_data=MainMenuCb(action="main").pack()))
    return builder.as_markup()

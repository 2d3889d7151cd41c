"""
Customer booking wizard handlers.

Flow:
  Book now → choose service → step screens (choices via buttons, text via
  messages) → review → payment → confirmation + QR ticket

The wizard for a chat is kept in FSM data under "wizard" (see
BookingWizard.to_state) and rebuilt on every update.
"""
import logging
from typing import Optional, Set

from aiogram import Bot, F, Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message
from sqlalchemy.ext.asyncio import AsyncSession

from pitchbot.config import settings
from pitchbot.keyboards import (
    MainMenuCb, ServiceCb, WizardCb,
    service_list_kb, step_kb, cancel_input_kb, booking_done_kb,
    my_bookings_kb, customer_main_menu, admin_main_menu,
)
from pitchbot.services import (
    format_summary, list_bookings, notify_admins_new_booking, send_booking_ticket,
)
from pitchbot.states import BookingStates
from pitchbot.wizard import (
    BUSY_MESSAGE, BookingWizard, InputKind, PAYMENT_FIELDS, StepKind,
    SubmissionCoordinator, SubmissionOutcome, SubmissionStatus,
)

logger = logging.getLogger(__name__)
router = Router(name="booking")

INPUT_HINTS = {
    "phone":           "10 digits, e.g. 5551234567",
    "emergency_phone": "10 digits, e.g. 5551234567",
    "card_number":     "16 digits",
    "card_expiry":     "MM/YY",
    "card_cvv":        "3 digits",
    "billing_zip":     "5 digits",
}

SESSION_EXPIRED = "⚠️ This booking session has expired. Please start again."

# Users whose Next/Pay press is still being handled
_next_in_progress: Set[int] = set()


# ── Wizard persistence ────────────────────────────────────────────────────────

async def _load_wizard(state: FSMContext) -> Optional[BookingWizard]:
    data = await state.get_data()
    raw = data.get("wizard")
    return BookingWizard.from_state(raw) if raw else None


async def _save_wizard(state: FSMContext, wizard: BookingWizard) -> None:
    await state.update_data(wizard=wizard.to_state())


# ── Rendering ─────────────────────────────────────────────────────────────────

def progress_bar(percentage: float, width: int = 10) -> str:
    filled = round(percentage / 100 * width)
    return "▰" * filled + "▱" * (width - filled) + f" {percentage:.0f}%"


def render_step(wizard: BookingWizard, notice: str = "") -> str:
    flow = wizard.flow
    step = wizard.current
    lines = [
        f"{flow.emoji} <b>{flow.title}</b>",
        f"Step {step.number} of {wizard.total_steps}: <b>{step.label}</b>",
        progress_bar(wizard.progress_percentage),
        "",
    ]
    if step.kind is StepKind.REVIEW:
        lines += ["Please check your booking:", "", format_summary(wizard.summary())]
    elif step.kind is StepKind.PAYMENT:
        lines.append(f"Total due: <b>${wizard.summary().total_price}</b>")
    else:
        lines.append("Pick the options below; tap ✏️ to type a value.")

    errors = [wizard.validation_errors[n] for n in wizard.current.validated_fields
              if n in wizard.validation_errors]
    if errors:
        lines.append("")
        lines += [f"⚠️ {e}" for e in dict.fromkeys(errors)]
    if notice:
        lines += ["", notice]
    return "\n".join(lines)


async def _show(callback: CallbackQuery, text: str, kb: InlineKeyboardMarkup) -> None:
    try:
        await callback.message.edit_text(text, parse_mode=ParseMode.HTML, reply_markup=kb)
    except TelegramBadRequest as e:
        # Same content re-rendered (e.g. a jump to the current step)
        if "message is not modified" not in str(e):
            raise


async def _show_step(
    callback: CallbackQuery,
    wizard: BookingWizard,
    notice: str = "",
    open_field: Optional[str] = None,
) -> None:
    await _show(callback, render_step(wizard, notice), step_kb(wizard, open_field))


async def _expired(callback: CallbackQuery, state: FSMContext, is_admin: bool) -> None:
    await state.clear()
    await callback.answer(SESSION_EXPIRED, show_alert=True)
    await _show(
        callback,
        "🔄 <b>Session reset.</b> Back to the main menu:",
        admin_main_menu() if is_admin else customer_main_menu(),
    )


# ── Entry: choose a service ───────────────────────────────────────────────────

@router.callback_query(MainMenuCb.filter(F.action == "book"))
async def cq_start_booking(callback: CallbackQuery, state: FSMContext) -> None:
    await state.clear()
    await state.set_state(BookingStates.choose_service)
    await _show(
        callback,
        f"⚽ <b>{settings.FACILITY_NAME}</b>\n\nWhat would you like to book?",
        service_list_kb(),
    )
    await callback.answer()


@router.callback_query(ServiceCb.filter())
async def cq_service_chosen(
    callback: CallbackQuery,
    callback_data: ServiceCb,
    state: FSMContext,
) -> None:
    wizard = BookingWizard.for_service(callback_data.service)
    await state.set_state(BookingStates.wizard)
    await _save_wizard(state, wizard)
    logger.info("User %d started a %s booking", callback.from_user.id, wizard.service_type.value)
    await _show_step(callback, wizard)
    await callback.answer()


# ── Choices ───────────────────────────────────────────────────────────────────

@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action.in_({"choose", "toggle"})))
async def cq_pick_option(
    callback: CallbackQuery,
    callback_data: WizardCb,
    state: FSMContext,
    is_admin: bool = False,
) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return

    if callback_data.action == "toggle":
        wizard.toggle_option(callback_data.field, callback_data.value)
    else:
        wizard.choose(callback_data.field, callback_data.value)
    await _save_wizard(state, wizard)
    await _show_step(callback, wizard)
    await callback.answer()


@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action == "open"))
async def cq_open_choice(
    callback: CallbackQuery,
    callback_data: WizardCb,
    state: FSMContext,
    is_admin: bool = False,
) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return
    await _show_step(callback, wizard, open_field=callback_data.field)
    await callback.answer()


# ── Text fields ───────────────────────────────────────────────────────────────

@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action == "input"))
async def cq_request_input(
    callback: CallbackQuery,
    callback_data: WizardCb,
    state: FSMContext,
    is_admin: bool = False,
) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return

    inp = next((i for i in wizard.visible_inputs()
                if i.name == callback_data.field and i.kind is InputKind.TEXT), None)
    if inp is None:
        await callback.answer()
        return

    hint = INPUT_HINTS.get(inp.name)
    text = f"✏️ Enter <b>{inp.label}</b>"
    if hint:
        text += f" ({hint})"
    await state.set_state(BookingStates.enter_value)
    await state.update_data(input_field=inp.name)
    await _show(callback, text + ":", cancel_input_kb())
    await callback.answer()


@router.message(BookingStates.enter_value, F.text)
async def msg_field_value(message: Message, state: FSMContext) -> None:
    wizard = await _load_wizard(state)
    data = await state.get_data()
    field = data.get("input_field")
    if wizard is None or not field:
        await state.clear()
        await message.answer(SESSION_EXPIRED, reply_markup=customer_main_menu())
        return

    wizard.input_field(field, message.text)
    if field in PAYMENT_FIELDS:
        # Card details should not linger in the chat history
        try:
            await message.delete()
        except TelegramBadRequest as e:
            logger.debug("Could not delete payment input: %s", e)

    await state.set_state(BookingStates.wizard)
    await state.update_data(input_field=None)
    await _save_wizard(state, wizard)
    await message.answer(render_step(wizard), parse_mode=ParseMode.HTML, reply_markup=step_kb(wizard))


@router.callback_query(BookingStates.enter_value, WizardCb.filter(F.action == "resume"))
async def cq_resume_step(callback: CallbackQuery, state: FSMContext, is_admin: bool = False) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return
    await state.set_state(BookingStates.wizard)
    await _show_step(callback, wizard)
    await callback.answer()


# ── Navigation ────────────────────────────────────────────────────────────────

@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action == "back"))
async def cq_step_back(callback: CallbackQuery, state: FSMContext, is_admin: bool = False) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return
    wizard.retreat()
    await _save_wizard(state, wizard)
    await _show_step(callback, wizard)
    await callback.answer()


@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action == "jump"))
async def cq_step_jump(
    callback: CallbackQuery,
    callback_data: WizardCb,
    state: FSMContext,
    is_admin: bool = False,
) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return
    if not wizard.jump_to(callback_data.step):
        await callback.answer("Finish the earlier steps first.", show_alert=True)
        return
    await _save_wizard(state, wizard)
    await _show_step(callback, wizard)
    await callback.answer()


@router.callback_query(BookingStates.wizard, WizardCb.filter(F.action == "next"))
async def cq_step_next(
    callback: CallbackQuery,
    state: FSMContext,
    bot: Bot,
    coordinator: SubmissionCoordinator,
    is_admin: bool = False,
) -> None:
    user_id = callback.from_user.id
    # Checked and taken before the first await, so a double tap sees it held
    if user_id in _next_in_progress:
        await callback.answer(BUSY_MESSAGE)
        return
    _next_in_progress.add(user_id)
    try:
        await _step_next(callback, state, bot, coordinator, is_admin)
    finally:
        _next_in_progress.discard(user_id)


async def _step_next(
    callback: CallbackQuery,
    state: FSMContext,
    bot: Bot,
    coordinator: SubmissionCoordinator,
    is_admin: bool,
) -> None:
    wizard = await _load_wizard(state)
    if wizard is None:
        await _expired(callback, state, is_admin)
        return

    if wizard.is_final_step:
        await _submit(callback, state, bot, coordinator, wizard)
        return

    if not wizard.advance():
        await _save_wizard(state, wizard)
        missing = wizard.missing_fields()
        if wizard.validation_errors:
            alert = "Please fix the highlighted fields."
        elif missing:
            labels = {i.name: i.label for i in wizard.current.inputs}
            alert = "Still needed: " + ", ".join(labels.get(m, m) for m in missing)
        else:
            alert = "That choice is no longer available. Please pick another."
        await _show_step(callback, wizard)
        await callback.answer(alert, show_alert=True)
        return

    await _save_wizard(state, wizard)
    await _show_step(callback, wizard)
    await callback.answer()


@router.callback_query(WizardCb.filter(F.action == "cancel"))
async def cq_cancel_booking(callback: CallbackQuery, state: FSMContext, is_admin: bool = False) -> None:
    await state.clear()
    await _show(
        callback,
        "Booking cancelled. Nothing was charged.\n\nBack to the main menu:",
        admin_main_menu() if is_admin else customer_main_menu(),
    )
    await callback.answer()


# ── Submission ────────────────────────────────────────────────────────────────

async def _submit(
    callback: CallbackQuery,
    state: FSMContext,
    bot: Bot,
    coordinator: SubmissionCoordinator,
    wizard: BookingWizard,
) -> None:
    token = wizard.token

    async def is_mounted() -> bool:
        data = await state.get_data()
        return (data.get("wizard") or {}).get("token") == token

    async def checkpoint(w: BookingWizard) -> None:
        await _save_wizard(state, w)

    await callback.answer("⏳ Processing…")
    outcome: SubmissionOutcome = await coordinator.submit(
        wizard,
        is_mounted=is_mounted,
        context={"telegram_id": callback.from_user.id},
        checkpoint=checkpoint,
    )

    if outcome.status is SubmissionStatus.BUSY:
        return

    if outcome.status is SubmissionStatus.CONFIRMED:
        service_title = wizard.flow.title
        if await is_mounted():
            await state.clear()
            await _show(
                callback,
                f"🎉 <b>{outcome.summary.title}</b>\n\nYour ticket is on its way.",
                booking_done_kb(),
            )
        await send_booking_ticket(bot, callback.from_user.id, outcome.summary)
        await notify_admins_new_booking(bot, settings.admin_ids_list, service_title, outcome.summary)
        return

    if not await is_mounted():
        return
    notice = f"❗️ {outcome.message}"
    if outcome.status is SubmissionStatus.INVALID:
        notice = ""
        pending = wizard.first_unsatisfied_step()
        if pending is not None and pending < wizard.current_step:
            wizard.jump_to(pending)
            notice = "❗️ This step needs attention before you can pay."
    await _save_wizard(state, wizard)
    await _show_step(callback, wizard, notice=notice)


# ── My bookings ───────────────────────────────────────────────────────────────

@router.callback_query(MainMenuCb.filter(F.action == "my_bookings"))
async def cq_my_bookings(callback: CallbackQuery, session: AsyncSession) -> None:
    bookings = await list_bookings(session, telegram_id=callback.from_user.id, limit=10)
    if not bookings:
        text = "🎫 <b>My bookings</b>\n\n<i>No bookings yet.</i>"
    else:
        text = "🎫 <b>My bookings</b>\n\nYour most recent bookings:"
    await _show(callback, text, my_bookings_kb(bookings))
    await callback.answer()

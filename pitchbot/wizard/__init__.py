from pitchbot.wizard.formatters import (
    digits_only, format_phone, format_card_number, format_card_expiry,
    format_cvv, format_zip_code,
)
from pitchbot.wizard.validators import (
    validate_email, validate_phone, validate_card_number, validate_card_expiry,
    validate_zip_code, validate_cvv, check_field, FIELD_RULES, PAYMENT_FIELDS,
)
from pitchbot.wizard.catalog import Option
from pitchbot.wizard.steps import (
    FlowConfigError, ServiceType, StepKind, InputKind, FlowContext,
    FieldInput, StepDefinition, ServiceFlowConfig, BookingSummary,
)
from pitchbot.wizard.flows import FLOWS, get_flow
from pitchbot.wizard.machine import BookingWizard
from pitchbot.wizard.coordinator import (
    BookingApi, BookingResult, SubmissionCoordinator,
    SubmissionOutcome, SubmissionStatus, FAILURE_MESSAGE, BUSY_MESSAGE,
)

__all__ = [
    # formatters
    "digits_only", "format_phone", "format_card_number", "format_card_expiry",
    "format_cvv", "format_zip_code",
    # validators
    "validate_email", "validate_phone", "validate_card_number", "validate_card_expiry",
    "validate_zip_code", "validate_cvv", "check_field", "FIELD_RULES", "PAYMENT_FIELDS",
    # flows
    "Option", "FlowConfigError", "ServiceType", "StepKind", "InputKind", "FlowContext",
    "FieldInput", "StepDefinition", "ServiceFlowConfig", "BookingSummary",
    "FLOWS", "get_flow",
    # engine
    "BookingWizard",
    "BookingApi", "BookingResult", "SubmissionCoordinator",
    "SubmissionOutcome", "SubmissionStatus", "FAILURE_MESSAGE", "BUSY_MESSAGE",
]

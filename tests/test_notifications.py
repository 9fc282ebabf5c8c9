from __future__ import annotations

import pytest

from academy_client.error_mapper import SESSION_EXPIRED_MESSAGE
from academy_client.exceptions import FieldError, ForbiddenError, TransportError, ValidationError
from academy_client.notifications import NotificationCenter


def test_validation_errors_carry_field_details() -> None:
    center = NotificationCenter()
    error = ValidationError(
        message="Validation failed",
        status_code=400,
        errors=[FieldError(path="amount", msg="Amount must be positive"), FieldError(path="date", msg="Date is required")],
    )

    payload = center.push_error("Failed to save transaction", error)

    assert payload["level"] == "error"
    assert payload["message"] == "Amount must be positive, Date is required"
    assert payload["details"] == {
        "error_type": "ValidationError",
        "status_code": 400,
        "fields": "amount: Amount must be positive; date: Date is required",
    }


def test_authorization_failures_are_warnings() -> None:
    center = NotificationCenter()
    payload = center.push_error("Failed to load", ForbiddenError(message="Forbidden", status_code=403))

    assert payload["level"] == "warning"
    assert payload["message"] == SESSION_EXPIRED_MESSAGE


def test_dismiss_and_render() -> None:
    center = NotificationCenter()
    center.success("Saved", "Budget saved")
    center.push_error("Offline", TransportError(message="Unable to reach the server.", status_code=0))

    center.dismiss(0)
    center.dismiss(5)

    rendered = center.render()
    assert rendered["count"] == 1
    assert rendered["messages"][0]["title"] == "Offline"

    center.clear()
    assert center.render() == {"count": 0, "messages": []}


def test_unknown_level_is_rejected() -> None:
    center = NotificationCenter()

    with pytest.raises(ValueError, match="fatal"):
        center.push(level="fatal", title="Oops", message="Unknown level")

    assert center.messages == []


def test_render_returns_copies() -> None:
    center = NotificationCenter()
    center.success("Saved", "Budget saved")

    center.render()["messages"][0]["title"] = "Changed"

    assert center.of_level("success")[0]["title"] == "Saved"

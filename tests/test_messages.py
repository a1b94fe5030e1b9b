"""Localized error messages."""

import pytest

from anlik_eleman.db import messages
from anlik_eleman.remote import PlatformError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("User already registered", messages.ALREADY_REGISTERED),
        ("Password should be at least 6 characters", messages.PASSWORD_TOO_SHORT),
        ("Unable to validate email address: invalid format", messages.INVALID_EMAIL),
        ("Signups not allowed for this instance", messages.SIGNUP_DISABLED),
        ("Database error saving new user", messages.SIGNUP_FAILED),
    ],
)
def test_sign_up_errors(raw, expected):
    assert messages.localize_sign_up_error(PlatformError(raw), messages.SIGNUP_FAILED) == expected


@pytest.mark.parametrize(
    "error, expected",
    [
        (PlatformError("Invalid login credentials", status=400), messages.INVALID_CREDENTIALS),
        (PlatformError("Email not confirmed", status=400), messages.EMAIL_NOT_CONFIRMED),
        (PlatformError("Request rate limit reached", status=429), messages.TOO_MANY_REQUESTS),
        (PlatformError("Something else", status=500), messages.SIGNIN_FAILED),
    ],
)
def test_sign_in_errors(error, expected):
    assert messages.localize_sign_in_error(error, messages.SIGNIN_FAILED) == expected


def test_data_errors_append_known_cause():
    duplicate = PlatformError("duplicate key value", code="23505", status=409)
    denied = PlatformError("new row violates row-level security policy", code="42501", status=403)
    unknown = PlatformError("boom", code="XX000", status=500)

    assert messages.localize_data_error(duplicate, "Şirket oluşturulamadı") == (
        "Şirket oluşturulamadı: Bu kayıt zaten mevcut"
    )
    assert messages.localize_data_error(denied, "Profil güncellenemedi").endswith(
        messages.PERMISSION_DENIED
    )
    assert messages.localize_data_error(unknown, "Profil güncellenemedi") == "Profil güncellenemedi"

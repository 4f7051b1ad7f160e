"""
Tests for translations and the device failure messages
"""
import pytest

from civic_reports.devices import (
    CameraError,
    GeolocationError,
    classify_camera_error,
    classify_geolocation_error,
    device_messages,
)
from civic_reports.i18n import LANGUAGES, TRANSLATIONS, translate


def test_every_key_has_every_language():
    missing = [
        (key, language)
        for key, values in TRANSLATIONS.items()
        for language in LANGUAGES
        if not values.get(language)
    ]
    assert missing == []


def test_translate_fallbacks():
    assert translate("nav.home", "en") == "Home"
    assert translate("nav.home", "de") == "Kryefaqja"
    assert translate("no.such.key", "en") == "no.such.key"


@pytest.mark.parametrize("name,reason", [
    ("NotAllowedError", CameraError.PERMISSION_DENIED),
    ("NotFoundError", CameraError.NOT_FOUND),
    ("NotReadableError", CameraError.IN_USE),
    ("OverconstrainedError", CameraError.OVERCONSTRAINED),
    ("AbortError", CameraError.CAPTURE_FAILED),
    (None, CameraError.CAPTURE_FAILED),
])
def test_classify_camera_error(name, reason):
    assert classify_camera_error(name) == reason


@pytest.mark.parametrize("code,reason", [
    (1, GeolocationError.PERMISSION_DENIED),
    (2, GeolocationError.UNAVAILABLE),
    (3, GeolocationError.TIMEOUT),
    (7, GeolocationError.UNKNOWN),
    (None, GeolocationError.UNSUPPORTED),
])
def test_classify_geolocation_error(code, reason):
    assert classify_geolocation_error(code) == reason


@pytest.mark.parametrize("language", LANGUAGES)
def test_device_messages_are_translated(language):
    messages = device_messages(language)
    for reason in CameraError:
        assert not messages["camera"]["errors"][reason.value].startswith("device.")
    for reason in GeolocationError:
        assert not messages["geolocation"]["errors"][reason.value].startswith("device.")
    assert messages["camera"]["manualRetries"] == 1


def test_report_form_embeds_device_messages(client):
    client.post("/preferences", data={"language": "it"})
    page = client.get("/report").text
    assert translate("device.geolocation.permission_denied", "it") in page

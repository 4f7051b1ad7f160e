"""
Camera and geolocation failure messages.

The browser reports device failures with DOMException names (camera) or
numeric GeolocationPositionError codes. Both are folded into a small fixed
set of reasons, each with a translated message that the report page embeds
for its script.
"""
import enum
from typing import Dict, Optional

from civic_reports.i18n import translate


class CameraError(str, enum.Enum):
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    IN_USE = "in_use"
    OVERCONSTRAINED = "overconstrained"
    UNSUPPORTED = "unsupported"
    TIMEOUT = "timeout"
    CAPTURE_FAILED = "capture_failed"


class GeolocationError(str, enum.Enum):
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


_CAMERA_EXCEPTION_NAMES: Dict[str, CameraError] = {
    "NotAllowedError": CameraError.PERMISSION_DENIED,
    "PermissionDeniedError": CameraError.PERMISSION_DENIED,
    "SecurityError": CameraError.PERMISSION_DENIED,
    "NotFoundError": CameraError.NOT_FOUND,
    "DevicesNotFoundError": CameraError.NOT_FOUND,
    "NotReadableError": CameraError.IN_USE,
    "TrackStartError": CameraError.IN_USE,
    "OverconstrainedError": CameraError.OVERCONSTRAINED,
    "ConstraintNotSatisfiedError": CameraError.OVERCONSTRAINED,
    "TypeError": CameraError.UNSUPPORTED,
    "TimeoutError": CameraError.TIMEOUT,
}

# GeolocationPositionError.code values
_GEOLOCATION_CODES: Dict[int, GeolocationError] = {
    1: GeolocationError.PERMISSION_DENIED,
    2: GeolocationError.UNAVAILABLE,
    3: GeolocationError.TIMEOUT,
}

# The camera may be retried manually this many times after a failure
CAMERA_MANUAL_RETRIES = 1


def classify_camera_error(name: Optional[str]) -> CameraError:
    """Map a DOMException name to a camera failure reason"""
    return _CAMERA_EXCEPTION_NAMES.get(name or "", CameraError.CAPTURE_FAILED)


def classify_geolocation_error(code: Optional[int]) -> GeolocationError:
    """Map a GeolocationPositionError code to a failure reason"""
    if code is None:
        return GeolocationError.UNSUPPORTED
    return _GEOLOCATION_CODES.get(code, GeolocationError.UNKNOWN)


def camera_message(reason: CameraError, language: str) -> str:
    return translate(f"device.camera.{reason.value}", language)


def geolocation_message(reason: GeolocationError, language: str) -> str:
    return translate(f"device.geolocation.{reason.value}", language)


def device_messages(language: str) -> dict:
    """All device messages for one language, keyed for the page script"""
    return {
        "camera": {
            "errors": {reason.value: camera_message(reason, language) for reason in CameraError},
            "exceptionNames": {name: reason.value for name, reason in _CAMERA_EXCEPTION_NAMES.items()},
            "manualRetries": CAMERA_MANUAL_RETRIES,
        },
        "geolocation": {
            "errors": {reason.value: geolocation_message(reason, language) for reason in GeolocationError},
            "codes": {str(code): reason.value for code, reason in _GEOLOCATION_CODES.items()},
        },
    }

"""
Client-persisted settings: theme, language, accessibility, cookie consent
and the feedback ratings a visitor has given.

This module is the only place that reads or writes these cookies. A
PreferenceStore is built from the request cookies when the request arrives
(PreferencesMiddleware), views read ``state`` and call ``dispatch`` to
change it, and the middleware persists the store on the way out when
something changed.
"""
import base64
import binascii
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

PREFERENCES_COOKIE = "preferences"
FEEDBACK_COOKIE = "report-feedbacks"
COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 5

FONT_SIZE_MIN = 80
FONT_SIZE_MAX = 150
FONT_SIZE_STEP = 10

# Browsers cap a cookie at about 4KB
MAX_FEEDBACK_ENTRIES = 15
MAX_FEEDBACK_COMMENT = 140


class ConsentRecord(BaseModel):
    level: Literal["all", "essential"]
    date: datetime


class Preferences(BaseModel):
    """Visitor preferences with their defaults"""
    theme: Literal["dark", "light"] = "dark"
    language: Literal["sq", "en", "it"] = "sq"
    high_contrast: bool = False
    font_size: int = 100
    consent: Optional[ConsentRecord] = None

    @field_validator("font_size", mode="before")
    @classmethod
    def clamp_font_size(cls, v: Any) -> int:
        try:
            size = int(v)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"font size must be a number, got {v!r}") from e
        return min(FONT_SIZE_MAX, max(FONT_SIZE_MIN, size))


class FeedbackRecord(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    tracking_code: str
    submitted_at: datetime


def _decode_cookie(raw: Optional[str]) -> Any:
    if not raw:
        return None
    try:
        return json.loads(base64.urlsafe_b64decode(raw.encode("ascii")))
    except (ValueError, binascii.Error, UnicodeError) as e:
        logger.debug("Ignoring unreadable cookie: %s", str(e))
        return None


def _encode_cookie(data: Any) -> str:
    payload = json.dumps(data, separators=(",", ":"), default=str)
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


class PreferenceStore:
    """Request-scoped store over the preferences and feedback cookies"""

    def __init__(
        self,
        preferences: Optional[Preferences] = None,
        feedbacks: Optional[Dict[str, FeedbackRecord]] = None,
    ):
        self._state = preferences or Preferences()
        self._feedbacks: Dict[str, FeedbackRecord] = dict(feedbacks or {})
        self._dirty: set[str] = set()
        self._subscribers: List[Callable[[Preferences], None]] = []

    @classmethod
    def from_request(cls, request: Request) -> "PreferenceStore":
        """Load the store from the request cookies, ignoring bad values"""
        preferences = Preferences()
        raw_prefs = _decode_cookie(request.cookies.get(PREFERENCES_COOKIE))
        if isinstance(raw_prefs, dict):
            try:
                preferences = Preferences.model_validate(raw_prefs)
            except ValidationError:
                logger.debug("Resetting invalid preferences cookie")

        feedbacks: Dict[str, FeedbackRecord] = {}
        raw_feedbacks = _decode_cookie(request.cookies.get(FEEDBACK_COOKIE))
        if isinstance(raw_feedbacks, dict):
            for report_id, entry in raw_feedbacks.items():
                try:
                    feedbacks[str(report_id)] = FeedbackRecord.model_validate(entry)
                except ValidationError:
                    continue

        return cls(preferences, feedbacks)

    @property
    def state(self) -> Preferences:
        return self._state

    @property
    def dirty(self) -> bool:
        return bool(self._dirty)

    def subscribe(self, callback: Callable[[Preferences], None]) -> Callable[[], None]:
        """Register a listener for preference changes; returns an unsubscriber"""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, **changes: Any) -> Preferences:
        """Apply a validated update to the preferences"""
        updated = Preferences.model_validate({**self._state.model_dump(), **changes})
        if updated != self._state:
            self._state = updated
            self._dirty.add(PREFERENCES_COOKIE)
            for callback in list(self._subscribers):
                callback(updated)
        return self._state

    def adjust_font_size(self, steps: int) -> Preferences:
        return self.dispatch(font_size=self._state.font_size + steps * FONT_SIZE_STEP)

    def give_consent(self, level: str) -> Preferences:
        return self.dispatch(consent={"level": level, "date": datetime.now(timezone.utc)})

    # ----- feedback ratings -----

    def get_feedback(self, report_id: int) -> Optional[FeedbackRecord]:
        return self._feedbacks.get(str(report_id))

    def record_feedback(
        self,
        report_id: int,
        tracking_code: str,
        rating: int,
        comment: str = "",
    ) -> Tuple[FeedbackRecord, bool]:
        """Store a rating for a report once.

        Returns the stored record and whether it was created now. A report
        that already has a rating keeps the first one.
        """
        existing = self.get_feedback(report_id)
        if existing:
            return existing, False

        record = FeedbackRecord(
            rating=rating,
            comment=(comment or "").strip()[:MAX_FEEDBACK_COMMENT],
            tracking_code=tracking_code,
            submitted_at=datetime.now(timezone.utc),
        )
        self._feedbacks[str(report_id)] = record

        if len(self._feedbacks) > MAX_FEEDBACK_ENTRIES:
            oldest = sorted(self._feedbacks.items(), key=lambda item: item[1].submitted_at)
            for key, _ in oldest[: len(self._feedbacks) - MAX_FEEDBACK_ENTRIES]:
                del self._feedbacks[key]

        self._dirty.add(FEEDBACK_COOKIE)
        return record, True

    def ratings(self) -> List[int]:
        return [record.rating for record in self._feedbacks.values()]

    # ----- persistence -----

    def persist(self, response: Response) -> None:
        """Write changed cookies onto the response"""
        if PREFERENCES_COOKIE in self._dirty:
            response.set_cookie(
                PREFERENCES_COOKIE,
                _encode_cookie(self._state.model_dump(mode="json")),
                max_age=COOKIE_MAX_AGE,
                samesite="lax",
            )
        if FEEDBACK_COOKIE in self._dirty:
            response.set_cookie(
                FEEDBACK_COOKIE,
                _encode_cookie({k: v.model_dump(mode="json") for k, v in self._feedbacks.items()}),
                max_age=COOKIE_MAX_AGE,
                samesite="lax",
            )
        self._dirty.clear()


class PreferencesMiddleware(BaseHTTPMiddleware):
    """Load the preference store on request and persist it on response"""

    async def dispatch(self, request: Request, call_next):
        store = PreferenceStore.from_request(request)
        request.state.preferences = store
        response = await call_next(request)
        store.persist(response)
        return response


def get_preferences(request: Request) -> PreferenceStore:
    """FastAPI dependency returning the request's preference store"""
    store = getattr(request.state, "preferences", None)
    if store is None:
        store = PreferenceStore.from_request(request)
        request.state.preferences = store
    return store

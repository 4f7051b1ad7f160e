"""
Arithmetic anti-spam challenge.

The expected answer travels with the form inside a signed, time-limited
token, so verifying needs no server-side state. This is friction against
naive bots, not a security control: a token can be replayed until it
expires.
"""
import logging
import random
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from civic_reports.config import get_settings
from civic_reports.schemas import CaptchaChallenge

logger = logging.getLogger(__name__)

_SALT = "report-captcha"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(get_settings().secret_key, salt=_SALT)


def generate_challenge() -> CaptchaChallenge:
    """Create an ``a + b`` question with operands between 1 and 10"""
    first = random.randint(1, 10)
    second = random.randint(1, 10)
    token = _serializer().dumps({"sum": first + second})
    return CaptchaChallenge(question=f"{first} + {second}", token=token)


def verify_challenge(token: Optional[str], answer: Optional[str], max_age: Optional[int] = None) -> bool:
    """Check an answer against the token it was issued with"""
    if not token or not answer:
        return False

    try:
        user_answer = int(str(answer).strip())
    except ValueError:
        return False

    try:
        data = _serializer().loads(token, max_age=max_age or get_settings().captcha_max_age)
    except SignatureExpired:
        logger.info("Expired captcha token")
        return False
    except BadSignature:
        logger.warning("Captcha token with bad signature")
        return False

    return isinstance(data, dict) and data.get("sum") == user_answer

"""
Tests for the captcha challenge and admin password hashing
"""
from itsdangerous import URLSafeTimedSerializer

from civic_reports.services.auth_service import hash_password, verify_password
from civic_reports.services.captcha import generate_challenge, verify_challenge


def answer_of(challenge) -> str:
    first, second = challenge.question.split(" + ")
    return str(int(first) + int(second))


# --- Captcha ---

def test_operands_between_one_and_ten():
    for _ in range(50):
        first, second = (int(x) for x in generate_challenge().question.split(" + "))
        assert 1 <= first <= 10
        assert 1 <= second <= 10


def test_correct_answer_accepted():
    challenge = generate_challenge()
    assert verify_challenge(challenge.token, answer_of(challenge))
    assert verify_challenge(challenge.token, f" {answer_of(challenge)} ")


def test_wrong_or_missing_answer_rejected():
    challenge = generate_challenge()
    assert not verify_challenge(challenge.token, str(int(answer_of(challenge)) + 1))
    assert not verify_challenge(challenge.token, "")
    assert not verify_challenge(challenge.token, "seven")
    assert not verify_challenge("", answer_of(challenge))


def test_token_signed_with_other_key_rejected():
    forged = URLSafeTimedSerializer("someone-else", salt="report-captcha").dumps({"sum": 2})
    assert not verify_challenge(forged, "2")


def test_expired_token_rejected():
    challenge = generate_challenge()
    assert not verify_challenge(challenge.token, answer_of(challenge), max_age=-1)


# --- Passwords ---

def test_password_round_trip():
    hashed = hash_password("correct horse battery")
    assert hashed.startswith("pbkdf2:sha256:")
    assert "correct horse battery" not in hashed
    assert verify_password("correct horse battery", hashed)
    assert not verify_password("correct horse", hashed)


def test_salts_differ():
    assert hash_password("same-password") != hash_password("same-password")


def test_malformed_hash_rejected():
    assert not verify_password("x", None)
    assert not verify_password("x", "")
    assert not verify_password("x", "md5$abc")
    assert not verify_password("x", "bcrypt$10$salt$digest")
    assert not verify_password("x", "plain-text-password")

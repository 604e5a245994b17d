from datetime import timedelta

import pytest
from bson import ObjectId

from app.models.user import OtpCheck, check_otp
from utils.otp_utils import generate_otp
from utils.time_utils import calculate_otp_expiry, is_otp_expired, utc_now
from utils.validation_utils import (
    is_blank,
    normalize_code,
    normalize_mobile,
    parse_object_id,
    parse_weight,
    sanitize_filename,
)


def test_generate_otp_is_numeric():
    for _ in range(50):
        otp = generate_otp(4)
        assert len(otp) == 4
        assert otp.isdigit()


def test_otp_expiry_window():
    now = utc_now()
    expiry = calculate_otp_expiry(now, 5)
    assert expiry - now == timedelta(minutes=5)
    assert not is_otp_expired(expiry, now)
    assert is_otp_expired(expiry, expiry)
    assert is_otp_expired(None)


def test_check_otp_outcomes():
    now = utc_now()
    user = {"_id": ObjectId(), "mobile": "1", "otp": "1234", "otpExpiry": now + timedelta(minutes=1)}

    assert check_otp(user, "1234", now) is OtpCheck.OK
    assert check_otp(user, "4321", now) is OtpCheck.MISMATCH
    assert check_otp(user, "1234", now + timedelta(minutes=2)) is OtpCheck.EXPIRED
    assert check_otp(None, "1234", now) is OtpCheck.NO_USER
    assert check_otp({**user, "otp": None}, None, now) is OtpCheck.MISMATCH


@pytest.mark.parametrize("value,expected", [
    ("2", 2.0),
    ("3.75", 3.75),
    ("0", 0.0),
    ("abc", None),
    ("nan", None),
    (None, None),
])
def test_parse_weight(value, expected):
    assert parse_weight(value) == expected


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id("123") is None
    assert parse_object_id("") is None
    assert parse_object_id(None) is None


def test_blank_and_mobile_helpers():
    assert is_blank(None) and is_blank("") and is_blank("   ")
    assert not is_blank("x")
    assert normalize_mobile(" 9999999999 ") == "9999999999"
    assert normalize_mobile("   ") is None
    assert normalize_mobile(9999999999) == "9999999999"
    assert normalize_code(4821) == "4821"
    assert normalize_code("") is None


@pytest.mark.parametrize("name,expected", [
    ("photo.jpg", "photo.jpg"),
    ("my photo (1).png", "my_photo__1_.png"),
    ("../../etc/passwd", "passwd"),
    ("C:\\Users\\me\\pic.jpeg", "pic.jpeg"),
    (".hidden", "hidden"),
    ("", "file"),
    (None, "file"),
])
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected

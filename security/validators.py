import re
from datetime import date, datetime
from typing import List, Optional, Tuple

from flask import current_app

from utils.errors import InvalidBirthday, Underage, ValidationError

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SIGNUP_FIELDS = ("email", "fullName", "username", "password", "birthday")

_DEFAULTS = {
    "MIN_PASSWORD_LENGTH": 6,
    "MIN_AGE": 13,
}


def _cfg(name: str):
    try:
        return current_app.config.get(name, _DEFAULTS[name])
    except RuntimeError:
        # outside an app context (CLI, unit tests)
        return _DEFAULTS[name]


def is_valid_email(email) -> bool:
    return isinstance(email, str) and _EMAIL.fullmatch(email) is not None


def validate_password(pw) -> Tuple[bool, List[str]]:
    if not isinstance(pw, str):
        return False, ["Password must be a string"]

    min_len = int(_cfg("MIN_PASSWORD_LENGTH"))
    if len(pw) < min_len:
        return False, [f"Password must be at least {min_len} characters"]
    return True, []


def _parse_birthday(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidBirthday("Invalid birthday.")


def calculate_age(birthday, today: Optional[date] = None) -> int:
    """
    Whole years between birthday and today. Raises InvalidBirthday for
    unparseable or future dates.
    """
    born = _parse_birthday(birthday)
    today = today or date.today()
    if born > today:
        raise InvalidBirthday("Invalid birthday.")

    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def validate_signup(data: dict, today: Optional[date] = None) -> dict:
    """
    Checks a signup payload and returns the fields as strings.
    Order: required fields, password length, email shape, birthday, age.
    """
    cleaned = {}
    for name in SIGNUP_FIELDS:
        value = data.get(name)
        if value is None or value == "":
            raise ValidationError("All fields required.")
        cleaned[name] = value if isinstance(value, str) else str(value)

    valid, _ = validate_password(cleaned["password"])
    if not valid:
        raise ValidationError("Password too short.")

    if not is_valid_email(cleaned["email"]):
        raise ValidationError("Invalid email.")

    min_age = int(_cfg("MIN_AGE"))
    if calculate_age(cleaned["birthday"], today=today) < min_age:
        raise Underage(f"Must be {min_age}+.")

    return cleaned

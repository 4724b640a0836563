import logging

from flask import Blueprint, request, jsonify

from models import UserRecord, new_record_id, store
from security.validators import validate_signup
from utils.audit import EMPTY_ATTEMPT, client_ip, record_failed_login, record_login, record_signup
from utils.errors import Conflict, InvalidCredentials, StoreError, ValidationError

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _payload() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _find_user(users, identifier: str):
    for user in users:
        if user.email == identifier or user.username == identifier:
            return user
    return None


@auth_bp.post("/signup")
def signup():
    fields = validate_signup(_payload())

    try:
        users = store.load_all("users")
        if any(u.email == fields["email"] or u.username == fields["username"] for u in users):
            raise Conflict("Email/username exists.")

        user = UserRecord(id=new_record_id(), **fields)
        store.append("users", user)
        record_signup(user)
    except StoreError as exc:
        raise StoreError(f"Server error: {exc.message}") from exc

    logger.info("Signup saved: %s from %s", user.username, client_ip())
    return jsonify(success=True, message="Account created! Log in now."), 200


@auth_bp.post("/login")
def login():
    data = _payload()
    identifier = data.get("identifier") or ""
    password = data.get("password") or ""
    if not isinstance(identifier, str):
        identifier = str(identifier)
    if not isinstance(password, str):
        password = str(password)

    if not identifier or not password:
        record_failed_login(EMPTY_ATTEMPT, password)
        raise ValidationError("Fields required.")

    try:
        user = _find_user(store.load_all("users"), identifier)
        if user is None:
            record_failed_login(identifier, password)
            raise InvalidCredentials("Invalid email/username.")

        if user.password != password:
            record_failed_login(identifier, password)
            raise InvalidCredentials("Invalid password.")

        record_login(user)
    except StoreError as exc:
        raise StoreError(f"Server error: {exc.message}") from exc

    return jsonify(
        success=True,
        message=f"Welcome, {user.fullName}!",
        user=user.public_view(),
    ), 200

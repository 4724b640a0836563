import logging
from dataclasses import replace
from datetime import datetime, timezone

from flask import has_request_context, request

from models import FAILED_LOGIN_NAME, UserRecord, new_record_id, store
from utils.errors import StoreError

logger = logging.getLogger(__name__)

AUDIT_TABLE = "audit"
EMPTY_ATTEMPT = "empty_attempt"


def client_ip() -> str:
    if not has_request_context():
        return "unknown"
    return request.headers.get("X-Forwarded-For", request.remote_addr) or "unknown"


def record_signup(user: UserRecord) -> None:
    store.append(AUDIT_TABLE, replace(user))
    logger.info("Signup audited: %s from %s", user.username, client_ip())


def record_login(user: UserRecord) -> UserRecord:
    snapshot = replace(user, id=new_record_id("login_"))
    store.append(AUDIT_TABLE, snapshot)
    logger.info("Login snapshot saved: %s from %s", user.username, client_ip())
    return snapshot


def record_failed_login(identifier: str, attempted_password: str = "") -> None:
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    row = UserRecord(
        id=new_record_id("failed_"),
        email=identifier,
        fullName=FAILED_LOGIN_NAME,
        username=identifier,
        password=attempted_password or "",
        birthday=timestamp,
    )
    try:
        store.append(AUDIT_TABLE, row)
    except StoreError as exc:
        logger.error("Could not record failed login for %s: %s", identifier, exc.message)
        return
    logger.warning("Failed login logged: %s from %s", identifier, client_ip())

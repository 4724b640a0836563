from flask import Blueprint, jsonify

from models import store
from utils.errors import StoreError

records_bp = Blueprint("records", __name__, url_prefix="/api")


def _load(table: str):
    try:
        return store.load_all(table)
    except StoreError as exc:
        raise StoreError(f"Load error: {exc.message}") from exc


@records_bp.get("/users")
def list_users():
    users = _load("users")
    return jsonify(success=True, users=[u.to_dict() for u in users], count=len(users)), 200


@records_bp.get("/audit")
def list_audit():
    audits = _load("audit")
    return jsonify(success=True, audits=[a.to_dict() for a in audits], count=len(audits)), 200

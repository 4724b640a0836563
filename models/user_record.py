import threading
import time
from dataclasses import asdict, dataclass, fields

# Column order of both tables; also the header row of every table file
FIELDNAMES = ("id", "email", "fullName", "username", "password", "birthday")

FAILED_LOGIN_NAME = "Failed Login Attempt"

_id_lock = threading.Lock()
_last_id_ms = 0


def new_record_id(prefix: str = "") -> str:
    """
    Millisecond timestamp id, optionally prefixed (e.g. "login_", "failed_").
    Never repeats within a process, even for calls in the same millisecond.
    """
    global _last_id_ms
    with _id_lock:
        now_ms = int(time.time() * 1000)
        if now_ms <= _last_id_ms:
            now_ms = _last_id_ms + 1
        _last_id_ms = now_ms
    return f"{prefix}{now_ms}"


@dataclass
class UserRecord:
    id: str = ""
    email: str = ""
    fullName: str = ""
    username: str = ""
    password: str = ""
    birthday: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "UserRecord":
        known = {f.name for f in fields(cls)}
        return cls(**{k: (v or "") for k, v in row.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)

    def is_failed_login(self) -> bool:
        return self.fullName == FAILED_LOGIN_NAME

    def public_view(self) -> dict:
        # password stays out of API success bodies
        return {"id": self.id, "username": self.username, "fullName": self.fullName}

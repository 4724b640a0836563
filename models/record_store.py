import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from flask import current_app

from models.user_record import FIELDNAMES, UserRecord
from utils.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_TABLES = {"users": "users.csv", "audit": "audit.csv"}


class RecordStore:
    """
    Append-only CSV tables sharing the UserRecord schema.

    Bound either explicitly (data_dir/tables) or through init_app(), in which
    case the paths come from the current Flask app's config.
    """

    def __init__(self, data_dir=None, tables: Optional[Dict[str, str]] = None):
        self.data_dir = Path(data_dir) if data_dir else None
        self.tables = dict(tables or DEFAULT_TABLES)

    def init_app(self, app):
        app.extensions["record_store"] = {
            "data_dir": Path(app.config["DATA_DIR"]),
            "tables": {
                "users": app.config.get("USERS_FILE", DEFAULT_TABLES["users"]),
                "audit": app.config.get("AUDIT_FILE", DEFAULT_TABLES["audit"]),
            },
        }

    def _settings(self):
        if self.data_dir is not None:
            return self.data_dir, self.tables
        try:
            state = current_app.extensions["record_store"]
        except (RuntimeError, KeyError):
            raise StoreError("Record store is not configured")
        return state["data_dir"], state["tables"]

    def path_for(self, table: str) -> Path:
        data_dir, tables = self._settings()
        if table not in tables:
            raise StoreError(f"Unknown table: {table}")
        return data_dir / tables[table]

    def initialize(self, table: str) -> Path:
        path = self.path_for(table)
        if path.exists():
            logger.debug("Table file exists: %s", path)
            return path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # exclusive create: a concurrent creator never truncates appended rows
            with open(path, "x", encoding="utf-8", newline="") as fh:
                fh.write(",".join(FIELDNAMES) + "\n")
        except FileExistsError:
            logger.debug("Table file exists: %s", path)
            return path
        except OSError as exc:
            logger.error("Cannot create %s: %s", path, exc, exc_info=True)
            raise StoreError(f"Cannot create {path.name}: {exc}")
        logger.info("Initialized table %s with header: %s", table, path)
        return path

    def append(self, table: str, record: UserRecord) -> None:
        path = self.initialize(table)
        line = _encode_row(record)
        try:
            # one write per row so readers never see a partial record
            with open(path, "a", encoding="utf-8", newline="") as fh:
                fh.write(line)
        except OSError as exc:
            logger.error("Error appending to %s: %s", path, exc, exc_info=True)
            raise StoreError(str(exc))
        logger.info("Appended to %s: %s", table, record.username or record.id)

    def load_all(self, table: str) -> List[UserRecord]:
        path = self.initialize(table)
        try:
            with open(path, "r", encoding="utf-8", newline="") as fh:
                rows = list(csv.reader(fh))
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            logger.error("Error loading %s: %s", path, exc, exc_info=True)
            raise StoreError(str(exc))

        records = []
        for row in rows[1:]:
            record = UserRecord.from_row(dict(zip(FIELDNAMES, row)))
            if record.id and record.email:
                records.append(record)
        logger.debug("Loaded %d records from %s", len(records), path)
        return records


def _encode_row(record: UserRecord) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([str(getattr(record, name) or "") for name in FIELDNAMES])
    return buf.getvalue()


store = RecordStore()

from .user_record import UserRecord, FIELDNAMES, FAILED_LOGIN_NAME, new_record_id
from .record_store import RecordStore, store

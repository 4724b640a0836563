import unittest

from models import FIELDNAMES, RecordStore, UserRecord, new_record_id
from tests._util_tempdir import cleanup_dir, make_temp_dir
from utils.errors import StoreError


class TestRecordStoreUnit(unittest.TestCase):
    def setUp(self):
        self.td = make_temp_dir(prefix="signup_audit_store")
        self.store = RecordStore(data_dir=self.td)

    def tearDown(self):
        cleanup_dir(self.td)

    def test_initialize_writes_header_once(self):
        path = self.store.initialize("users")
        self.store.initialize("users")
        self.assertEqual(path.read_text(encoding="utf-8"), ",".join(FIELDNAMES) + "\n")

    def test_empty_table_loads_nothing(self):
        self.assertEqual(self.store.load_all("audit"), [])

    def test_append_then_load_is_lossless(self):
        tricky = UserRecord(
            id="1700000000000",
            email="o'neil@example.com",
            fullName='Shaquille "Shaq", O\'Neal',
            username="big,diesel",
            password='p"a,s\ns',
            birthday="1972-03-06",
        )
        self.store.append("users", tricky)
        loaded = self.store.load_all("users")
        self.assertEqual(loaded, [tricky])

    def test_rows_keep_append_order(self):
        for i in range(3):
            self.store.append("audit", UserRecord(id=f"id{i}", email=f"u{i}@x.io", username=f"u{i}"))
        self.assertEqual([r.id for r in self.store.load_all("audit")], ["id0", "id1", "id2"])

    def test_fields_are_quoted_with_doubled_quotes(self):
        self.store.append("users", UserRecord(id="1", email="a@b.co", fullName='say "hi"'))
        lines = self.store.path_for("users").read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[1], '"1","a@b.co","say ""hi""","","",""')

    def test_rows_without_id_or_email_are_dropped(self):
        path = self.store.initialize("users")
        with open(path, "a", encoding="utf-8", newline="") as fh:
            fh.write('"","x@y.zz","","","",""\n')
            fh.write('"7","","","","",""\n')
            fh.write('"8","ok@y.zz","Ok","ok","pw","2000-01-01"\n')
        loaded = self.store.load_all("users")
        self.assertEqual([r.id for r in loaded], ["8"])

    def test_tables_are_separate_files(self):
        self.store.append("users", UserRecord(id="1", email="a@b.co"))
        self.assertEqual(len(self.store.load_all("users")), 1)
        self.assertEqual(len(self.store.load_all("audit")), 0)
        self.assertNotEqual(self.store.path_for("users"), self.store.path_for("audit"))

    def test_invalid_utf8_raises_store_error(self):
        path = self.store.initialize("users")
        with open(path, "ab") as fh:
            fh.write(b'"1","a@b.co","\xff\xfe","u","p","2000-01-01"\n')
        with self.assertRaises(StoreError) as ctx:
            self.store.load_all("users")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_initialize_keeps_existing_rows(self):
        self.store.append("audit", UserRecord(id="1", email="a@b.co"))
        path = self.store.path_for("audit")
        path.unlink()
        path.write_text(",".join(FIELDNAMES) + '\n"2","c@d.ee","","","",""\n', encoding="utf-8")
        self.store.initialize("audit")
        self.assertEqual([r.id for r in self.store.load_all("audit")], ["2"])

    def test_unknown_table(self):
        with self.assertRaises(StoreError):
            self.store.append("sessions", UserRecord(id="1", email="a@b.co"))

    def test_unwritable_location_raises_store_error(self):
        blocker = self.td / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")
        store = RecordStore(data_dir=blocker / "nested")
        with self.assertRaises(StoreError) as ctx:
            store.load_all("users")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_unbound_store_outside_app(self):
        with self.assertRaises(StoreError):
            RecordStore().load_all("users")


class TestRecordIds(unittest.TestCase):
    def test_ids_are_unique_and_prefixed(self):
        ids = [new_record_id() for _ in range(200)]
        self.assertEqual(len(set(ids)), len(ids))
        self.assertTrue(new_record_id("login_").startswith("login_"))
        self.assertTrue(new_record_id("failed_")[len("failed_"):].isdigit())


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from uuid import uuid4


def make_temp_dir(*, prefix: str = "signup_audit_test") -> Path:
    """Create a fresh directory under the system temp dir for one test."""
    root = Path(tempfile.gettempdir()) / prefix / uuid4().hex
    root.mkdir(parents=True, exist_ok=True)
    return root


def cleanup_dir(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)

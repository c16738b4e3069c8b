# Root-level pytest configuration helpers applied to all tests
# - Ensure the repo root is importable so tests can `from models...` and `from database...`
# - Send log files to a throwaway directory instead of <repo>/logs

import os
from pathlib import Path
import sys
import tempfile


def _add_repo_root_to_sys_path() -> None:
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_add_repo_root_to_sys_path()
os.environ.setdefault("CALENDAR_LOG_DIR", tempfile.mkdtemp(prefix="calendar-test-logs-"))

"""Point the app at a throwaway SQLite file before any rxreturns module is imported.

A file DB (not :memory:) so TestClient worker threads share the same data.
"""

import os
import sys
import tempfile
from pathlib import Path

_test_db_file = tempfile.NamedTemporaryFile(suffix=".sqlite", delete=False)
_test_db_file.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_file.name}"
os.environ["SEED_DEMO_DATA"] = "false"
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def pytest_sessionfinish(session, exitstatus):
    try:
        os.unlink(_test_db_file.name)
    except OSError:
        pass

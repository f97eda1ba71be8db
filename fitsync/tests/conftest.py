from __future__ import annotations

import os
import tempfile

# Must run before any fitsync module builds its engine or reads config.
_TMP_DIR = tempfile.mkdtemp(prefix="fitsync-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'fitsync-test.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "fitsync-test.log")
os.environ["SECRET_KEY"] = "fitsync-test-secret"
os.environ["APP_ENV"] = "test"
os.environ["CLIENT_BACKOFF_BASE"] = "0"

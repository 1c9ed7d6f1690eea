"""
Pytest configuration and fixtures.
Adds src to sys.path and points the app at throwaway storage.
"""

import os
import sys
import tempfile
from pathlib import Path

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

# Route modules build their stores at import time.
_scratch = Path(tempfile.mkdtemp(prefix="recruitportal-tests-"))
os.environ.setdefault("RECRUITPORTAL_DB_URL", f"sqlite:///{_scratch / 'portal.db'}")
os.environ.setdefault("RECRUITPORTAL_LOG_DIR", str(_scratch / "logs"))
os.environ.setdefault("RECRUITPORTAL_ACCESS_TOKEN_SECRET", "test-secret")

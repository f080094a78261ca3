import os
import sys
from pathlib import Path

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DOCUMENT_STORE_BACKEND", "memory")
os.environ.setdefault("BLOB_STORE_BACKEND", "memory")

import pytest  # noqa: E402

from scene_engines.blob_store.repository import set_blob_store  # noqa: E402
from scene_engines.document_store.repository import set_document_store  # noqa: E402
from scene_engines.identity.provider import InMemoryIdentityProvider, set_identity_provider  # noqa: E402
from scene_engines.logging.audit import set_audit_logger  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_backends():
    set_document_store(None)
    set_blob_store(None)
    set_identity_provider(InMemoryIdentityProvider())
    set_audit_logger(None)
    yield
    set_document_store(None)
    set_blob_store(None)
    set_identity_provider(None)
    set_audit_logger(None)

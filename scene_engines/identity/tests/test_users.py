from scene_engines.common.errors import UpstreamUnavailable
from scene_engines.common.identity import SessionContext
from scene_engines.document_store.repository import InMemoryDocumentStore
from scene_engines.identity.models import Role
from scene_engines.identity.users import UserDirectory

CTX = SessionContext(id_token="tok")


def test_role_counts_accept_either_key_and_case():
    store = InMemoryDocumentStore(
        {
            "users": {
                "u1": {"role": "Admin"},
                "u2": {"Role": "staff"},
                "u3": {"role": "STAFF"},
                "u4": {"role": "Visitor"},
                "u5": "junk",
            }
        }
    )
    assert UserDirectory(store=store).role_counts(CTX) == {"admin": 1, "staff": 2}


def test_role_counts_degrade_to_zero():
    class DownStore(InMemoryDocumentStore):
        def get(self, ctx, path):
            raise UpstreamUnavailable("down")

    assert UserDirectory(store=DownStore()).role_counts(CTX) == {"admin": 0, "staff": 0}


def test_profile_and_default_role():
    store = InMemoryDocumentStore({"users": {"u1": {"name": "Ann", "email": "a@x", "phone": 123, "role": "admin"}}})
    users = UserDirectory(store=store)
    profile = users.get_profile(CTX, "u1")
    assert profile.name == "Ann"
    assert profile.phone == "123"
    assert profile.role is Role.ADMIN
    assert users.get_profile(CTX, "missing") is None
    assert users.get_role(CTX, "missing") is Role.STAFF

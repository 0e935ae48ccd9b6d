import pytest
from sqlalchemy.exc import OperationalError

from storefront.domain.errors import PermissionDenied, StoreFailure
from storefront.repos.user_repo import SuperuserRepo
from storefront.services.permission_service import PermissionService, AdminCheck

from conftest import ADMIN_ID


@pytest.fixture
def broken_lookup(monkeypatch):
    def boom(self, user_id):
        raise OperationalError("SELECT superusers", {}, Exception("connection reset"))

    monkeypatch.setattr(SuperuserRepo, "get_by_id", boom)


def test_superuser_granted(db, catalog):
    svc = PermissionService(db)
    assert svc.is_superuser(ADMIN_ID) is True
    assert svc.check_superuser(ADMIN_ID) is AdminCheck.GRANTED


def test_absent_and_failed_lookup_look_the_same(db, catalog, monkeypatch):
    svc = PermissionService(db)
    absent = svc.is_superuser("u1")

    def boom(self, user_id):
        raise OperationalError("SELECT superusers", {}, Exception("connection reset"))

    monkeypatch.setattr(SuperuserRepo, "get_by_id", boom)
    failed = svc.is_superuser(ADMIN_ID)

    assert absent is False
    assert failed is False
    assert absent == failed


def test_empty_user_id_is_not_superuser(db):
    assert PermissionService(db).is_superuser(None) is False
    assert PermissionService(db).is_superuser("") is False


def test_check_tells_outcomes_apart(db, catalog, broken_lookup):
    svc = PermissionService(db)
    assert svc.check_superuser(ADMIN_ID) is AdminCheck.LOOKUP_FAILED


def test_require_superuser_raises_per_outcome(db, catalog):
    svc = PermissionService(db)
    svc.require_superuser(ADMIN_ID, "add sizes")

    with pytest.raises(PermissionDenied) as e:
        svc.require_superuser("u1", "add sizes")
    assert e.value.message == "Only superusers are allowed to add sizes."


def test_require_superuser_lookup_failure(db, catalog, broken_lookup):
    with pytest.raises(StoreFailure):
        PermissionService(db).require_superuser(ADMIN_ID, "add sizes")


def test_lookup_failure_is_server_error_over_http(client, catalog, broken_lookup):
    resp = client.post("/api/sizes/add", json={"user_id": ADMIN_ID, "size_name": "XL"})
    assert resp.status_code == 500

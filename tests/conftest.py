"""Pytest configuration: in-memory SQLite plus fakes for Redis, auth provider and mail."""

from decimal import Decimal

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_auth_client, get_notifier
from storefront.data.database import Base, get_db
from storefront.data.models import (
    ProductModel,
    CategoryModel,
    SizeModel,
    ProductCategoryModel,
    ProductSizeModel,
    SuperuserModel,
    UserModel,
)
from storefront.services.auth_client import AuthProviderError


# One shared in-memory connection so every session sees the same tables
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_ID = "admin-1"
ADMIN_EMAIL = "admin@shop.test"
ADMIN_PASSWORD = "s3cret-admin"


class FakeLockService:
    def __init__(self):
        self.held = {}
        self.calls = []

    def acquire_place_order_lock(self, user_id, token, ttl):
        self.calls.append(("acquire", user_id))
        if user_id in self.held:
            return False
        self.held[user_id] = token
        return True

    def release_place_order_lock(self, user_id, token):
        self.calls.append(("release", user_id))
        if self.held.get(user_id) == token:
            del self.held[user_id]
            return True
        return False


class FakeAuthClient:
    """In-memory stand-in for the Supabase Auth API."""

    def __init__(self):
        self.users = {}
        self.passwords = {}
        self.updates = []

    def sign_up(self, email, password, metadata):
        if email in {u["email"] for u in self.users.values()}:
            raise AuthProviderError("User already registered", status=422)
        user_id = f"user-{len(self.users) + 1}"
        self.users[user_id] = {
            "id": user_id,
            "email": email,
            "email_confirmed_at": None,
            "user_metadata": dict(metadata),
        }
        self.passwords[user_id] = password
        return self.users[user_id]

    def sign_in_with_password(self, email, password):
        for user_id, user in self.users.items():
            if user["email"] == email and self.passwords[user_id] == password:
                return user
        raise AuthProviderError("Invalid login credentials", status=400)

    def find_user_by_email(self, email):
        for user in self.users.values():
            if user["email"].lower() == email.lower():
                return user
        return None

    def update_user(self, user_id, attributes):
        self.updates.append((user_id, attributes))
        user = self.users[user_id]
        if "password" in attributes:
            self.passwords[user_id] = attributes["password"]
        if "user_metadata" in attributes:
            user["user_metadata"] = attributes["user_metadata"]
        if attributes.get("email_confirm"):
            user["email_confirmed_at"] = "2026-01-01T00:00:00Z"
        return user


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send_otp_email(self, email, otp, purpose):
        self.sent.append((email, otp, purpose))

    def last_code(self, email):
        return [otp for e, otp, _ in self.sent if e == email][-1]


@pytest.fixture(scope="function", autouse=True)
def setup_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fresh_session():
    """Factory for sessions opened after a request, to read committed state."""
    opened = []

    def _open():
        s = TestingSessionLocal()
        opened.append(s)
        return s

    yield _open
    for s in opened:
        s.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def auth_client():
    return FakeAuthClient()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(lock_service, auth_client, notifier):
    app = create_app()

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_auth_client] = lambda: auth_client
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as c:
        yield c


@pytest.fixture
def catalog(db):
    """
    Products 5 and 7, size 3 offered by product 7 only, one category,
    a superuser and a regular user.
    """
    db.add_all(
        [
            CategoryModel(id=1, name="Shirts"),
            SizeModel(id=3, size_name="M"),
            SizeModel(id=4, size_name="L"),
            ProductModel(
                id=5,
                title="Plain tee",
                description="Cotton",
                price=Decimal("19.99"),
                images=["https://cdn.test/tee.jpg"],
                stock_quantity=10,
            ),
            ProductModel(
                id=7,
                title="Oxford shirt",
                price=Decimal("49.00"),
                images=["https://cdn.test/oxford.jpg"],
                stock_quantity=3,
            ),
            SuperuserModel(
                id=ADMIN_ID,
                email=ADMIN_EMAIL,
                username="admin",
                password=bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt()).decode(),
            ),
            UserModel(id="u1", email="u1@shop.test", username="u1"),
        ]
    )
    db.flush()
    db.add_all(
        [
            ProductCategoryModel(product_id=5, category_id=1),
            ProductCategoryModel(product_id=7, category_id=1),
            ProductSizeModel(product_id=7, size_id=3),
        ]
    )
    db.commit()
    return db

import importlib

from fastapi.testclient import TestClient
from sqlalchemy import inspect
from sqlalchemy.engine import make_url

from conftest import engine
from storefront import main
from storefront.utils import settings


def test_startup_creates_tables(monkeypatch):
    main.Base.metadata.drop_all(bind=engine)
    monkeypatch.setattr(main, "engine", engine)

    with TestClient(main.app) as c:
        assert "orders" in inspect(engine).get_table_names()
        assert c.get("/health").json() == {"status": "ok"}


def test_init_db_builds_schema():
    main.Base.metadata.drop_all(bind=engine)

    main.init_db(bind=engine)

    tables = set(inspect(engine).get_table_names())
    assert {"orders", "orderitems", "cart", "superusers", "otps"} <= tables


def test_default_database_url_uses_declared_driver(monkeypatch):
    with monkeypatch.context() as m:
        m.delenv("DATABASE_URL", raising=False)
        importlib.reload(settings)
        url = make_url(settings.DATABASE_URL)
    importlib.reload(settings)

    assert url.get_backend_name() == "postgresql"
    assert url.get_driver_name() == "psycopg2"

import pytest
from fastapi.testclient import TestClient

from loyalty.core.config import Settings
from loyalty.core.security import PasswordHasher
from loyalty.db.base import Base
from loyalty.db.session import build_engine, build_sessionmaker
from loyalty.main import create_app

PASSWORD = "pw123456"


class LoyaltyApi:
    """Thin helper over TestClient for the JSON endpoints."""

    password = PASSWORD

    def __init__(self, client: TestClient):
        self.client = client

    @staticmethod
    def bearer(token):
        return {"Authorization": f"Bearer {token}"}

    def signup(self, email, role=None, password=PASSWORD):
        body = {"email": email, "password": password}
        if role is not None:
            body["role"] = role
        return self.client.post("/api/auth/signup", json=body)

    def login(self, email, password=PASSWORD):
        return self.client.post("/api/auth/login", json={"email": email, "password": password})

    def profile(self, token=None, headers=None):
        if token is not None:
            headers = self.bearer(token)
        return self.client.get("/api/user/profile", headers=headers or {})

    def add_points(self, token, loyalty_code, points):
        return self.client.post(
            "/api/merchant/add-points",
            json={"loyaltyCode": loyalty_code, "points": points},
            headers=self.bearer(token),
        )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'loyalty-test.db'}",
        secret_key="test-secret",
        bcrypt_rounds=4,
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def api(client):
    return LoyaltyApi(client)


@pytest.fixture
def customer(api):
    r = api.signup("a@x.com", role="customer")
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def merchant(api):
    r = api.signup("shop@x.com", role="merchant")
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def hasher(settings):
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
async def sessionmaker(settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_sessionmaker(engine)
    await engine.dispose()

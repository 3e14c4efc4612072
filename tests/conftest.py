import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")

import pytest
from fastapi.testclient import TestClient

from fakes import FakeSupabase
from nani_connect.main import app
from nani_connect.supabase_client import get_supabase_anon_client, get_supabase_client
from nani_connect.utils.notifications import Notifier


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase_client] = lambda: supabase
    app.dependency_overrides[get_supabase_anon_client] = lambda: supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seller(supabase):
    user, token = supabase.add_user("seller@example.com", role="seller", latitude=13.0900, longitude=80.2800)
    return user, bearer(token)


@pytest.fixture
def buyer(supabase):
    user, token = supabase.add_user("buyer@example.com", role="buyer")
    return user, bearer(token)

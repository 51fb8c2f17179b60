"""Shared fixtures: an in-memory database per test and an HTTP client bound to the app."""

import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SECRET_KEY", "test-secret")

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from components.checklist.models import ChecklistCategory, ChecklistItem
from components.core.cache import ChangeFeed, QueryCache
from components.core.database import DatabaseManager
from components.core.init_db import get_cache, get_db, get_feed
from components.discussions.models import DiscussionPrompt
from components.modules.models import Lesson, Module
from components.resources.models import Resource
from components.user.repository import UserRepository
from components.user.schemas import UserCreate
from restapi.router import create_app

PASSWORD = "Secret123"


@pytest.fixture
async def db_manager():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    manager = DatabaseManager(engine)
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_db() as session:
        yield session


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def cache(feed):
    cache = QueryCache(ttl_seconds=300)
    cache.attach(feed)
    return cache


@pytest.fixture
def app(db_manager, cache, feed):
    app = create_app()

    async def override_get_db():
        async with db_manager.get_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_feed] = lambda: feed
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def register(client, email, password=PASSWORD, **names):
    response = await client.post("/auth/register", json={"email": email, "password": password, **names})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(user):
    return {"Authorization": f"Bearer {user['access_token']}"}


@pytest.fixture
async def user(client):
    return await register(client, "amina@example.com", first_name="Amina", last_name="Khan")


@pytest.fixture
def auth(user):
    return bearer(user)


@pytest.fixture
async def partner_user(client):
    return await register(client, "yusuf@example.com", first_name="Yusuf", last_name="Ali")


@pytest.fixture
async def admin_auth(client, session):
    await UserRepository(session).create(
        UserCreate(email="admin@example.com", password=PASSWORD, first_name="Site", last_name="Admin"),
        role="admin",
    )
    response = await client.post("/auth/login", data={"username": "admin@example.com", "password": PASSWORD})
    assert response.status_code == 200, response.text
    return bearer(response.json())


@pytest.fixture
async def content(session):
    """A small catalogue: two checklist categories, two modules, three prompts, two resources."""
    spiritual = ChecklistCategory(
        slug="spiritual",
        name="Spiritual Preparation",
        sort_order=1,
        items=[
            ChecklistItem(title="Perform Istikhara Prayer", is_required=True, sort_order=1),
            ChecklistItem(title="Learn Marriage Duas", is_required=False, sort_order=2),
        ],
    )
    financial = ChecklistCategory(
        slug="financial",
        name="Financial Planning",
        sort_order=2,
        items=[
            ChecklistItem(title="Agree on Mahr Amount", is_required=True, sort_order=1),
            ChecklistItem(title="Create Wedding Budget", is_required=True, sort_order=2),
        ],
    )
    foundations = Module(
        slug="foundations",
        title="Islamic Marriage Foundations",
        sort_order=1,
        is_published=True,
        lessons=[
            Lesson(title="The Purpose of Marriage", content="...", sort_order=1),
            Lesson(title="Rights of the Wife", content="...", sort_order=2),
        ],
    )
    draft = Module(
        slug="draft",
        title="Upcoming Module",
        sort_order=2,
        is_published=False,
        lessons=[Lesson(title="Coming soon", sort_order=1)],
    )
    prompts = [
        DiscussionPrompt(category="values", title="Core Islamic Values", questions=["How important is Islam?"], sort_order=1),
        DiscussionPrompt(category="values", title="Life Priorities", questions=["Top 3 priorities?"], sort_order=2),
        DiscussionPrompt(category="finances", title="Mahr & Wedding Budget", questions=["What mahr is fair?"], sort_order=3),
    ]
    resources = [
        Resource(title="Before You Tie The Knot", type="pdf", category="Islamic Guidance", author="Mufti Menk", is_featured=True),
        Resource(title="The 5 Love Languages", type="link", category="Communication", author="Gary Chapman"),
    ]
    session.add_all([spiritual, financial, foundations, draft, *prompts, *resources])
    await session.commit()
    return {
        "categories": [spiritual, financial],
        "items": spiritual.items + financial.items,
        "modules": [foundations, draft],
        "prompts": prompts,
        "resources": resources,
    }


async def connect(client, inviter, invitee):
    """Connect two registered users through a code invitation."""
    response = await client.post("/partner/invitations", headers=bearer(inviter), json={})
    assert response.status_code == 201, response.text
    code = response.json()["invitation_code"]
    response = await client.post(
        "/partner/invitations/accept", headers=bearer(invitee), json={"invitation_code": code}
    )
    assert response.status_code == 200, response.text
    return response.json()

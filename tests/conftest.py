"""
Shared fixtures for the campaign dashboard tests.

Every test gets its own SQLite database file with all tables created, so the
real repositories, unique constraints and transactions are exercised.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["JWT_SECRET"] = ""
os.environ["SLACK_WEBHOOK_URL"] = ""
os.environ["SMTP_HOST"] = ""

import httpx
import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from campaign_dashboard.container import Container
from campaign_dashboard.db import init_db
from campaign_dashboard.entities import Campaign, Issuer, User
from campaign_dashboard.main import create_app
from campaign_dashboard.repositories.campaigns import CampaignRepository, IssuerRepository, UserRepository
from campaign_dashboard.services.notify import Notifier
from campaign_dashboard.settings import get_settings


# ====================
# Database
# ====================


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite engine so separate sessions see each other's commits"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


# ====================
# Wiring
# ====================


@pytest.fixture
def settings():
    return get_settings().model_copy(update={"jwt_secret": None, "slack_webhook_url": None, "smtp_host": None})


@pytest.fixture
def container(settings, session_factory):
    return Container.build(settings, session_factory, Notifier(settings))


@pytest_asyncio.fixture
async def client(settings, session_factory):
    app = create_app(settings=settings, session_factory=session_factory)
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def make_token():
    """Signs an x-auth-token for a user and/or admin id"""

    def _make(settings, user_id=None, admin_id=None):
        payload = {}
        if user_id:
            payload["userId"] = user_id
        if admin_id:
            payload["adminUserId"] = admin_id
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return _make


# ====================
# Seed data
# ====================


async def seed_campaign(
    session,
    name: str,
    slug: str,
    stage: str = "live",
    twitter: str | None = None,
    with_issuer: bool = True,
) -> Campaign:
    issuer_id = None
    if with_issuer:
        issuer = Issuer.create(f"{name} Inc", twitter=twitter, website=f"https://{slug}.example.com")
        await IssuerRepository(session).create(issuer)
        issuer_id = issuer.issuer_id
    else:
        issuer_id = "missing-issuer"
    campaign = Campaign.create(name, slug, campaign_stage=stage, issuer_id=issuer_id, summary=f"{name} summary")
    await CampaignRepository(session).create(campaign)
    await session.commit()
    return campaign


@pytest_asyncio.fixture
async def acme(session):
    """Campaign 'acme' whose issuer has twitter '@acme' and no dashboard rows"""
    return await seed_campaign(session, "Acme Seed Round", "acme", twitter="@acme")


@pytest_asyncio.fixture
async def users(session):
    repo = UserRepository(session)
    owner = User(id="user-1", first_name="Olivia", last_name="Owner", email="olivia@example.com")
    admin = User(id="admin-1", first_name="Adam", last_name="Admin", email="adam@example.com")
    await repo.create(owner)
    await repo.create(admin)
    await session.commit()
    return owner, admin


@pytest.fixture
def seed(session):
    """Factory fixture: ``await seed("Name", "slug", stage=..., twitter=...)``"""

    async def _seed(name: str, slug: str, **kwargs) -> Campaign:
        return await seed_campaign(session, name, slug, **kwargs)

    return _seed

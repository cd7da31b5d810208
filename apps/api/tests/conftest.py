import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from database import Base, get_db
from main import app


@pytest_asyncio.fixture
async def idea_session_maker(tmp_path):
    """Fresh SQLite database per test, schema created from the models."""
    db_path = tmp_path / "ideas.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield session_maker

    await engine.dispose()


@pytest_asyncio.fixture
async def idea_session(idea_session_maker):
    async with idea_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def api_client(idea_session_maker):
    async def override_get_db():
        async with idea_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client, idea_session_maker

    app.dependency_overrides.pop(get_db, None)

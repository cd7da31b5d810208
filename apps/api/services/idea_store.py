"""SQLAlchemy-backed record store for ideas."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models.idea import Idea
from services.ports import IdeaStore

UPDATABLE_FIELDS = {"published_markup"}


class SqlIdeaStore(IdeaStore):
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, *, source_url: str, competitor_name: str, weaknesses: List[str]) -> str:
        row = Idea(
            id=str(uuid.uuid4()),
            source_url=source_url,
            competitor_name=competitor_name,
            weaknesses=[str(item) for item in weaknesses],
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(row)
        await self.db.commit()
        return row.id

    async def get(self, idea_id: str) -> Optional[Idea]:
        result = await self.db.execute(select(Idea).where(Idea.id == str(idea_id)))
        return result.scalar_one_or_none()

    async def update(self, idea_id: str, **fields: Any) -> bool:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields are not updatable: {', '.join(sorted(unknown))}")
        idea = await self.get(idea_id)
        if not idea:
            return False
        for name, value in fields.items():
            setattr(idea, name, value)
        if "published_markup" in fields:
            idea.published_at = datetime.now(timezone.utc)
        await self.db.commit()
        return True

    async def list(self) -> List[Idea]:
        result = await self.db.execute(select(Idea).order_by(Idea.created_at.desc(), Idea.id.desc()))
        return list(result.scalars().all())

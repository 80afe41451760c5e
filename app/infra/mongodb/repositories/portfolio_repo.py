"""
Portfolio Repository - per-user portfolio items fed to the matcher.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from app.infra.mongodb.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PortfolioRepository(BaseRepository[Dict[str, Any]]):
    """
    Portfolio items owned by a user.

    Fields:
    - item_id: Stable public id
    - title / description: What was built
    - tags: Industry or deliverable tags
    - skills: Tech stack used
    - url: Link to the live work
    """

    collection_name = "portfolio_items"

    def create(
        self,
        user_id: str,
        title: str,
        description: str = "",
        tags: Optional[List[str]] = None,
        skills: Optional[List[str]] = None,
        url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a portfolio entry and return its ids."""
        item_id = f"port_{uuid.uuid4().hex[:12]}"
        doc = {
            "item_id": item_id,
            "user_id": user_id,
            "title": title.strip(),
            "description": description.strip(),
            "tags": [t.strip() for t in tags or [] if t],
            "skills": [s.strip() for s in skills or [] if s],
            "url": url,
            "created_at": datetime.utcnow(),
        }
        db_id = self.insert_one(doc)
        logger.info(f"[PortfolioRepo] Created item {item_id} for user {user_id}")
        return {"item_id": item_id, "db_id": db_id}

    def list_for_user(self, user_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Most recent portfolio items for a user."""
        return self.find_many({"user_id": user_id}, limit=limit, sort=[("created_at", DESCENDING)])


_portfolio_repo: Optional[PortfolioRepository] = None


def get_portfolio_repo() -> PortfolioRepository:
    global _portfolio_repo
    if _portfolio_repo is None:
        _portfolio_repo = PortfolioRepository()
    return _portfolio_repo

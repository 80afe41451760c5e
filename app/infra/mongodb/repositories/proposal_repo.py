"""
Proposal Repository

Persists generated proposals (drafts) with their pipeline metadata.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from app.infra.mongodb.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProposalRepository(BaseRepository[Dict[str, Any]]):
    """Repository for generated proposals."""

    collection_name = "proposals"

    def save(self, record: Dict[str, Any]) -> str:
        """
        Save a generated proposal.

        Args:
            record: Proposal record built by the pipeline

        Returns:
            Inserted document ID
        """
        document = dict(record)
        document["created_at"] = datetime.utcnow()
        document["updated_at"] = document["created_at"]
        proposal_id = self.insert_one(document)
        logger.info(f"[ProposalRepo] Saved proposal {proposal_id} for user {record.get('user_id')}")
        return proposal_id

    def list_for_user(self, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        return self.find_many({"user_id": user_id}, limit=limit, sort=[("created_at", DESCENDING)])


_proposal_repo: Optional[ProposalRepository] = None


def get_proposal_repo() -> ProposalRepository:
    global _proposal_repo
    if _proposal_repo is None:
        _proposal_repo = ProposalRepository()
    return _proposal_repo

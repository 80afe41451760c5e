"""
Usage Repository

Monthly proposal counters per user (usage_tracking) and the plan quota gate
built on top of them.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from app.config import settings
from app.infra.mongodb.base_repository import BaseRepository
from app.services.collaborators import QuotaStatus

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "free"

UPGRADE_MESSAGES = {
    "free": "You've reached your {limit} free proposals for this month. Upgrade to Starter for {starter} proposals/month.",
    "starter": "You've reached your {limit} proposals for this month. Upgrade to Pro for {pro} proposals/month.",
    "pro": "You've reached your {limit} proposals for this month. Please contact support for higher limits.",
}


def get_plan_quota(plan: str) -> int:
    quotas = {
        "free": settings.FREE_PLAN_QUOTA,
        "starter": settings.STARTER_PLAN_QUOTA,
        "pro": settings.PRO_PLAN_QUOTA,
    }
    return quotas.get(plan, settings.FREE_PLAN_QUOTA)


def month_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """First instant of this month and of the next."""
    now = now or datetime.utcnow()
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1)
    else:
        end = datetime(now.year, now.month + 1, 1)
    return start, end


class UsageRepository(BaseRepository[Dict[str, Any]]):
    """One document per user per calendar month."""

    collection_name = "usage_tracking"

    def get_monthly_count(self, user_id: str, now: Optional[datetime] = None) -> int:
        period_start, _ = month_bounds(now)
        doc = self.find_one({"user_id": user_id, "period_start": period_start})
        return int(doc.get("proposals_generated", 0)) if doc else 0

    def increment(self, user_id: str, now: Optional[datetime] = None) -> None:
        period_start, period_end = month_bounds(now)
        self.update_one(
            {"user_id": user_id, "period_start": period_start},
            {
                "$inc": {"proposals_generated": 1},
                "$setOnInsert": {"period_end": period_end, "created_at": datetime.utcnow()},
            },
            upsert=True,
        )


class UserPlanRepository(BaseRepository[Dict[str, Any]]):
    """Reads the subscription plan (and optional quota override) of a user."""

    collection_name = "users"

    def get_plan(self, user_id: str) -> Tuple[str, int]:
        doc = self.find_one({"user_id": user_id}) or {}
        plan = doc.get("plan") or DEFAULT_PLAN
        limit = doc.get("proposal_quota_monthly") or get_plan_quota(plan)
        return plan, int(limit)


class MongoQuotaGate:
    """Monthly plan quota backed by usage_tracking."""

    def __init__(
        self,
        usage_repo: Optional[UsageRepository] = None,
        plan_repo: Optional[UserPlanRepository] = None,
    ):
        self.usage_repo = usage_repo or UsageRepository()
        self.plan_repo = plan_repo or UserPlanRepository()

    def check(self, user_id: str) -> QuotaStatus:
        plan, limit = self.plan_repo.get_plan(user_id)
        used = self.usage_repo.get_monthly_count(user_id)

        if used >= limit:
            message = UPGRADE_MESSAGES.get(plan, UPGRADE_MESSAGES["pro"]).format(
                limit=limit, starter=settings.STARTER_PLAN_QUOTA, pro=settings.PRO_PLAN_QUOTA
            )
            logger.info(f"[QuotaGate] User {user_id} over quota: {used}/{limit} ({plan})")
            return QuotaStatus(allowed=False, used=used, limit=limit, plan=plan, message=message)

        return QuotaStatus(allowed=True, used=used, limit=limit, plan=plan)

    def increment(self, user_id: str) -> None:
        self.usage_repo.increment(user_id)


_quota_gate: Optional[MongoQuotaGate] = None


def get_quota_gate() -> MongoQuotaGate:
    global _quota_gate
    if _quota_gate is None:
        _quota_gate = MongoQuotaGate()
    return _quota_gate

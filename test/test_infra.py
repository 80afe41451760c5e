"""
Tests for the rate-limit cache and the MongoDB repositories, using an
in-memory collection in place of a live server.
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime

from app.infra.cache import ExpiringCache, InMemoryRateLimiter
from app.infra.mongodb.repositories.portfolio_repo import PortfolioRepository
from app.infra.mongodb.repositories.proposal_repo import ProposalRepository
from app.infra.mongodb.repositories.usage_repo import (
    MongoQuotaGate,
    UsageRepository,
    UserPlanRepository,
    month_bounds,
)
from app.models.proposal_schema import PortfolioItem
from fakes import FakeCollection


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


# ===================== CACHE / RATE LIMIT =====================

def test_expiring_cache_expires_entries():
    clock = FakeClock()
    cache = ExpiringCache(clock=clock)
    cache.set("k", "v", ttl_seconds=10)

    assert cache.get("k") == "v"
    clock.now += 11
    assert cache.get("k") is None


def test_rate_limiter_blocks_after_limit_and_resets():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(limit=2, window_seconds=60, cache=ExpiringCache(clock=clock))

    assert limiter.check("u1:generate_proposal").remaining == 1
    assert limiter.check("u1:generate_proposal").allowed
    blocked = limiter.check("u1:generate_proposal")
    assert not blocked.allowed
    assert blocked.retry_after == 60

    # other keys have their own window
    assert limiter.check("u2:generate_proposal").allowed

    clock.now += 61
    assert limiter.check("u1:generate_proposal").allowed


def test_rate_limiter_uses_injected_empty_cache():
    cache = ExpiringCache(clock=FakeClock())
    limiter = InMemoryRateLimiter(limit=1, window_seconds=60, cache=cache)

    assert limiter.cache is cache


def test_expired_windows_are_evicted():
    clock = FakeClock()
    cache = ExpiringCache(clock=clock)
    limiter = InMemoryRateLimiter(limit=5, window_seconds=60, cache=cache)

    for i in range(1000):
        limiter.check(f"user-{i}:generate_proposal")
    assert len(cache) == 1000

    clock.now += 3600
    limiter.check("late-user:generate_proposal")

    assert len(cache) == 1


# ===================== REPOSITORIES =====================

def test_portfolio_repo_round_trip():
    repo = PortfolioRepository(collection=FakeCollection())
    created = repo.create("user-1", "Stripe dashboard", "React billing dashboard", tags=["saas"], skills=["React"])
    repo.create("user-2", "Other user's work")

    items = repo.list_for_user("user-1")

    assert len(items) == 1
    item = PortfolioItem.from_dict(items[0])
    assert item.id == created["item_id"]
    assert item.skills == ("React",)


def test_proposal_repo_save_stamps_timestamps():
    collection = FakeCollection()
    repo = ProposalRepository(collection=collection)

    proposal_id = repo.save({"user_id": "user-1", "generated_proposal": "text", "status": "draft"})

    assert proposal_id == "oid1"
    assert isinstance(collection.documents[0]["created_at"], datetime)


def test_quota_gate_counts_monthly_usage():
    usage = UsageRepository(collection=FakeCollection())
    plans = UserPlanRepository(collection=FakeCollection())
    gate = MongoQuotaGate(usage_repo=usage, plan_repo=plans)

    for _ in range(3):
        assert gate.check("user-1").allowed
        gate.increment("user-1")

    status = gate.check("user-1")
    assert not status.allowed
    assert status.used == 3
    assert status.plan == "free"
    assert "Upgrade to Starter" in status.message


def test_quota_gate_respects_plan_and_override():
    plans_collection = FakeCollection()
    plans_collection.insert_one({"user_id": "pro-user", "plan": "pro"})
    plans_collection.insert_one({"user_id": "custom", "plan": "starter", "proposal_quota_monthly": 7})
    gate = MongoQuotaGate(
        usage_repo=UsageRepository(collection=FakeCollection()),
        plan_repo=UserPlanRepository(collection=plans_collection),
    )

    assert gate.check("pro-user").limit == 300
    assert gate.check("custom").limit == 7


def test_month_bounds_december_rollover():
    start, end = month_bounds(datetime(2025, 12, 15))
    assert start == datetime(2025, 12, 1)
    assert end == datetime(2026, 1, 1)

"""
MongoDB Repositories - Domain-specific data access.

- PortfolioRepository - Per-user portfolio items for matching
- ProposalRepository - Generated proposal drafts
- UsageRepository, UserPlanRepository, MongoQuotaGate - Monthly plan quotas
"""

from app.infra.mongodb.repositories.portfolio_repo import (
    PortfolioRepository,
    get_portfolio_repo,
)

from app.infra.mongodb.repositories.proposal_repo import (
    ProposalRepository,
    get_proposal_repo,
)

from app.infra.mongodb.repositories.usage_repo import (
    MongoQuotaGate,
    UsageRepository,
    UserPlanRepository,
    get_plan_quota,
    get_quota_gate,
)

__all__ = [
    # Portfolio
    "PortfolioRepository",
    "get_portfolio_repo",
    # Proposals
    "ProposalRepository",
    "get_proposal_repo",
    # Usage & quota
    "MongoQuotaGate",
    "UsageRepository",
    "UserPlanRepository",
    "get_plan_quota",
    "get_quota_gate",
]

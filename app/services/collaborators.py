"""
Narrow interfaces the pipeline consumes.

Implementations live in app/utils/openai_service.py (completion) and
app/infra (persistence, quota, rate limiting). Tests supply in-memory fakes.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol


class CompletionService(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        response_format: Optional[str] = None,
    ) -> str:
        ...


class PortfolioStore(Protocol):
    def list_for_user(self, user_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        ...


class ProposalStore(Protocol):
    def save(self, record: Dict[str, Any]) -> str:
        ...


@dataclass
class QuotaStatus:
    allowed: bool
    used: int
    limit: int
    plan: str
    message: Optional[str] = None

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.used)


class QuotaGate(Protocol):
    def check(self, user_id: str) -> QuotaStatus:
        ...

    def increment(self, user_id: str) -> None:
        ...


@dataclass
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0


class RateLimiter(Protocol):
    def check(self, key: str) -> RateLimitStatus:
        ...

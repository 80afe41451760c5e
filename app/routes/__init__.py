"""
Routes package - exports all API routers
"""
from app.routes.proposals import router as proposals_router

__all__ = ["proposals_router"]

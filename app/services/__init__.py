"""
Application Services - Business Logic Layer

Services hold the proposal pipeline logic, coordinating the completion
client, the prompt engine and the persistence collaborators.
"""

from app.services.auxiliary_generators import AuxiliaryGenerators
from app.services.proposal_engine import ProposalEngine
from app.services.proposal_service import ProposalService, get_proposal_service
from app.services.quality_evaluator import QualityEvaluator
from app.services.rfp_extractor_service import RFPExtractorService

__all__ = [
    "AuxiliaryGenerators",
    "ProposalEngine",
    "ProposalService",
    "get_proposal_service",
    "QualityEvaluator",
    "RFPExtractorService",
]

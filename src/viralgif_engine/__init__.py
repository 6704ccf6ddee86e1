"""ViralGif-Engine: quota-gated viral marketing text and GIF generation."""

from viralgif_engine.generation.orchestrator import GenerationOrchestrator, GenerationResult
from viralgif_engine.generation.validation import GenerationRequest, validate_request
from viralgif_engine.identity.types import Anonymous, Authenticated, Tier
from viralgif_engine.quota.gate import QuotaDecision, QuotaGate
from viralgif_engine.usage.ledger import UsageLedger

__all__ = [
    "Anonymous",
    "Authenticated",
    "GenerationOrchestrator",
    "GenerationRequest",
    "GenerationResult",
    "QuotaDecision",
    "QuotaGate",
    "Tier",
    "UsageLedger",
    "validate_request",
]
__version__ = "0.1.0"

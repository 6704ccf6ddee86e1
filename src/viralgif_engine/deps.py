"""Dependency injection singletons for ViralGif-Engine."""

from viralgif_engine.accounts.service import UserStore
from viralgif_engine.adapters.giphy import GiphyClient
from viralgif_engine.adapters.openai_text import OpenAITemplateRanker, OpenAITextGenerator
from viralgif_engine.catalog.provider import StaticDataProvider
from viralgif_engine.common.config import get_settings
from viralgif_engine.common.database import DatabaseManager
from viralgif_engine.common.security import SessionVerifier
from viralgif_engine.generation.media import MediaResolver
from viralgif_engine.generation.orchestrator import GenerationOrchestrator
from viralgif_engine.generation.selection import default_selector
from viralgif_engine.identity.resolver import IdentityResolver
from viralgif_engine.quota.gate import QuotaGate
from viralgif_engine.usage.ledger import UsageLedger

_db: DatabaseManager | None = None
_users: UserStore | None = None
_verifier: SessionVerifier | None = None
_resolver: IdentityResolver | None = None
_ledger: UsageLedger | None = None
_gate: QuotaGate | None = None
_catalog: StaticDataProvider | None = None
_giphy: GiphyClient | None = None
_orchestrator: GenerationOrchestrator | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_user_store() -> UserStore:
    global _users
    if _users is None:
        _users = UserStore()
    return _users


def get_session_verifier() -> SessionVerifier:
    global _verifier
    if _verifier is None:
        _verifier = SessionVerifier(get_settings())
    return _verifier


def get_identity_resolver() -> IdentityResolver:
    global _resolver
    if _resolver is None:
        _resolver = IdentityResolver(
            get_settings(), get_db(), get_session_verifier(), get_user_store(),
        )
    return _resolver


def get_ledger() -> UsageLedger:
    global _ledger
    if _ledger is None:
        _ledger = UsageLedger(get_db())
    return _ledger


def get_quota_gate() -> QuotaGate:
    global _gate
    if _gate is None:
        _gate = QuotaGate(get_settings(), get_ledger())
    return _gate


def get_catalog() -> StaticDataProvider:
    global _catalog
    if _catalog is None:
        _catalog = StaticDataProvider(get_settings().data_dir or None)
    return _catalog


def get_giphy_client() -> GiphyClient:
    global _giphy
    if _giphy is None:
        _giphy = GiphyClient(get_settings())
    return _giphy


def get_orchestrator() -> GenerationOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        settings = get_settings()
        ranker = OpenAITemplateRanker(settings) if settings.ai_template_selection else None
        _orchestrator = GenerationOrchestrator(
            catalog=get_catalog(),
            text_generator=OpenAITextGenerator(settings),
            selector=default_selector(ranker),
            media=MediaResolver.for_client(get_giphy_client()),
            ledger=get_ledger(),
        )
    return _orchestrator


def set_orchestrator(orchestrator: GenerationOrchestrator) -> None:
    """Install a pre-built orchestrator (tests and embedding applications)."""
    global _orchestrator
    _orchestrator = orchestrator


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _users, _verifier, _resolver, _ledger, _gate, _catalog, _giphy, _orchestrator
    _db = None
    _users = None
    _verifier = None
    _resolver = None
    _ledger = None
    _gate = None
    _catalog = None
    _giphy = None
    _orchestrator = None

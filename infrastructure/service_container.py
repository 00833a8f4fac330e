"""
Service container for dependency injection and initialization.

This module centralizes creation and wiring of the interaction pipeline:
repositories, permission evaluation, telemetry, rate limiting, the command
registry and the dispatcher that ties them together.

Usage:
    container = ServiceContainer(ServiceConfig(db_path="gate_bot.db", owner_ids=[1]))
    container.initialize()

    outcome = await container.dispatcher.dispatch(ctx)
"""

import logging
from dataclasses import dataclass, field

from database import Database
from repositories.global_stats_repository import GlobalStatsRepository
from repositories.premium_user_repository import PremiumUserRepository
from services.authorization_service import AuthorizationGate
from services.command_registry import CommandRegistry
from services.interaction_dispatcher import InteractionDispatcher
from services.permissions import PermissionService
from services.rate_limit_service import RateLimitService
from services.telemetry_service import TelemetryService
from utils.rate_limiter import RateLimiterRegistry

logger = logging.getLogger("gate_bot.infrastructure.container")


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Database
    db_path: str = "gate_bot.db"

    # Identity
    owner_ids: list[int] = field(default_factory=list)
    helper_ids: list[int] = field(default_factory=list)

    # Runtime behavior
    development_mode: bool = False
    command_timeout_seconds: float = 0.0


class ServiceContainer:
    """
    Central container for all application services.

    Handles initialization order and dependency injection. Each container
    owns its own RateLimiterRegistry and CommandRegistry, so separate
    containers never share rate-limit state.
    """

    def __init__(self, config: ServiceConfig | None = None):
        self.config = config or ServiceConfig()
        self._initialized = False

        self.database: Database | None = None
        self.stats_repo: GlobalStatsRepository | None = None
        self.premium_repo: PremiumUserRepository | None = None
        self.permission_service: PermissionService | None = None
        self.telemetry_service: TelemetryService | None = None
        self.rate_limiter_registry: RateLimiterRegistry | None = None
        self.rate_limit_service: RateLimitService | None = None
        self.command_registry: CommandRegistry | None = None
        self.authorization_gate: AuthorizationGate | None = None
        self.dispatcher: InteractionDispatcher | None = None

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    def initialize(self) -> None:
        """
        Initialize all services in dependency order.

        Idempotent: calling it again has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")
        self._init_database()
        self._init_services()
        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_database(self) -> None:
        logger.debug(f"Initializing database at {self.config.db_path}")
        self.database = Database(self.config.db_path)
        self.stats_repo = GlobalStatsRepository(self.config.db_path)
        self.premium_repo = PremiumUserRepository(self.config.db_path)

    def _init_services(self) -> None:
        logger.debug("Initializing services")

        self.permission_service = PermissionService(
            owner_ids=self.config.owner_ids,
            premium_repo=self.premium_repo,
            helper_ids=self.config.helper_ids,
        )
        self.telemetry_service = TelemetryService(
            self.stats_repo, development_mode=self.config.development_mode
        )
        self.rate_limiter_registry = RateLimiterRegistry()
        self.rate_limit_service = RateLimitService(self.rate_limiter_registry)
        self.command_registry = CommandRegistry()
        self.authorization_gate = AuthorizationGate(self.permission_service)
        self.dispatcher = InteractionDispatcher(
            registry=self.command_registry,
            gate=self.authorization_gate,
            rate_limits=self.rate_limit_service,
            permissions=self.permission_service,
            telemetry=self.telemetry_service,
            development_mode=self.config.development_mode,
            handler_timeout=self.config.command_timeout_seconds or None,
        )

    def expose_to_bot(self, bot) -> None:
        """
        Expose services on the Discord bot object so cogs can reach them
        via bot.<service_name> in their setup() functions.
        """
        bot.command_registry = self.command_registry
        bot.dispatcher = self.dispatcher
        bot.permission_service = self.permission_service
        bot.telemetry_service = self.telemetry_service
        bot.rate_limiter_registry = self.rate_limiter_registry

        logger.info("Services exposed to bot object")

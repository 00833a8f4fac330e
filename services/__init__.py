"""
Application services layer.

Services implement the interaction pipeline (authorization, rate limiting,
dispatch) on top of the repositories and domain models.
"""

from services.authorization_service import AuthorizationGate
from services.command_registry import CommandRegistry
from services.interaction_dispatcher import DispatchOutcome, DispatchState, InteractionDispatcher
from services.permissions import PermissionService
from services.rate_limit_service import RateLimitService
from services.telemetry_service import TelemetryService

# Result type for consistent error handling
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import (
    ICommandRegistry,
    IPermissionEvaluator,
    IResponseChannel,
    ITelemetryCollector,
)

__all__ = [
    # Concrete services
    "AuthorizationGate",
    "CommandRegistry",
    "InteractionDispatcher",
    "PermissionService",
    "RateLimitService",
    "TelemetryService",
    # Dispatch outcome
    "DispatchOutcome",
    "DispatchState",
    # Result type
    "Result",
    # Interfaces
    "ICommandRegistry",
    "IPermissionEvaluator",
    "IResponseChannel",
    "ITelemetryCollector",
]

"""
Standard error codes for the interaction pipeline.

These codes let callers (and tests) tell rejections apart without parsing
user-facing message text.

Usage:
    from services.error_codes import COMMAND_DISABLED
    from services.result import Result

    if descriptor.disabled and not is_owner:
        return Result.fail("This command is currently disabled.", code=COMMAND_DISABLED)
"""

# Command resolution
COMMAND_NOT_FOUND = "command_not_found"

# Authorization checks, in gate order
COMMAND_DISABLED = "command_disabled"
SUPER_USER_ONLY = "super_user_only"
PREMIUM_ONLY = "premium_only"
HELPER_USER_ONLY = "helper_user_only"
BOT_MISSING_PERMISSIONS = "bot_missing_permissions"
USER_MISSING_PERMISSIONS = "user_missing_permissions"

AUTHORIZATION_CODES = (
    COMMAND_DISABLED,
    SUPER_USER_ONLY,
    PREMIUM_ONLY,
    HELPER_USER_ONLY,
    BOT_MISSING_PERMISSIONS,
    USER_MISSING_PERMISSIONS,
)

# Rate limiting
RATE_LIMITED = "rate_limited"

# Execution
HANDLER_FAILURE = "handler_failure"
HANDLER_TIMEOUT = "handler_timeout"

# General
NOT_FOUND = "not_found"
VALIDATION_ERROR = "validation_error"

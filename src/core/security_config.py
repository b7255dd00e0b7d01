"""Security configuration constants for the TalentPilot API.

This module centralizes security-related configuration including:
- Sensitive keys that should be sanitized from logs
- Error response fields allowed per environment
"""

# Keys redacted from structured logs. Upstream app keys are static bearer
# credentials; resume content and contact details are candidate PII.
SENSITIVE_KEYS: set[str] = {
    # Credentials
    "secret",
    "token",
    "authorization",
    "api_key",
    "app_key",
    "bearer",
    "cookie",
    "x-api-key",
    # Candidate data
    "resume",
    "cv",
    "email",
    "phone",
    "phone_number",
    "address",
    "id_card",
}

# Production error responses only contain these fields
PRODUCTION_ERROR_FIELDS: set[str] = {
    "correlation_id",
    "type",
}

# Development error responses may also carry diagnostics
DEVELOPMENT_ERROR_FIELDS: set[str] = PRODUCTION_ERROR_FIELDS | {
    "details",
    "traceback",
    "exception_type",
    "validation_errors",
}


def get_allowed_error_fields(environment: str) -> set[str]:
    """Get allowed error response fields based on environment.

    Args:
        environment: The application environment (production, development, etc.)

    Returns:
        Set of allowed field names for error responses
    """
    if environment == "production":
        return PRODUCTION_ERROR_FIELDS.copy()
    else:
        return DEVELOPMENT_ERROR_FIELDS.copy()


def is_sensitive_key(key: str) -> bool:
    """Check if a key should be considered sensitive and redacted.

    Matching is by substring on the lower-cased key, so ``X-Api-Key`` and
    ``dify_api_key`` are both caught.
    """
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)

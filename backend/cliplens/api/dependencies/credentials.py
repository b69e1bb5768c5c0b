"""
Credential resolution for provider-facing routes.

The server-held key always wins. A caller-supplied key is only used when
the server has none and ACCEPT_CLIENT_API_KEY is enabled.
"""
from typing import Optional

from cliplens.core.config import Settings, settings as default_settings
from cliplens.core.constants import ErrorMessages
from cliplens.core.errors import ConfigurationError, ValidationError


def resolve_provider_key(
    supplied: Optional[str],
    app_settings: Optional[Settings] = None
) -> Optional[str]:
    """Return the provider key to use for this request, or None."""
    app_settings = app_settings or default_settings

    if app_settings.TWELVELABS_API_KEY:
        return app_settings.TWELVELABS_API_KEY
    if app_settings.ACCEPT_CLIENT_API_KEY and supplied and supplied.strip():
        return supplied.strip()
    return None


def require_search_key(supplied: Optional[str], app_settings: Optional[Settings] = None) -> str:
    """Search treats the credential as a required input (400 when absent)."""
    api_key = resolve_provider_key(supplied, app_settings)
    if not api_key:
        raise ValidationError("apiKey is required")
    return api_key


def require_provider_key(supplied: Optional[str], app_settings: Optional[Settings] = None) -> str:
    """Other provider routes report a missing key as server misconfiguration."""
    api_key = resolve_provider_key(supplied, app_settings)
    if not api_key:
        raise ConfigurationError(ErrorMessages.MISSING_PROVIDER_KEY)
    return api_key

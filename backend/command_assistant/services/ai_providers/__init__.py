"""
Provider abstraction: registry of per-provider contracts, validation and errors.
"""

from .errors import AIError, ProviderConfigurationError, ProviderRequestError
from .registry import (
    DEFAULT_OLLAMA_URL,
    OPENAI_BASE_URL,
    ProviderContract,
    ProviderKind,
    ProviderSettings,
    get_provider_contract,
    list_providers,
    normalize_url,
    validate_provider_config,
)

__all__ = [
    "AIError",
    "ProviderConfigurationError",
    "ProviderRequestError",
    "DEFAULT_OLLAMA_URL",
    "OPENAI_BASE_URL",
    "ProviderContract",
    "ProviderKind",
    "ProviderSettings",
    "get_provider_contract",
    "list_providers",
    "normalize_url",
    "validate_provider_config",
]

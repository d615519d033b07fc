"""
Provider registry: the single source of per-provider connection data.

A stored configuration (ProviderSettings) resolves to a ProviderContract that
carries the base URL, request headers and requirement flags for its provider.
Every service that talks to a provider goes through get_provider_contract()
and validate_provider_config(); nothing else builds URLs or auth headers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from command_assistant.services.ai_providers.errors import AIError

OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OLLAMA_URL = "http://localhost:11434"


class ProviderKind(str, Enum):
    """Supported provider identifiers, as stored in ai_settings.provider."""

    OPENAI = "openai"
    OPENAI_COMPATIBLE = "openai_compatible"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProviderKind"]:
        """Return the kind for a stored value, or None if unset or unknown."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


DISPLAY_NAMES: Dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "OpenAI",
    ProviderKind.OPENAI_COMPATIBLE: "OpenAI Compatible",
    ProviderKind.OLLAMA: "Ollama",
}


@dataclass
class ProviderSettings:
    """Plain snapshot of the stored AI settings, with the API key decrypted."""

    enabled: bool = False
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    api_url: Optional[str] = None

    @property
    def kind(self) -> Optional[ProviderKind]:
        return ProviderKind.parse(self.provider)


@dataclass(frozen=True)
class ProviderContract:
    """Resolved connection parameters for one provider configuration."""

    kind: ProviderKind
    display_name: str
    base_url: str
    headers: Dict[str, str] = field(default_factory=dict)
    requires_api_key: bool = False
    requires_api_url: bool = False


def normalize_url(url: Optional[str]) -> str:
    """Strip whitespace and trailing slashes; returns "" for an unset URL."""
    return (url or "").strip().rstrip("/")


def _auth_headers(api_key: Optional[str]) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def _openai_contract(settings: ProviderSettings) -> ProviderContract:
    return ProviderContract(
        kind=ProviderKind.OPENAI,
        display_name=DISPLAY_NAMES[ProviderKind.OPENAI],
        base_url=OPENAI_BASE_URL,
        headers=_auth_headers(settings.api_key),
        requires_api_key=True,
        requires_api_url=False,
    )


def _compatible_contract(settings: ProviderSettings) -> ProviderContract:
    return ProviderContract(
        kind=ProviderKind.OPENAI_COMPATIBLE,
        display_name=DISPLAY_NAMES[ProviderKind.OPENAI_COMPATIBLE],
        base_url=normalize_url(settings.api_url),
        headers=_auth_headers(settings.api_key),
        requires_api_key=True,
        requires_api_url=True,
    )


def _ollama_contract(settings: ProviderSettings) -> ProviderContract:
    return ProviderContract(
        kind=ProviderKind.OLLAMA,
        display_name=DISPLAY_NAMES[ProviderKind.OLLAMA],
        base_url=normalize_url(settings.api_url) or DEFAULT_OLLAMA_URL,
        headers={"Content-Type": "application/json"},
        requires_api_key=False,
        requires_api_url=False,
    )


_CONTRACT_BUILDERS: Dict[ProviderKind, Callable[[ProviderSettings], ProviderContract]] = {
    ProviderKind.OPENAI: _openai_contract,
    ProviderKind.OPENAI_COMPATIBLE: _compatible_contract,
    ProviderKind.OLLAMA: _ollama_contract,
}


def get_provider_contract(settings: ProviderSettings) -> Optional[ProviderContract]:
    """Resolve the contract for the configured provider; None if unsupported."""
    kind = settings.kind
    if kind is None:
        return None
    return _CONTRACT_BUILDERS[kind](settings)


def validate_provider_config(
    settings: ProviderSettings, contract: Optional[ProviderContract]
) -> Optional[AIError]:
    """
    Check settings against the provider contract without any network I/O.

    Returns None when usable, otherwise a 400 AIError. A missing API key is
    reported before a missing API URL.
    """
    if contract is None:
        return AIError(400, "Unsupported provider")
    if contract.requires_api_key and not settings.api_key:
        return AIError(400, f"{contract.display_name} API key not configured")
    if contract.requires_api_url and not normalize_url(settings.api_url):
        return AIError(400, f"{contract.display_name} API URL not configured")
    return None


def list_providers() -> List[Dict[str, object]]:
    """Catalog of supported providers for settings UIs."""
    providers = []
    for kind in ProviderKind:
        contract = _CONTRACT_BUILDERS[kind](ProviderSettings(provider=kind.value))
        providers.append(
            {
                "name": kind.value,
                "display_name": contract.display_name,
                "requires_api_key": contract.requires_api_key,
                "requires_api_url": contract.requires_api_url,
                "default_base_url": contract.base_url or None,
            }
        )
    return providers

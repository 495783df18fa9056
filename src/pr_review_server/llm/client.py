"""
Model Client

Sends review prompts to a chat-completion endpoint and extracts the answer.
Each supported provider is described by a ProviderProfile selected once at
startup.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import requests

from ..config import ModelConfig
from ..errors import ModelCallFailed


logger = logging.getLogger(__name__)


ResponsePath = Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class ProviderProfile:
    """Request/response shape of one chat-completion provider."""
    name: str
    endpoint: str
    auth_header: str
    auth_scheme: str  # prefix before the key, e.g. "Bearer "
    response_path: ResponsePath
    model_key: str = "model"
    system_as_field: bool = False  # system prompt as top-level "system" field
    extra_headers: Dict[str, str] = field(default_factory=dict)
    send_referer: bool = False

    def build_headers(self, api_key: str, referer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            self.auth_header: f"{self.auth_scheme}{api_key}",
        }
        headers.update(self.extra_headers)
        if self.send_referer and referer:
            headers['HTTP-Referer'] = referer
        return headers

    def build_body(
        self,
        model: str,
        messages: Sequence[Dict[str, str]],
        temperature: float,
        max_tokens: int
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {self.model_key: model}
        if self.system_as_field:
            system = "\n\n".join(m['content'] for m in messages if m['role'] == 'system')
            if system:
                body['system'] = system
            body['messages'] = [m for m in messages if m['role'] != 'system']
        else:
            body['messages'] = list(messages)
        body['temperature'] = temperature
        body['max_tokens'] = max_tokens
        return body


PROVIDER_PROFILES: Dict[str, ProviderProfile] = {
    "openrouter": ProviderProfile(
        name="openrouter",
        endpoint="https://openrouter.ai/api/v1/chat/completions",
        auth_header="Authorization",
        auth_scheme="Bearer ",
        response_path=("choices", 0, "message", "content"),
        send_referer=True,
    ),
    "openai": ProviderProfile(
        name="openai",
        endpoint="https://api.openai.com/v1/chat/completions",
        auth_header="Authorization",
        auth_scheme="Bearer ",
        response_path=("choices", 0, "message", "content"),
    ),
    "anthropic": ProviderProfile(
        name="anthropic",
        endpoint="https://api.anthropic.com/v1/messages",
        auth_header="x-api-key",
        auth_scheme="",
        response_path=("content", 0, "text"),
        system_as_field=True,
        extra_headers={'anthropic-version': '2023-06-01'},
    ),
}


def get_provider_profile(name: str) -> ProviderProfile:
    """Look up a provider profile by name."""
    try:
        return PROVIDER_PROFILES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown AI provider '{name}'. Supported: {', '.join(sorted(PROVIDER_PROFILES))}"
        ) from None


def extract_path(data: Any, path: ResponsePath) -> Any:
    """Walk ``path`` through nested dicts/lists; raises LookupError/TypeError on mismatch."""
    current = data
    for key in path:
        current = current[key]
    return current


class ModelClient:
    """
    Single-shot chat-completion client.
    
    One non-streaming request per review, no retries. Every failure is
    raised as ModelCallFailed with the upstream body attached when present.
    """
    
    def __init__(
        self,
        profile: ProviderProfile,
        model: str,
        api_key: str,
        temperature: float = 0.7,
        max_tokens: int = 3500,
        timeout: float = 30,
        endpoint: Optional[str] = None,
        referer: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize model client.
        
        Args:
            profile: Provider request/response profile
            model: Model identifier sent in the request body
            api_key: Provider API key
            temperature: Sampling temperature
            max_tokens: Maximum output length
            timeout: Request timeout in seconds
            endpoint: Override of the profile's endpoint URL
            referer: Public address of this server (sent where the provider wants it)
            session: Optional requests session (used by tests)
        """
        self.profile = profile
        self.model_name = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.endpoint = endpoint or profile.endpoint
        self.referer = referer
        self.session = session or requests.Session()
    
    @classmethod
    def from_config(
        cls,
        config: ModelConfig,
        referer: Optional[str] = None,
        session: Optional[requests.Session] = None
    ) -> "ModelClient":
        """Build a client from the model section of AppConfig."""
        return cls(
            profile=get_provider_profile(config.provider),
            model=config.model,
            api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout_seconds,
            endpoint=config.endpoint,
            referer=referer,
            session=session,
        )
    
    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send messages and return the model's text answer.
        
        Args:
            messages: Ordered role-tagged messages
            
        Returns:
            Completion text (Markdown)
            
        Raises:
            ModelCallFailed: Transport error, non-2xx status or unexpected body
        """
        body = self.profile.build_body(self.model_name, messages, self.temperature, self.max_tokens)
        headers = self.profile.build_headers(self.api_key, self.referer)
        
        logger.info(f"Calling {self.profile.name} model {self.model_name}")
        
        try:
            response = self.session.post(
                self.endpoint,
                json=body,
                headers=headers,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Error calling AI API: {e}")
            raise ModelCallFailed(f"Failed to get review from AI. {e}") from e
        
        if not response.ok:
            error_body = self._error_body(response)
            logger.error(f"Error calling AI API: {response.status_code} - {error_body}")
            raise ModelCallFailed(
                f"Failed to get review from AI. Upstream returned {response.status_code}",
                upstream_status=response.status_code,
                details=error_body
            )
        
        try:
            data = response.json()
        except ValueError as e:
            raise ModelCallFailed(
                "Failed to get review from AI. Response is not valid JSON",
                upstream_status=response.status_code,
                details=response.text
            ) from e
        
        try:
            text = extract_path(data, self.profile.response_path)
        except (LookupError, TypeError) as e:
            raise ModelCallFailed(
                "Failed to get review from AI. Response has no completion content",
                upstream_status=response.status_code,
                details=data
            ) from e
        
        if not isinstance(text, str) or not text.strip():
            raise ModelCallFailed(
                "Failed to get review from AI. Completion content is empty",
                upstream_status=response.status_code,
                details=data
            )
        
        logger.info(f"Received {len(text)} chars from {self.profile.name}")
        return text
    
    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

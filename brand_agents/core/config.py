"""
Configuration loading for the evaluation engine.

Model profiles, orchestration weights and timeouts come from
config/evaluation_config.yaml; provider keys and order come from the
environment through config.settings. The loaded EvaluationConfig is built
once at startup and passed explicitly to the gateway, agents and
orchestrators.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import logging
import yaml

from brand_agents.core.exceptions import AgentConfigError
from brand_agents.core.llm_gateway import LLMRequestOptions

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "evaluation_config.yaml"

STRATEGY_NAMES = ("fixed_weight", "brand_first")


@dataclass
class ModelProfile:
    """
    Configuration profile for one LLM-backed scorer.

    ``models`` maps provider name to model id; providers without an entry
    use the connector's default model.
    """
    name: str
    models: Dict[str, str] = field(default_factory=dict)
    temperature: float = 0.3
    max_tokens: int = 1000

    def to_options(self, json_mode: bool = True) -> LLMRequestOptions:
        """Request options for gateway calls made under this profile."""
        return LLMRequestOptions(
            models=dict(self.models),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            json_mode=json_mode,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "models": dict(self.models),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ModelProfile":
        """Create from dictionary."""
        return cls(
            name=name,
            models=dict(data.get("models") or {}),
            temperature=data.get("temperature", 0.3),
            max_tokens=data.get("max_tokens", 1000),
        )


def _default_fixed_weights() -> Dict[str, float]:
    return {
        "size_compliance": 0.20,
        "subject_adherence": 0.35,
        "creativity": 0.25,
        "mood_consistency": 0.20,
    }


def _default_fallback_weights() -> Dict[str, float]:
    return {
        "size_compliance": 0.25,
        "subject_adherence": 0.40,
        "creativity": 0.20,
        "mood_consistency": 0.15,
    }


@dataclass
class OrchestrationConfig:
    """
    Orchestration settings.

    Weights are keyed by core agent slot name.
    """
    agent_timeout_seconds: float = 30.0
    default_strategy: str = "fixed_weight"
    fixed_weights: Dict[str, float] = field(default_factory=_default_fixed_weights)
    fallback_weights: Dict[str, float] = field(default_factory=_default_fallback_weights)

    def validate(self) -> None:
        """
        Check timeouts and weight tables.

        Raises:
            AgentConfigError: On a non-positive timeout or a bad weight table
        """
        if self.agent_timeout_seconds <= 0:
            raise AgentConfigError(
                "agent_timeout_seconds must be positive",
                details={"agent_timeout_seconds": self.agent_timeout_seconds},
            )
        if self.default_strategy not in STRATEGY_NAMES:
            raise AgentConfigError(
                f"Unknown strategy '{self.default_strategy}'",
                details={"allowed": list(STRATEGY_NAMES)},
            )
        for label, weights in (("fixed_weights", self.fixed_weights), ("fallback_weights", self.fallback_weights)):
            missing = set(_default_fixed_weights()) - set(weights)
            if missing:
                raise AgentConfigError(
                    f"{label} is missing weights for {sorted(missing)}",
                    details={label: weights},
                )
            if any(weight < 0 for weight in weights.values()) or sum(weights.values()) <= 0:
                raise AgentConfigError(
                    f"{label} must be non-negative and sum to a positive value",
                    details={label: weights},
                )


@dataclass
class ProviderConfig:
    """LLM provider order and credentials."""
    provider_order: List[str] = field(default_factory=lambda: ["openai", "gemini"])
    openai_api_key: str = ""
    openai_org_id: str = ""
    gemini_api_key: str = ""
    request_timeout_seconds: float = 60.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, reporting only whether keys are set."""
        return {
            "provider_order": list(self.provider_order),
            "openai_configured": bool(self.openai_api_key),
            "gemini_configured": bool(self.gemini_api_key),
            "request_timeout_seconds": self.request_timeout_seconds,
        }


@dataclass
class EvaluationConfig:
    """
    Complete configuration for the evaluation engine.
    """
    providers: ProviderConfig = field(default_factory=ProviderConfig)
    model_profiles: Dict[str, ModelProfile] = field(default_factory=dict)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)

    def get_model_profile(self, agent_name: str) -> ModelProfile:
        """Model profile for an agent, falling back to an empty profile."""
        profile = self.model_profiles.get(agent_name)
        if profile is None:
            return ModelProfile(name=agent_name)
        return profile

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "providers": self.providers.to_dict(),
            "model_profiles": {
                name: profile.to_dict()
                for name, profile in self.model_profiles.items()
            },
            "orchestration": {
                "agent_timeout_seconds": self.orchestration.agent_timeout_seconds,
                "default_strategy": self.orchestration.default_strategy,
                "fixed_weights": dict(self.orchestration.fixed_weights),
                "fallback_weights": dict(self.orchestration.fallback_weights),
            },
        }


def load_config(
    config_path: Optional[str] = None,
    settings: Optional["Settings"] = None,
) -> EvaluationConfig:
    """
    Load configuration from YAML plus environment settings.

    Args:
        config_path: Path to the YAML file. If None, uses settings or the default location.
        settings: Environment settings. If None, uses config.settings.

    Returns:
        Loaded EvaluationConfig instance.

    Raises:
        AgentConfigError: If the loaded orchestration settings are invalid
    """
    if settings is None:
        from config.settings import settings as env_settings
        settings = env_settings

    if config_path is None:
        config_path = settings.evaluation_config_path or str(DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    data: Dict[str, Any] = {}
    if config_file.exists():
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.warning(f"Evaluation config {config_file} not found, using defaults")

    # Parse model profiles
    model_profiles = {}
    for name, profile_data in (data.get("model_profiles") or {}).items():
        model_profiles[name] = ModelProfile.from_dict(name, profile_data or {})

    # Environment wins for the timeout and strategy; YAML supplies weights
    orchestration_data = data.get("orchestration") or {}
    timeout = settings.agent_timeout_seconds
    if timeout is None:
        timeout = orchestration_data.get("agent_timeout_seconds", 30.0)
    orchestration = OrchestrationConfig(
        agent_timeout_seconds=float(timeout),
        default_strategy=settings.default_strategy or orchestration_data.get("default_strategy", "fixed_weight"),
        fixed_weights=orchestration_data.get("fixed_weights") or _default_fixed_weights(),
        fallback_weights=orchestration_data.get("fallback_weights") or _default_fallback_weights(),
    )
    orchestration.validate()

    providers_data = data.get("providers") or {}
    providers = ProviderConfig(
        provider_order=settings.provider_order,
        openai_api_key=settings.openai_api_key,
        openai_org_id=settings.openai_org_id,
        gemini_api_key=settings.gemini_api_key,
        request_timeout_seconds=float(providers_data.get("request_timeout_seconds", 60.0)),
    )

    return EvaluationConfig(
        providers=providers,
        model_profiles=model_profiles,
        orchestration=orchestration,
    )

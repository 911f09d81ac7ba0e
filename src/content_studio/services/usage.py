"""Token usage and cost accounting."""

from dataclasses import dataclass

from content_studio.domain.models import TokenUsage
from content_studio.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModelPricing:
    """USD price per million tokens."""

    input_per_million: float
    output_per_million: float


@dataclass(frozen=True)
class ModelOption:
    """A text model the user can pick as their preferred model."""

    id: str
    label: str
    description: str


AI_MODELS: tuple[ModelOption, ...] = (
    ModelOption(
        id="gemini-2.0-flash",
        label="Economy (Gemini 2.0 Flash)",
        description="Fast and cheap. Good for drafts.",
    ),
    ModelOption(
        id="gemini-3-pro-preview",
        label="Pro (Gemini 3 Pro)",
        description="Slower and expensive. Best for final scripts.",
    ),
)

# Estimated, per 1M tokens
PRICING_TIERS: dict[str, ModelPricing] = {
    "gemini-2.0-flash": ModelPricing(input_per_million=0.10, output_per_million=0.40),
    "gemini-3-pro-preview": ModelPricing(input_per_million=1.25, output_per_million=5.00),
}

COST_PRECISION = 5


def calculate_usage(prompt_tokens: int, completion_tokens: int, model_id: str) -> TokenUsage:
    """Price a single call.

    Unknown models price at zero rather than failing.
    """
    pricing = PRICING_TIERS.get(model_id, ModelPricing(0.0, 0.0))
    cost = (prompt_tokens / 1_000_000) * pricing.input_per_million + (
        completion_tokens / 1_000_000
    ) * pricing.output_per_million
    return TokenUsage(
        input_tokens=prompt_tokens,
        output_tokens=completion_tokens,
        estimated_cost=round(cost, COST_PRECISION),
    )


class UsageAccumulator:
    """Running token/cost total for one generation session."""

    def __init__(self, initial: TokenUsage | None = None) -> None:
        self._total = initial or TokenUsage.zero()
        self.call_count = 0

    @property
    def total(self) -> TokenUsage:
        return self._total

    def add(self, usage: TokenUsage) -> TokenUsage:
        """Add one call's usage and return the new total."""
        self._total = self._total + usage
        self.call_count += 1
        logger.debug(
            "usage_accumulated",
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            cost=usage.estimated_cost,
            total_cost=self._total.estimated_cost,
        )
        return self._total

    def reset(self) -> None:
        self._total = TokenUsage.zero()
        self.call_count = 0

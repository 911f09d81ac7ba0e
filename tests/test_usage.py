"""Tests for token usage and cost accounting."""

import pytest

from content_studio.domain.models import TokenUsage
from content_studio.services.usage import PRICING_TIERS, UsageAccumulator, calculate_usage


class TestCalculateUsage:
    """Tests for per-call pricing."""

    def test_flash_pricing(self):
        """Test cost for the economy model."""
        usage = calculate_usage(1_000_000, 1_000_000, "gemini-2.0-flash")

        assert usage.input_tokens == 1_000_000
        assert usage.output_tokens == 1_000_000
        assert usage.estimated_cost == pytest.approx(0.50)

    def test_pro_pricing(self):
        """Test cost for the pro model."""
        usage = calculate_usage(2000, 1000, "gemini-3-pro-preview")

        # 2000/1e6 * 1.25 + 1000/1e6 * 5.00
        assert usage.estimated_cost == pytest.approx(0.0075)

    def test_rounds_to_five_decimals(self):
        """Test that cost is rounded to 5 decimal places."""
        usage = calculate_usage(123, 456, "gemini-2.0-flash")

        assert usage.estimated_cost == round(usage.estimated_cost, 5)
        assert usage.estimated_cost == pytest.approx(0.00019, abs=1e-5)

    def test_unknown_model_is_free(self):
        """Test that unknown models price at zero instead of failing."""
        usage = calculate_usage(5000, 5000, "some-future-model")

        assert usage.estimated_cost == 0.0
        assert usage.input_tokens == 5000

    def test_pricing_table_has_both_models(self):
        assert set(PRICING_TIERS) == {"gemini-2.0-flash", "gemini-3-pro-preview"}


class TestUsageAccumulator:
    """Tests for the running session total."""

    def test_starts_at_zero(self):
        accumulator = UsageAccumulator()
        assert accumulator.total == TokenUsage.zero()
        assert accumulator.call_count == 0

    def test_sum_of_sequential_calls(self):
        """Test that the total cost equals the sum of per-call costs."""
        calls = [
            calculate_usage(1200, 300, "gemini-2.0-flash"),
            calculate_usage(50_000, 9000, "gemini-3-pro-preview"),
            calculate_usage(777, 2222, "gemini-2.0-flash"),
        ]
        accumulator = UsageAccumulator()
        for usage in calls:
            accumulator.add(usage)

        assert accumulator.call_count == 3
        assert accumulator.total.input_tokens == sum(u.input_tokens for u in calls)
        assert accumulator.total.output_tokens == sum(u.output_tokens for u in calls)
        assert accumulator.total.estimated_cost == pytest.approx(
            sum(u.estimated_cost for u in calls), abs=1e-5
        )

    def test_initial_total_is_kept(self):
        accumulator = UsageAccumulator(TokenUsage(10, 20, 0.5))
        accumulator.add(TokenUsage(1, 2, 0.25))

        assert accumulator.total == TokenUsage(11, 22, 0.75)

    def test_reset(self):
        accumulator = UsageAccumulator()
        accumulator.add(TokenUsage(1, 1, 0.1))
        accumulator.reset()

        assert accumulator.total == TokenUsage.zero()
        assert accumulator.call_count == 0

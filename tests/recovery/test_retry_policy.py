"""
Tests for retry policies.
"""

from unittest.mock import patch

import pytest

from shopify_client.recovery.retry import ExponentialBackoff, FixedBackoff, parse_retry_after


class TestRetryPolicies:
    """Test retry policy implementations."""

    def test_exponential_backoff_calculation(self):
        policy = ExponentialBackoff(base_delay=1.0, factor=2.0, jitter=False)

        assert policy.calculate_delay(1) == 1.0
        assert policy.calculate_delay(2) == 2.0
        assert policy.calculate_delay(3) == 4.0
        assert policy.calculate_delay(4) == 8.0

    def test_exponential_backoff_is_capped(self):
        policy = ExponentialBackoff(base_delay=1.0, factor=10.0, max_delay=5.0)
        assert policy.delay_for(3) == 5.0

    def test_fixed_backoff_calculation(self):
        policy = FixedBackoff(delay=2.0, jitter=False)

        assert policy.calculate_delay(1) == 2.0
        assert policy.calculate_delay(3) == 2.0

    def test_attempt_budget(self):
        policy = ExponentialBackoff(max_attempts=3)
        assert policy.can_retry(1)
        assert policy.can_retry(2)
        assert not policy.can_retry(3)

    def test_at_least_one_attempt(self):
        assert ExponentialBackoff(max_attempts=0).max_attempts == 1

    def test_server_delay_takes_precedence(self):
        policy = ExponentialBackoff(base_delay=1.0, max_delay=10.0)
        assert policy.delay_for(1, retry_after=3.5) == 3.5
        assert policy.delay_for(1, retry_after=120.0) == 10.0
        assert policy.delay_for(2, retry_after=None) == 2.0

    def test_jitter_bounds(self):
        policy = ExponentialBackoff(base_delay=10.0, jitter=True, jitter_factor=0.2)
        with patch("shopify_client.recovery.retry.random.random", return_value=1.0):
            assert policy.delay_for(1) == pytest.approx(11.0)
        with patch("shopify_client.recovery.retry.random.random", return_value=0.0):
            assert policy.delay_for(1) == pytest.approx(9.0)


class TestParseRetryAfter:
    @pytest.mark.parametrize("value,expected", [
        ("2.0", 2.0),
        (" 1 ", 1.0),
        ("0", 0.0),
        ("-1", None),
        ("Wed, 21 Oct 2015 07:28:00 GMT", None),
        (None, None),
    ])
    def test_values(self, value, expected):
        assert parse_retry_after(value) == expected

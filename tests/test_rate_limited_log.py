"""
Tests for the rate-limited logging helper.
"""
from unittest.mock import MagicMock, patch

from permitlayer_sdk._rate_limited_log import rate_limited_log, reset_rate_limited_log


def test_repeated_message_is_suppressed():
    mock_logger = MagicMock()

    assert rate_limited_log("Test message", logger_instance=mock_logger) is True
    assert rate_limited_log("Test message", logger_instance=mock_logger) is False

    mock_logger.warning.assert_called_once_with("Test message")


def test_level_and_message_are_separate_keys():
    mock_logger = MagicMock()

    rate_limited_log("Test message", level="warning", logger_instance=mock_logger)
    rate_limited_log("Test message", level="error", logger_instance=mock_logger)
    rate_limited_log("Other message", level="warning", logger_instance=mock_logger)

    mock_logger.error.assert_called_once_with("Test message")
    assert mock_logger.warning.call_count == 2


def test_reset_allows_message_again():
    mock_logger = MagicMock()
    rate_limited_log("Test message", logger_instance=mock_logger)
    reset_rate_limited_log()
    rate_limited_log("Test message", logger_instance=mock_logger)
    assert mock_logger.warning.call_count == 2


def test_cache_is_used_under_lock():
    mock_cache = {}
    mock_lock = MagicMock()
    mock_logger = MagicMock()

    with patch('permitlayer_sdk._rate_limited_log._log_cache', mock_cache), \
         patch('permitlayer_sdk._rate_limited_log._log_cache_lock', mock_lock):
        rate_limited_log("Locked message", logger_instance=mock_logger)

    mock_lock.__enter__.assert_called()
    assert "warning:Locked message" in mock_cache

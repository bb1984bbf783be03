"""Module-style tests for util.retry.retry_on."""

import pytest
from unittest.mock import Mock

from password_export.extractors.base import OpenFailure
from password_export.util.retry import retry_on


def test_successful_call_no_retry():
    mock_func = Mock(return_value="success", __name__='open_detail')
    decorated = retry_on(OpenFailure, attempts=2)(mock_func)

    result = decorated("arg1", kwarg1="value1")

    assert result == "success"
    mock_func.assert_called_once_with("arg1", kwarg1="value1")


def test_retries_once_after_failure():
    mock_func = Mock(side_effect=[OpenFailure("rejected"), "success"], __name__='open_detail')
    decorated = retry_on(OpenFailure, attempts=2)(mock_func)

    result = decorated()

    assert result == "success"
    assert mock_func.call_count == 2


def test_gives_up_after_all_attempts():
    mock_func = Mock(side_effect=[OpenFailure("first"), OpenFailure("second"), "never"], __name__='open_detail')
    decorated = retry_on(OpenFailure, attempts=2)(mock_func)

    with pytest.raises(OpenFailure, match="second"):
        decorated()

    assert mock_func.call_count == 2


def test_single_attempt_does_not_retry():
    mock_func = Mock(side_effect=OpenFailure("rejected"), __name__='open_detail')
    decorated = retry_on(OpenFailure, attempts=1)(mock_func)

    with pytest.raises(OpenFailure):
        decorated()

    assert mock_func.call_count == 1


def test_other_errors_not_retried():
    mock_func = Mock(side_effect=ValueError("Some error"), __name__='open_detail')
    decorated = retry_on(OpenFailure, attempts=2)(mock_func)

    with pytest.raises(ValueError, match="Some error"):
        decorated()

    assert mock_func.call_count == 1


def test_attempts_must_be_positive():
    with pytest.raises(ValueError):
        retry_on(OpenFailure, attempts=0)

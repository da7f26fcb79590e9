"""
Unit tests for Observability components.

Tests cover:
- Structured logging setup
- Request ID tracking
- Performance logging decorator
- Error translation decorator
"""

import pytest
import time

from legal_engine.services.errors import EmptyDocumentError, MalformedInputError


class TestStructuredLogging:
    """Test structured logging setup."""

    def test_logging_setup_json_format(self):
        """Test that logging can be configured for JSON output."""
        from legal_engine.utils.logging import setup_logging
        import structlog

        setup_logging(log_level="INFO", json_format=True)

        logger = structlog.get_logger()
        assert logger is not None

    def test_logging_setup_pretty_format(self):
        """Test that logging can be configured for pretty console output."""
        from legal_engine.utils.logging import setup_logging
        import structlog

        setup_logging(log_level="DEBUG", json_format=False)

        logger = structlog.get_logger()
        assert logger is not None

    def test_get_logger_with_name(self):
        """Test getting logger with component name."""
        from legal_engine.utils.logging import get_logger

        logger = get_logger("test_component")
        assert logger is not None


class TestRequestContext:
    """Test request ID tracking."""

    def test_set_and_get_request_id(self):
        """Test setting and getting request ID."""
        from legal_engine.utils.request_context import set_request_id, get_request_id

        request_id = set_request_id("test-123")
        assert request_id == "test-123"
        assert get_request_id() == "test-123"

    def test_generate_request_id_if_none(self):
        """Test that request ID is generated if not provided."""
        from legal_engine.utils.request_context import set_request_id, get_request_id

        request_id = set_request_id()
        assert request_id is not None
        assert len(request_id) > 0
        assert get_request_id() == request_id

    def test_clear_request_context(self):
        """Test clearing request context."""
        from legal_engine.utils.request_context import (
            set_request_id,
            get_request_id,
            clear_request_context
        )

        set_request_id("test-123")
        clear_request_context()
        # After clear, should be None
        assert get_request_id() is None

    def test_request_scope(self):
        """Test that request_scope binds and clears the request ID."""
        from legal_engine.utils.request_context import request_scope, get_request_id

        with request_scope("scope-1") as request_id:
            assert request_id == "scope-1"
            assert get_request_id() == "scope-1"
        assert get_request_id() is None

    def test_request_scope_clears_on_error(self):
        from legal_engine.utils.request_context import request_scope, get_request_id

        with pytest.raises(RuntimeError):
            with request_scope():
                raise RuntimeError("boom")
        assert get_request_id() is None


class TestPerformanceLogging:
    """Test performance logging decorator."""

    def test_log_execution_time_sync(self):
        """Test that execution time is logged for sync functions."""
        from legal_engine.utils.performance import log_execution_time

        @log_execution_time("test_operation")
        def test_function():
            time.sleep(0.01)
            return "result"

        result = test_function()
        assert result == "result"

    def test_log_execution_time_on_error(self):
        """Test that execution time is logged even on error."""
        from legal_engine.utils.performance import log_execution_time

        @log_execution_time("test_operation")
        def test_function():
            raise ValueError("Test error")

        with pytest.raises(ValueError):
            test_function()

    def test_log_execution_time_preserves_name(self):
        from legal_engine.utils.performance import log_execution_time

        @log_execution_time()
        def analyze_document():
            return 1

        assert analyze_document.__name__ == "analyze_document"


class TestTranslateErrors:
    """Test error translation decorator."""

    def test_value_error_translated(self):
        from legal_engine.utils.decorators import translate_errors

        @translate_errors("parsing")
        def parse():
            raise ValueError("bad input")

        with pytest.raises(MalformedInputError) as exc_info:
            parse()
        assert exc_info.value.details == {"stage": "parsing"}
        assert "bad input" in exc_info.value.message

    def test_engine_errors_pass_through(self):
        from legal_engine.utils.decorators import translate_errors

        @translate_errors("parsing")
        def parse():
            raise EmptyDocumentError()

        with pytest.raises(EmptyDocumentError):
            parse()

    def test_other_errors_propagate(self):
        from legal_engine.utils.decorators import translate_errors

        @translate_errors("parsing")
        def parse():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            parse()

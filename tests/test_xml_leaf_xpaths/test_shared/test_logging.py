"""Tests for correlation-aware logging."""

import logging

from xml_leaf_xpaths.shared import get_logger


class TestCorrelationLogger:
    """Test CorrelationLogger behaviour."""

    def test_component_defaults_to_module_name(self):
        """Test component is derived from the logger name."""
        logger = get_logger("xml_leaf_xpaths.xpath.assembler")
        assert logger.component == "assembler"

    def test_extra_includes_correlation(self, caplog):
        """Test records carry component and correlation id."""
        logger = get_logger("xml_leaf_xpaths.test", "run-7", "tester")

        with caplog.at_level(logging.INFO, logger="xml_leaf_xpaths.test"):
            logger.info("hello", extra={"rows": 3})

        record = caplog.records[-1]
        assert record.component == "tester"
        assert record.correlation_id == "run-7"
        assert record.rows == 3

    def test_trace_disabled_by_default(self, caplog):
        """Test trace emits nothing unless enabled."""
        logger = get_logger("xml_leaf_xpaths.trace_off")

        with caplog.at_level(logging.DEBUG, logger="xml_leaf_xpaths.trace_off"):
            logger.trace("hidden")

        assert not caplog.records

    def test_trace_enabled(self, caplog):
        """Test trace emits DEBUG records when enabled."""
        logger = get_logger("xml_leaf_xpaths.trace_on", trace_enabled=True)

        with caplog.at_level(logging.DEBUG, logger="xml_leaf_xpaths.trace_on"):
            logger.trace("visible")

        assert [r.getMessage() for r in caplog.records] == ["visible"]
        assert caplog.records[0].levelno == logging.DEBUG

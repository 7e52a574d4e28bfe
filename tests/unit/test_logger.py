"""
Unit tests for logging utilities.
"""

import logging
import pytest

from edu_tracking.utils.logger import (
    MASKED_AMOUNT,
    SalaryMaskingFilter,
    mask_amount,
    setup_logger,
)


def _record(msg, *args):
    return logging.LogRecord(
        name="edu_tracking.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestSalaryMaskingFilter:
    """Test cases for SalaryMaskingFilter."""

    @pytest.fixture
    def masking_filter(self):
        return SalaryMaskingFilter()

    @pytest.mark.parametrize("message", [
        "salary: 140000",
        "Reported 3 students, salary: 700000",
        "total_salary=700.000 ₫",
        "Revenue 1,250,000",
    ])
    def test_masks_amounts(self, masking_filter, message):
        """Test labeled amounts are masked."""
        record = _record(message)

        assert masking_filter.filter(record)
        assert MASKED_AMOUNT in record.getMessage()
        assert "000" not in record.getMessage()

    def test_masks_currency_values(self, masking_filter):
        """Test any amount followed by the dong symbol is masked."""
        record = _record("Owed %s this month", "140.000 ₫")

        masking_filter.filter(record)

        assert record.getMessage() == f"Owed {mask_amount()} this month"

    def test_leaves_other_numbers(self, masking_filter):
        """Test counts and dates are not masked."""
        record = _record("Loaded 12 students from 2024-01")

        masking_filter.filter(record)

        assert record.getMessage() == "Loaded 12 students from 2024-01"


class TestSetupLogger:
    """Test cases for setup_logger."""

    @pytest.fixture
    def logger_name(self, request):
        name = f"edu_tracking.tests.{request.node.name}"
        yield name
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_console_handler(self, logger_name):
        """Test a console handler is installed once."""
        logger = setup_logger(logger_name, level=logging.DEBUG)
        again = setup_logger(logger_name)

        assert logger is again
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, logger_name, tmp_path):
        """Test the rotating file handler writes to the log file."""
        log_file = tmp_path / "logs" / "edu_tracking.log"

        logger = setup_logger(logger_name, log_file=str(log_file))
        logger.info("Report started")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "Report started" in log_file.read_text(encoding="utf-8")

    def test_hide_values_installs_filter(self, logger_name):
        """Test every handler masks amounts when values are hidden."""
        logger = setup_logger(logger_name, hide_values=True)

        for handler in logger.handlers:
            assert any(isinstance(f, SalaryMaskingFilter) for f in handler.filters)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

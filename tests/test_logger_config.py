"""
Unit tests for logging configuration.
"""
import logging
from logger_config import RequestContextFormatter, LOG_FORMAT, get_logger
from utils.decorators import api_handler, api_response


class ListHandler(logging.Handler):
    """Collects formatted log lines in memory."""

    def __init__(self):
        super().__init__()
        self.lines = []
        self.setFormatter(RequestContextFormatter(LOG_FORMAT))

    def emit(self, record):
        self.lines.append(self.format(record))


def _record(**extra):
    record = logging.LogRecord('items', logging.INFO, __file__, 1, 'Handler invoked', None, None)
    record.__dict__.update(extra)
    return record


class TestRequestContextFormatter:

    def test_appends_context_fields(self):
        line = RequestContextFormatter(LOG_FORMAT).format(
            _record(correlation_id='abc', request_id='req-1')
        )
        assert line.endswith('Handler invoked [correlation_id=abc request_id=req-1]')

    def test_skips_missing_fields(self):
        line = RequestContextFormatter(LOG_FORMAT).format(
            _record(correlation_id='abc', request_id=None)
        )
        assert line.endswith('Handler invoked [correlation_id=abc]')

    def test_plain_record_unchanged(self):
        line = RequestContextFormatter(LOG_FORMAT).format(_record())
        assert line.endswith('Handler invoked')


class TestGetLogger:

    def test_uses_context_formatter_once(self):
        logger = get_logger('tests.logger_config')
        again = get_logger('tests.logger_config')

        assert again is logger
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, RequestContextFormatter)
        assert logger.propagate is False


class TestHandlerLogging:

    def test_decorated_handler_logs_request_context(self, mock_context):
        capture = ListHandler()
        decorator_logger = logging.getLogger('utils.decorators')
        decorator_logger.addHandler(capture)

        @api_handler
        def ok(event, context):
            return api_response(200)

        try:
            ok({}, mock_context)
        finally:
            decorator_logger.removeHandler(capture)

        assert len(capture.lines) == 2
        for line in capture.lines:
            assert 'request_id=test-request-id' in line
            assert 'correlation_id=' in line
        correlation_ids = {line.split('correlation_id=')[1].split()[0] for line in capture.lines}
        assert len(correlation_ids) == 1

"""End-to-end usage of registered loggers, checked against exact output."""

from datetime import datetime

from scopelog import Level, Registry, Settings, key_values_to_context

FIXED_TIME = datetime(2021, 12, 9, 17, 37, 46)


def _registry() -> Registry:
    return Registry(Settings(default_level="info", levels={}, output="stdout"), now=lambda: FIXED_TIME)


class TestExamples:
    """Walk-throughs of typical logger usage."""

    def test_structured_logger(self, capsys):
        logger = _registry().register("mylogger", "Custom logger")

        # Normal and error logging
        logger.info("an info message with values", "key", "value")
        logger.error("validation error", ValueError("validation failed"), "arg1", "invalid-value")

        # Changing log levels at runtime
        logger.debug("a debug message")
        logger.set_level(Level.DEBUG)
        logger.debug("an enabled debug message")

        # Propagating values
        ctx = key_values_to_context(None, "request-id", 123)
        logger.with_context(ctx).bind("component", "middleware").info("enriched message")

        assert capsys.readouterr().out.splitlines() == [
            'time="2021/12/09 17:37:46" level=info scope="mylogger" msg="an info message with values" key="value"',
            'time="2021/12/09 17:37:46" level=error scope="mylogger" msg="validation error" arg1="invalid-value" error="validation failed"',
            'time="2021/12/09 17:37:46" level=debug scope="mylogger" msg="an enabled debug message"',
            'time="2021/12/09 17:37:46" level=info scope="mylogger" msg="enriched message" request-id=123 component="middleware"',
        ]

    def test_unstructured_logger(self, capsys):
        logger = _registry().register_unstructured("unstructured", "Unstructured logger")

        logger.info("an info message with %s", "a value")
        logger.error("validation error in %s: %v", ValueError("validation failed"), "arg1")

        logger.debug("a debug message")
        logger.set_level(Level.DEBUG)
        logger.debug("an enabled debug message")

        ctx = key_values_to_context(None, "request-id", 123)
        logger.with_context(ctx).bind("component", "middleware").info("enriched message")

        assert capsys.readouterr().out.splitlines() == [
            "2021/12/09 17:37:46  info   an info message with a value",
            "2021/12/09 17:37:46  error  validation error in arg1: validation failed",
            "2021/12/09 17:37:46  debug  an enabled debug message",
            '2021/12/09 17:37:46  info   enriched message [request-id=123 component="middleware"]',
        ]

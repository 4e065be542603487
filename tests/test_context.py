"""Tests for the key-value context carrier."""

import asyncio
import threading

from scopelog.context import (
    BACKGROUND,
    LogContext,
    bind_context,
    context_scope,
    current_context,
    key_values_from_context,
    key_values_to_context,
    reset_context,
)


class TestCarrier:
    """Tests for building and reading carriers."""

    def test_background_is_empty(self):
        assert key_values_from_context(BACKGROUND) == []
        assert not BACKGROUND

    def test_none_is_empty(self):
        assert key_values_from_context(None) == []

    def test_append_returns_new_carrier(self):
        """Adding values never changes the original carrier."""
        ctx1 = key_values_to_context(BACKGROUND, "request_id", "abc")
        ctx2 = key_values_to_context(ctx1, "user", 7)

        assert key_values_from_context(ctx1) == ["request_id", "abc"]
        assert key_values_from_context(ctx2) == ["request_id", "abc", "user", 7]
        assert len(ctx2) == 2

    def test_odd_values_are_padded(self):
        ctx = key_values_to_context(None, "a", "b", "c")
        assert key_values_from_context(ctx) == ["a", "b", "c", "(MISSING)"]

    def test_no_values_returns_same_carrier(self):
        ctx = key_values_to_context(None, "a", 1)
        assert key_values_to_context(ctx) is ctx
        assert key_values_to_context(None) is BACKGROUND

    def test_extracted_list_is_a_copy(self):
        ctx = LogContext(("a", 1))
        values = key_values_from_context(ctx)
        values.append("b")
        assert ctx.items == ("a", 1)


class TestAmbientContext:
    """Tests for the ContextVar-backed current carrier."""

    def test_scope_binds_and_restores(self):
        assert current_context() == BACKGROUND
        with context_scope("request_id", "abc") as ctx:
            assert key_values_from_context(ctx) == ["request_id", "abc"]
            assert current_context() == ctx
        assert current_context() == BACKGROUND

    def test_bind_and_reset(self):
        token = bind_context("a", 1)
        try:
            token2 = bind_context("b", 2)
            assert key_values_from_context(current_context()) == ["a", 1, "b", 2]
            reset_context(token2)
            assert key_values_from_context(current_context()) == ["a", 1]
        finally:
            reset_context(token)

    def test_threads_do_not_share_bindings(self):
        seen = []

        def worker():
            seen.append(current_context())

        with context_scope("request_id", "abc"):
            t = threading.Thread(target=worker)
            t.start()
            t.join()

        assert seen == [BACKGROUND]

    def test_tasks_inherit_bindings(self):
        async def child():
            return key_values_from_context(current_context())

        async def main():
            with context_scope("request_id", "abc"):
                return await asyncio.create_task(child())

        assert asyncio.run(main()) == ["request_id", "abc"]

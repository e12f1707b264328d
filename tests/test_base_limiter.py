"""Tests for BaseLimiter ABC."""

import pytest

from rate_limiter.limiters.base import BaseLimiter


class Dummy(BaseLimiter):
    def __call__(self, *args, **kwargs): ...

    def cancel(self): ...

    def flush(self): ...

    @property
    def is_pending(self):
        return False


class TestBaseLimiter:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLimiter(print, 1.0, leading=False, trailing=True)  # type: ignore[abstract]

    def test_func_must_be_callable(self):
        with pytest.raises(TypeError, match="func must be callable"):
            Dummy("not callable", 1.0, leading=False, trailing=True)  # type: ignore[arg-type]

    def test_stores_settings(self):
        d = Dummy(print, 0.5, leading=True, trailing=False)
        assert d.func is print
        assert d.wait == 0.5
        assert d.leading is True
        assert d.trailing is False

    def test_repr(self):
        def handler():
            pass

        d = Dummy(handler, 1.0, leading=False, trailing=True)
        r = repr(d)
        assert r.startswith("Dummy(")
        assert "handler" in r
        assert "wait=1.0" in r
        assert "leading=False" in r
        assert "pending=False" in r

"""Configuration boundary tests."""

from __future__ import annotations

import pytest

from islamic_ai.config import (
    DEFAULT_DUA_MODEL,
    DEFAULT_HISTORY_LIMIT,
    Config,
)
from islamic_ai.errors import ConfigurationError

pytestmark = pytest.mark.unit


def test_config_defaults() -> None:
    cfg = Config(api_key="k")
    assert cfg.dua_model == DEFAULT_DUA_MODEL
    assert cfg.history_limit == DEFAULT_HISTORY_LIMIT


def test_config_auto_resolves_api_key_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert Config().api_key == "env-key"


def test_config_falls_back_to_generic_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "generic-key")

    assert Config().api_key == "generic-key"


def test_gemini_key_wins_over_generic_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "generic-key")
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")

    assert Config().api_key == "gemini-key"


def test_explicit_api_key_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert Config(api_key="explicit-key").api_key == "explicit-key"


def test_missing_api_key_does_not_fail_construction() -> None:
    """The credential may arrive later; only use should fail."""
    cfg = Config()

    assert cfg.api_key is None
    with pytest.raises(ConfigurationError, match="API key is not configured") as exc:
        cfg.require_api_key()
    assert exc.value.hint is not None
    assert "GEMINI_API_KEY" in exc.value.hint


def test_require_api_key_returns_key() -> None:
    assert Config(api_key="k").require_api_key() == "k"


def test_require_api_key_resolves_late_credential(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    cfg = Config()
    monkeypatch.setenv("API_KEY", "late-key")

    assert cfg.api_key is None
    assert cfg.require_api_key() == "late-key"


def test_explicit_api_key_is_not_replaced_at_use(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    cfg = Config(api_key="explicit-key")
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert cfg.require_api_key() == "explicit-key"


@pytest.mark.parametrize("field_name", ["answer_model", "explain_model", "dua_model"])
def test_blank_model_is_rejected(field_name: str) -> None:
    with pytest.raises(ConfigurationError, match=field_name):
        Config(api_key="k", **{field_name: "  "})


def test_history_limit_must_be_positive() -> None:
    with pytest.raises(ConfigurationError, match="history_limit"):
        Config(api_key="k", history_limit=0)


def test_history_limit_none_means_unbounded() -> None:
    assert Config(api_key="k", history_limit=None).history_limit is None


def test_config_str_and_repr_redact_api_key() -> None:
    secret = "top-secret-key"
    cfg = Config(api_key=secret)

    assert secret not in str(cfg)
    assert secret not in repr(cfg)
    assert "[REDACTED]" in str(cfg)

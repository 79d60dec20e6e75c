"""Unit tests for the LLM provider abstraction."""

import pytest

from atsforge.utils import llm as llm_module
from atsforge.utils.llm import MAX_RETRIES, get_provider


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip real backoff delays."""
    delays = []
    monkeypatch.setattr(llm_module.time, "sleep", delays.append)
    return delays


@pytest.mark.unit
def test_retry_recovers_from_transient_errors(stub_llm, no_sleep):
    provider = stub_llm(TimeoutError(), TimeoutError(), "ok")

    response = provider.generate("system", "user")

    assert response.content == "ok"
    assert len(provider.calls) == 3
    assert no_sleep == [1.0, 2.0]


@pytest.mark.unit
def test_retry_gives_up_after_max_attempts(stub_llm, no_sleep):
    provider = stub_llm(*[TimeoutError() for _ in range(MAX_RETRIES)])

    with pytest.raises(TimeoutError):
        provider.generate("system", "user")

    assert len(provider.calls) == MAX_RETRIES


@pytest.mark.unit
def test_non_retryable_errors_propagate_immediately(stub_llm, no_sleep):
    provider = stub_llm(PermissionError("bad key"), "never reached")

    with pytest.raises(PermissionError):
        provider.generate("system", "user")

    assert len(provider.calls) == 1
    assert no_sleep == []


@pytest.mark.unit
def test_generate_passes_generation_settings(stub_llm):
    provider = stub_llm("ok")
    provider.generate("system", "user", max_tokens=123, temperature=0.0)
    assert provider.calls[0]["max_tokens"] == 123
    assert provider.calls[0]["temperature"] == 0.0


@pytest.mark.unit
def test_update_model_refreshes_name(stub_llm):
    provider = stub_llm()
    provider.update_model("other-model")
    assert provider.name == "stub/other-model"


@pytest.mark.unit
def test_unknown_provider_rejected():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider(provider_name="cohere")


@pytest.mark.unit
def test_openai_provider_requires_api_key(monkeypatch):
    pytest.importorskip("openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        get_provider(provider_name="OpenAI")


@pytest.mark.unit
def test_provider_name_from_environment(monkeypatch):
    pytest.importorskip("anthropic")
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    monkeypatch.setenv("LLM_MODEL", "claude-test")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")

    provider = get_provider()

    assert provider.name == "anthropic/claude-test"

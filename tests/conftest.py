"""Shared fixtures: an in-memory LLM provider so no test touches a real API."""

import pytest

from atsforge.utils.llm import LLMProvider, LLMResponse


class StubProvider(LLMProvider):
    """
    LLMProvider that replays canned responses.

    Each response is either a string (returned as content) or an exception
    instance (raised from the API call, to exercise retry handling).
    """

    _provider_prefix = "stub"
    _retry_message = "Stub unavailable"

    def __init__(self, responses):
        self._responses = list(responses)
        self._retryable_exception = TimeoutError
        self.calls = []
        self.update_model("stub-model")

    def _call_api(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return LLMResponse(content=response, model=self.model, input_tokens=0, output_tokens=0)


@pytest.fixture
def stub_llm():
    """Factory fixture: stub_llm("first response", "second response", ...)."""

    def _make(*responses):
        return StubProvider(responses)

    return _make


@pytest.fixture
def resume_text():
    """Plain resume text long enough to pass the minimum-length check."""
    return (
        "Alice Example\n"
        "alice@example.com | +1 555 0100 | Berlin\n"
        "Senior Software Engineer at Acme Corp, 2019 - Present\n"
        "- Built data pipelines in Python and Go\n"
        "B.Sc. Computer Science, TU Berlin, 2015 - 2019\n"
    )

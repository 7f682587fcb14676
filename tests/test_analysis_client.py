"""Tests for the analysis client (prompting, fallback, rate-limit retry)."""

import pytest

from repo_explorer.domain.exceptions import AnalysisApiError, MissingCredentialError
from repo_explorer.infrastructure.openai_adapter import OpenAIAdapter
from repo_explorer.services.analysis_client import (
    NO_ANALYSIS_FALLBACK,
    SYSTEM_PROMPT,
    AnalysisClient,
    build_user_prompt,
)
from tests.conftest import FakeLlm


class TestBuildUserPrompt:
    def test_embeds_path_and_content(self):
        prompt = build_user_prompt("src/app.py", "print('hi')")
        assert prompt == (
            "Analyze the following code file and explain its purpose and functionality:\n\n"
            "File path: src/app.py\n\n"
            "Code:\nprint('hi')"
        )

    def test_truncates_to_5000_characters(self):
        content = "a" * 5000 + "b" * 1000
        prompt = build_user_prompt("big.txt", content)
        assert prompt.endswith("Code:\n" + "a" * 5000)
        assert "b" not in prompt.split("Code:\n", 1)[1]

    def test_truncation_counts_characters_not_bytes(self):
        content = "é" * 6000
        body = build_user_prompt("x.md", content).split("Code:\n", 1)[1]
        assert len(body) == 5000

    def test_custom_limit(self):
        body = build_user_prompt("x.md", "abcdef", max_chars=3).split("Code:\n", 1)[1]
        assert body == "abc"


class TestAnalysisClient:
    @pytest.mark.asyncio
    async def test_returns_completion(self, sleep):
        llm = FakeLlm("It prints hi.")
        client = AnalysisClient(llm, sleep=sleep)
        assert await client.analyze("a.py", "print('hi')") == "It prints hi."
        system, user = llm.calls[0]
        assert system == SYSTEM_PROMPT
        assert "File path: a.py" in user

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [None, ""])
    async def test_empty_reply_falls_back(self, reply, sleep):
        client = AnalysisClient(FakeLlm(reply), sleep=sleep)
        assert await client.analyze("a.py", "x") == NO_ANALYSIS_FALLBACK

    @pytest.mark.asyncio
    async def test_rate_limit_retried_once_after_delay(self, sleep):
        llm = FakeLlm(AnalysisApiError("Rate limit reached for gpt-3.5-turbo"), "Done.")
        client = AnalysisClient(llm, retry_delay=30.0, sleep=sleep)
        assert await client.analyze("a.py", "x") == "Done."
        assert sleep.delays == [30.0]
        assert len(llm.calls) == 2
        assert llm.calls[0] == llm.calls[1]

    @pytest.mark.asyncio
    async def test_rate_limit_retries_are_bounded(self, sleep):
        llm = FakeLlm(*[AnalysisApiError("Rate limit reached") for _ in range(5)])
        client = AnalysisClient(llm, max_retries=1, sleep=sleep)
        with pytest.raises(AnalysisApiError, match="Rate limit"):
            await client.analyze("a.py", "x")
        assert len(llm.calls) == 2
        assert sleep.delays == [30.0]

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self, sleep):
        llm = FakeLlm(AnalysisApiError("Incorrect API key provided"))
        client = AnalysisClient(llm, sleep=sleep)
        with pytest.raises(AnalysisApiError, match="Incorrect API key"):
            await client.analyze("a.py", "x")
        assert len(llm.calls) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(self, sleep):
        client = AnalysisClient(OpenAIAdapter(api_key=""), sleep=sleep)
        with pytest.raises(MissingCredentialError):
            await client.analyze("a.py", "x")
        assert sleep.delays == []

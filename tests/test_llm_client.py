"""
Tests for the LLM client wrapper.
"""
import pytest
from unittest.mock import MagicMock, patch

from roadtrip.llm.client import LLMClient


def _settings(api_key="test-key"):
    s = MagicMock()
    s.llm_api_key = api_key
    s.llm_base_url = None
    s.llm_chat_model = "gemini-2.0-flash"
    s.llm_temperature = 0.2
    s.llm_max_tokens = 800
    return s


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestChatJson:
    @patch("roadtrip.llm.client.OpenAI")
    @patch("roadtrip.llm.client.settings", _settings())
    def test_plain_request_parsed_from_fenced_reply(self, mock_openai):
        create = mock_openai.return_value.chat.completions.create
        create.return_value = _completion('```json\n{"recommendedPlaces": []}\n```')

        result = LLMClient().chat_json([{"role": "user", "content": "stops?"}])

        assert result == {"recommendedPlaces": []}
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 800
        # Gemini's compatible endpoint is asked for text; JSON is recovered locally
        assert "response_format" not in kwargs

    @patch("roadtrip.llm.client.OpenAI")
    @patch("roadtrip.llm.client.settings", _settings(api_key=""))
    def test_unconfigured_client_raises_without_request(self, mock_openai):
        client = LLMClient()
        with pytest.raises(RuntimeError):
            client.chat_json([{"role": "user", "content": "stops?"}])
        mock_openai.return_value.chat.completions.create.assert_not_called()

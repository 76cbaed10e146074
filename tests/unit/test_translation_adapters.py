from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest
from deep_translator.exceptions import RequestError

from app.translation.example_adapter import ExampleTranslatorAdapter
from app.translation.exceptions import TranslationError, TranslationNetworkError
from app.translation.google_adapter import GoogleTranslatorAdapter
from app.translation.openai_adapter import OpenAITranslatorAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_openai_adapter(mock_client: MagicMock) -> OpenAITranslatorAdapter:
    with patch(
        "app.translation.openai_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAITranslatorAdapter(
            api_key="k",
            model="m",
            timeout_seconds=30,
            base_url=None,
        )


class TestGoogleTranslatorAdapter:
    def test_returns_translation(self) -> None:
        with patch("app.translation.google_adapter.GoogleTranslator") as mock_cls:
            mock_cls.return_value.translate.return_value = " Ram Kumar "
            result = GoogleTranslatorAdapter().translate("राम कुमार", "hi", "en")

        assert result == "Ram Kumar"
        mock_cls.assert_called_once_with(source="hi", target="en")
        mock_cls.return_value.translate.assert_called_once_with("राम कुमार")

    def test_reuses_client_per_language_pair(self) -> None:
        with patch("app.translation.google_adapter.GoogleTranslator") as mock_cls:
            mock_cls.return_value.translate.return_value = "x"
            adapter = GoogleTranslatorAdapter()
            adapter.translate("a", "hi", "en")
            adapter.translate("b", "hi", "en")

        mock_cls.assert_called_once()

    def test_request_error_is_network_error(self) -> None:
        with patch("app.translation.google_adapter.GoogleTranslator") as mock_cls:
            mock_cls.return_value.translate.side_effect = RequestError()
            with pytest.raises(TranslationNetworkError):
                GoogleTranslatorAdapter().translate("a", "hi", "en")

    def test_unexpected_error_is_translation_error(self) -> None:
        with patch("app.translation.google_adapter.GoogleTranslator") as mock_cls:
            mock_cls.return_value.translate.side_effect = ValueError("boom")
            with pytest.raises(TranslationError, match="boom"):
                GoogleTranslatorAdapter().translate("a", "hi", "en")

    def test_empty_result_is_translation_error(self) -> None:
        with patch("app.translation.google_adapter.GoogleTranslator") as mock_cls:
            mock_cls.return_value.translate.return_value = "   "
            with pytest.raises(TranslationError, match="empty"):
                GoogleTranslatorAdapter().translate("a", "hi", "en")


class TestOpenAITranslatorAdapter:
    def test_returns_stripped_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(" Sita Devi\n")
        adapter = _make_openai_adapter(mock_client)

        assert adapter.translate("सीता देवी", "hi", "en") == "Sita Devi"

    def test_sends_languages_in_system_prompt(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("x")
        adapter = _make_openai_adapter(mock_client)

        adapter.translate("line", "hi", "en")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "m"
        system, user = kwargs["messages"]
        assert "'hi'" in system["content"] and "'en'" in system["content"]
        assert user == {"role": "user", "content": "line"}

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        adapter = _make_openai_adapter(mock_client)

        with pytest.raises(TranslationError, match="empty response"):
            adapter.translate("line", "hi", "en")

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        adapter = _make_openai_adapter(mock_client)

        with pytest.raises(TranslationError, match="no choices"):
            adapter.translate("line", "hi", "en")

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        adapter = _make_openai_adapter(mock_client)

        with pytest.raises(TranslationNetworkError, match="network error"):
            adapter.translate("line", "hi", "en")

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        adapter = _make_openai_adapter(mock_client)

        with pytest.raises(TranslationNetworkError, match="network error"):
            adapter.translate("line", "hi", "en")

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        adapter = _make_openai_adapter(mock_client)

        with pytest.raises(TranslationNetworkError, match="API error"):
            adapter.translate("line", "hi", "en")


class TestExampleTranslatorAdapter:
    def test_tags_line_with_target_language(self) -> None:
        assert ExampleTranslatorAdapter().translate(" नाम ", "hi", "en") == "[en] नाम"

    def test_blank_line_fails(self) -> None:
        with pytest.raises(TranslationError):
            ExampleTranslatorAdapter().translate("  ", "hi", "en")

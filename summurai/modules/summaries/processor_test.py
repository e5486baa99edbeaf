import asyncio
import json

import pytest

from summurai.errors import MissingCredentialError, SummarizationAPIError, SummarizationError
from summurai.modules.summaries.processor import get_reply, SummarizationClient, SummarizerConfig


def completion(content: str) -> str:
    return json.dumps({'choices': [{'index': 0, 'message': {'role': 'assistant', 'content': content}}]})


@pytest.fixture()
def config():
    return SummarizerConfig(api_key='test-key', base_url='https://llm.example.com/v1/', model='test-model')


@pytest.fixture()
def transport(mocker):
    return mocker.AsyncMock(return_value=(200, completion('  Greeting.\n')))


class TestSummarize:
    @pytest.mark.asyncio
    @pytest.mark.parametrize('text', ['', '   ', '\n\t'])
    async def test_blank_text_makes_no_request(self, config, transport, text):
        """Test that blank text returns an empty summary without calling the api."""

        client = SummarizationClient(config, transport)

        assert await client.summarize(text, 'some context') == ''
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_missing_credential(self, transport):
        """Test that a missing api key fails before any request is made."""

        client = SummarizationClient(SummarizerConfig(api_key=None), transport)

        with pytest.raises(MissingCredentialError, match='OPENAI_API_KEY'):
            await client.summarize('hello world')

        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_sends_single_request(self, config, transport):
        """Test the request sent to the chat-completion endpoint."""

        client = SummarizationClient(config, transport)

        summary = await client.summarize('hello world')

        assert summary == 'Greeting.'
        transport.assert_awaited_once()

        args, kwargs = transport.call_args
        assert args[0] == 'https://llm.example.com/v1/chat/completions'
        assert kwargs['headers'] == {'Authorization': 'Bearer test-key'}
        assert kwargs['timeout'] == 60.0

        body = kwargs['json']
        assert body['model'] == 'test-model'
        assert body['max_tokens'] == 200
        assert body['temperature'] == 0.2
        assert body['messages'][0]['role'] == 'system'
        assert 'summar' in body['messages'][0]['content']
        assert body['messages'][1] == {'role': 'user', 'content': 'hello world'}

    @pytest.mark.asyncio
    async def test_context_prefixes_prompt(self, config, transport):
        """Test that context is placed before the text, separated by a blank line."""

        client = SummarizationClient(config, transport)

        await client.summarize('hello world', 'Chapter 1', max_tokens=50)

        body = transport.call_args.kwargs['json']
        assert body['messages'][1]['content'] == 'Chapter 1\n\nhello world'
        assert body['max_tokens'] == 50

    @pytest.mark.asyncio
    async def test_empty_context_is_ignored(self, config, transport):
        client = SummarizationClient(config, transport)

        await client.summarize('hello world', '')

        assert transport.call_args.kwargs['json']['messages'][1]['content'] == 'hello world'

    @pytest.mark.asyncio
    async def test_api_error(self, config, transport):
        """Test that non-success responses carry status and body."""

        transport.return_value = (429, '{"error": "rate limited"}')
        client = SummarizationClient(config, transport)

        with pytest.raises(SummarizationAPIError) as e:
            await client.summarize('hello world')

        assert e.value.status == 429
        assert e.value.body == '{"error": "rate limited"}'
        assert str(e.value) == 'LLM API error: 429 {"error": "rate limited"}'

    @pytest.mark.asyncio
    async def test_invalid_json_response(self, config, transport):
        transport.return_value = (200, '<html>gateway</html>')
        client = SummarizationClient(config, transport)

        with pytest.raises(SummarizationAPIError):
            await client.summarize('hello world')

    @pytest.mark.asyncio
    async def test_timeout(self, config, transport):
        """Test that transport timeouts become summarization errors."""

        transport.side_effect = asyncio.TimeoutError()
        client = SummarizationClient(config, transport)

        with pytest.raises(SummarizationError, match='TimeoutError'):
            await client.summarize('hello world')

    @pytest.mark.asyncio
    async def test_each_call_is_a_new_request(self, config, transport):
        """Test that identical prompts are not cached."""

        client = SummarizationClient(config, transport)

        await client.summarize('hello world')
        await client.summarize('hello world')

        assert transport.call_count == 2


class TestGetReply:
    def test_message_content(self):
        assert get_reply(json.loads(completion('Summary'))) == 'Summary'

    def test_legacy_text(self):
        assert get_reply({'choices': [{'text': 'Legacy summary'}]}) == 'Legacy summary'

    def test_message_content_takes_precedence(self):
        assert get_reply({'choices': [{'message': {'content': 'New'}, 'text': 'Old'}]}) == 'New'

    def test_null_content_falls_back_to_text(self):
        assert get_reply({'choices': [{'message': {'content': None}, 'text': 'Old'}]}) == 'Old'

    @pytest.mark.parametrize('response', [{}, {'choices': []}, {'choices': [{}]}, {'choices': None}, [], None])
    def test_missing_reply(self, response):
        assert get_reply(response) == ''

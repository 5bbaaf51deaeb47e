import httpx
import pytest

from greedy.errors import UpstreamError
from llm.llm_client import LLMClient, extract_json


def test_llm_extra_text_around_json(fake_provider_factory):
    provider = fake_provider_factory(
        'Sure! Here is the result: {"priority":"low","reason":"Short reading"} Thanks.'
    )
    client = LLMClient(provider=provider)
    out = client.complete("Read chapter 1")
    assert '"priority"' in out


def test_llm_invalid_json_fallback(fake_provider_factory):
    provider = fake_provider_factory("INVALID OUTPUT")
    client = LLMClient(provider=provider)
    assert client.complete("Anything") == "{}"


def test_empty_priority_reply_is_an_upstream_error(fake_provider_factory):
    client = LLMClient(provider=fake_provider_factory("no json here"))
    with pytest.raises(UpstreamError):
        client.assess_priority("content")


def test_syllabus_reply_without_class_name(fake_provider_factory):
    client = LLMClient(provider=fake_provider_factory('{"topics": ["a"]}'))
    with pytest.raises(UpstreamError):
        client.summarize_syllabus("text")


def test_transport_errors_become_upstream_errors(fake_provider_factory):
    provider = fake_provider_factory(error=httpx.ConnectError("connection refused"))
    client = LLMClient(provider=provider)
    with pytest.raises(UpstreamError):
        client.interpret_message("Create an essay assignment")


def test_non_dict_function_reply(fake_provider_factory):
    client = LLMClient(provider=fake_provider_factory(function_reply=["not", "a", "dict"]))
    with pytest.raises(UpstreamError):
        client.interpret_message("hi")


@pytest.mark.parametrize(
    "text, expected",
    [
        ('```json\n{"a": 1}\n```', {"a": 1}),
        ('prefix {"a": {"b": 2}} suffix', {"a": {"b": 2}}),
        ("[1, 2]", None),
        ("", None),
        ("{broken", None),
    ],
)
def test_extract_json(text, expected):
    assert extract_json(text) == expected

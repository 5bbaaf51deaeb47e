import pytest

from greedy.models import ClassCard
from llm.llm_client import LLMClient
from llm.providers.base import LLMProvider
from llm.providers.mock_provider import MockProvider
from storage.classroom_store import ClassroomStore
from storage.kv_store import MemoryStore


class FakeProvider(LLMProvider):
    def __init__(self, response_text: str = "{}", function_reply=None, error: Exception | None = None):
        self._response_text = response_text
        self._function_reply = function_reply
        self._error = error
        self.calls = []

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        self.calls.append({"system": system, "user": user, "model": model})
        if self._error is not None:
            raise self._error
        return self._response_text

    def generate_function_calls(self, *, system, user, functions, model=None):
        if self._function_reply is None:
            return super().generate_function_calls(system=system, user=user, functions=functions, model=model)
        self.calls.append({"system": system, "user": user, "model": model})
        if self._error is not None:
            raise self._error
        return self._function_reply


class FakeExtractor:
    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.seen = []

    def extract_text(self, data: bytes) -> str:
        self.seen.append(data)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "{}", **kwargs):
        return FakeProvider(response_text, **kwargs)
    return _make


@pytest.fixture
def fake_extractor_factory():
    def _make(text: str = "", error: Exception | None = None):
        return FakeExtractor(text, error)
    return _make


@pytest.fixture
def mock_llm():
    return LLMClient(provider=MockProvider())


@pytest.fixture
def store():
    return ClassroomStore(MemoryStore())


@pytest.fixture
def store_with_class(store):
    store.add_class(ClassCard(name="Computer Science 101", slug="cs101", color="blue"))
    return store

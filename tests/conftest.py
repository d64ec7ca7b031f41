"""Configure pytest fixtures and environment for VC Scout tests."""

import json
from unittest.mock import Mock

import pytest
import requests

from tests.sample_data import ACME_HTML, AI_PAYLOAD, FakeClock, completion_response, html_response
from vcscout.clients.llm_client import LLMClient
from vcscout.core import config as config_module
from vcscout.core.config import CacheConfig, FetchConfig, LLMConfig, Settings
from vcscout.intelligence.cache import InMemoryEnrichmentCache
from vcscout.intelligence.content_fetcher import ContentFetcher
from vcscout.intelligence.enrichment_pipeline import EnrichmentPipeline
from vcscout.intelligence.llm_extractor import LLMExtractor

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_CHAT_MODEL",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "LLM_TIMEOUT_SECONDS",
    "LLM_JSON_MODE",
    "FETCH_TIMEOUT_SECONDS",
    "FETCH_USER_AGENT",
    "CONTENT_MAX_CHARS",
    "ENRICHMENT_CACHE_TTL_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_module.reset_settings()
    yield
    config_module.reset_settings()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def llm_config():
    return LLMConfig(openai_api_key="sk-test")


@pytest.fixture
def settings(llm_config):
    return Settings(llm=llm_config, fetch=FetchConfig(), cache=CacheConfig())


@pytest.fixture
def openai_client():
    """Mocked OpenAI SDK client returning ``AI_PAYLOAD``."""
    client = Mock()
    client.chat.completions.create.return_value = completion_response(json.dumps(AI_PAYLOAD))
    return client


@pytest.fixture
def http_session():
    session = Mock(spec=requests.Session)
    session.get.return_value = html_response(ACME_HTML)
    return session


@pytest.fixture
def fetcher(http_session):
    return ContentFetcher(FetchConfig(), session=http_session)


@pytest.fixture
def extractor(llm_config, openai_client):
    return LLMExtractor(LLMClient(llm_config, client=openai_client))


@pytest.fixture
def cache(clock):
    return InMemoryEnrichmentCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def pipeline(fetcher, extractor, cache, clock):
    return EnrichmentPipeline(fetcher=fetcher, extractor=extractor, cache=cache, clock=clock)

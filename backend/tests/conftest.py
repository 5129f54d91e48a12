import json
import pytest
import os
import sys
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_ENV_VARS = {
    "AI_GATEWAY_API_KEY": "test_gateway_key",
    "AI_GATEWAY_URL": "https://gateway.test/v1/chat/completions",
    "AI_MODEL": "google/gemini-2.5-flash",
}

# Settings are read at import time, so the env must be in place before any test module imports.
for _key, _value in TEST_ENV_VARS.items():
    os.environ.setdefault(_key, _value)
os.environ.pop("HISTORY_STORE_URL", None)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock all collaborator environment variables."""
    for key, value in TEST_ENV_VARS.items():
        monkeypatch.setenv(key, value)
    return TEST_ENV_VARS


@pytest.fixture(autouse=True)
def reset_app_state():
    """Rate-limit windows and dependency overrides must not leak between tests."""
    from utils import rate_limiter
    rate_limiter._rate_limiters.clear()
    yield
    rate_limiter._rate_limiters.clear()
    import main
    main.app.dependency_overrides.clear()


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)


@pytest.fixture
def mock_inference_client():
    """Stand-in for InferenceClient; set .infer.return_value or side_effect per test."""
    client = MagicMock()
    client.is_configured = True
    client.infer = AsyncMock()
    return client


@pytest.fixture
def mock_history_store():
    store = MagicMock()
    store.save = AsyncMock(return_value=True)
    return store


@pytest.fixture
def override_collaborators(mock_inference_client, mock_history_store):
    """Route the app's inference client and history store to the mocks."""
    import main
    main.app.dependency_overrides[main.get_inference_client] = lambda: mock_inference_client
    main.app.dependency_overrides[main.get_history_store] = lambda: mock_history_store
    return mock_inference_client, mock_history_store


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient for provider calls."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_client.post = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def sample_verdict_json():
    """Well-formed model answer for a text verification."""
    return json.dumps({
        "classification": "fake",
        "confidence": 0.92,
        "headline": "Banco Central não vai taxar o PIX",
        "analysis": "Não há qualquer ato normativo do Banco Central prevendo cobrança de PIX para pessoas físicas.",
        "fact_correction": "O PIX continua gratuito para pessoas físicas.",
        "key_points": ["Sem norma publicada", "Boato recorrente"],
        "limitations": "",
        "references": ["https://invented.example/fake-article"],
    }, ensure_ascii=False)


@pytest.fixture
def sample_chat_completion(sample_verdict_json):
    """Sample OpenAI-style chat-completion envelope."""
    return {
        "id": "chatcmpl-test",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": sample_verdict_json},
                "finish_reason": "stop",
            }
        ],
    }

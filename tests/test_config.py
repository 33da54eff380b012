import pytest

from utils.config import Settings

ENV_VARS = (
    "MONGODB_URI",
    "MONGODB_USERNAME",
    "MONGODB_PASSWORD",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "FAQ_CONTEXT_LIMIT",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.llm_model == "google/gemini-2.5-flash"
    assert settings.llm_temperature == 0.7
    assert settings.llm_max_tokens == 1000
    assert settings.faq_context_limit == 20
    assert settings.cors_origins == ["*"]
    assert settings.resolved_mongodb_uri == "mongodb://localhost:27017/finchat_db"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "openai/gpt-4o-mini")
    monkeypatch.setenv("LLM_TEMPERATURE", "0.3")
    monkeypatch.setenv("FAQ_CONTEXT_LIMIT", "5")
    monkeypatch.setenv("MONGODB_USERNAME", "bank")
    monkeypatch.setenv("MONGODB_PASSWORD", "secret")

    settings = Settings(_env_file=None)

    assert settings.llm_model == "openai/gpt-4o-mini"
    assert settings.llm_temperature == 0.3
    assert settings.faq_context_limit == 5
    assert settings.resolved_mongodb_uri.startswith("mongodb://bank:secret@")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://a.example, https://b.example", ["https://a.example", "https://b.example"]),
        ("*", ["*"]),
        (" , ", ["*"]),
    ],
)
def test_cors_origins_are_comma_separated(monkeypatch, raw, expected):
    monkeypatch.setenv("CORS_ORIGINS", raw)

    assert Settings(_env_file=None).cors_origins == expected


def test_reads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("LLM_MODEL=from-dotenv\nCORS_ORIGINS=https://bank.example\n")

    settings = Settings(_env_file=env_file)

    assert settings.llm_model == "from-dotenv"
    assert settings.cors_origins == ["https://bank.example"]


def test_explicit_uri_wins(monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://cluster.example/db")

    assert Settings(_env_file=None).resolved_mongodb_uri == "mongodb://cluster.example/db"

import pytest

from recipe_chef.chef_core import ChefSettings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "OPENAI_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "DEFAULT_MODEL", "MAX_TOOL_ROUNDS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = ChefSettings(_env_file=None)

    assert settings.default_model == "gpt-4o-mini"
    assert settings.chef_name == "Andel"
    assert settings.max_tool_rounds == 5
    assert settings.context_window == 10
    assert settings.openai_api_key is None
    assert settings.qdrant_url is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_MODEL", "ollama-llama3.1")
    monkeypatch.setenv("MAX_TOOL_ROUNDS", "3")
    monkeypatch.setenv("AUTH_TOKENS", '{"token-1": "Ann"}')

    settings = ChefSettings(_env_file=None)

    assert settings.default_model == "ollama-llama3.1"
    assert settings.max_tool_rounds == 3
    assert settings.auth_tokens == {"token-1": "Ann"}


@pytest.mark.parametrize("variable", ["OPENAI_API_KEY", "OPENAI_KEY"])
def test_openai_key_aliases(monkeypatch, variable):
    monkeypatch.setenv(variable, "sk-test")

    assert ChefSettings(_env_file=None).openai_api_key == "sk-test"


@pytest.mark.parametrize("variable", ["GEMINI_API_KEY", "GOOGLE_API_KEY"])
def test_gemini_key_aliases(monkeypatch, variable):
    monkeypatch.setenv(variable, "g-test")

    assert ChefSettings(_env_file=None).gemini_api_key == "g-test"


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CHEF_NAME=Remy\nCONTEXT_WINDOW=4\n", encoding="utf-8")

    settings = ChefSettings(_env_file=env_file)

    assert settings.chef_name == "Remy"
    assert settings.context_window == 4


def test_round_cap_must_be_positive(monkeypatch):
    monkeypatch.setenv("MAX_TOOL_ROUNDS", "0")

    with pytest.raises(ValueError):
        ChefSettings(_env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()

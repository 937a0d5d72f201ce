from pathlib import Path

from article_enrichment.config import DEFAULT_INDEX_NAME, Settings


def test_settings_from_env_file(tmp_path: Path, isolated_env):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "MODEL_PROVIDER=OpenAI\n"
        "OPENAI_API_KEY=sk-test\n"
        "ALGOLIA_APP_ID=APP\n"
        "ALGOLIA_ADMIN_API_KEY=KEY\n",
        encoding="utf-8",
    )

    settings = Settings.from_env(env_file)

    assert settings.provider == "openai"
    assert settings.openai_api_key == "sk-test"
    assert settings.algolia_app_id == "APP"
    assert settings.index_name == DEFAULT_INDEX_NAME
    assert settings.model is None


def test_settings_environment_overrides_env_file(tmp_path: Path, isolated_env):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\nALGOLIA_INDEX_NAME=file_index\n", encoding="utf-8")
    isolated_env["GEMINI_API_KEY"] = "from-env"

    settings = Settings.from_env(env_file)

    assert settings.provider == "gemini"
    assert settings.gemini_api_key == "from-env"
    assert settings.index_name == "file_index"

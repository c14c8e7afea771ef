from cancer_api.config import Settings, get_settings


def test_defaults_match_the_deployed_service(monkeypatch):
    for name in ("PORT", "MODEL_BUCKET", "MODEL_PREFIX", "MODEL_CACHE_REUSE", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.model_bucket == "ml-model-bucket-dicoding"
    assert settings.model_prefix == "models/model.onnx"
    assert settings.model_cache_reuse is False
    assert settings.cors_origins == ["*"]


def test_environment_overrides_are_parsed(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("MODEL_BUCKET", "prod-models")
    monkeypatch.setenv("MODEL_CACHE_REUSE", "yes")
    monkeypatch.setenv("TRACKING_ENABLED", "1")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.model_bucket == "prod-models"
    assert settings.model_cache_reuse is True
    assert settings.tracking_enabled is True
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_dotenv_file_is_read(monkeypatch, tmp_path):
    monkeypatch.delenv("MODEL_PREFIX", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("MODEL_PREFIX=models/v2/\n")

    assert Settings(_env_file=str(env_file)).model_prefix == "models/v2/"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()

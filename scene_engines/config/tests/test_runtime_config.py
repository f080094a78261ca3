from scene_engines.config import runtime_config


def test_defaults(monkeypatch):
    for name in ("UPSTREAM_TIMEOUT_SECONDS", "PRESIGN_TTL_SECONDS", "FALLBACK_IMAGES", "IDENTITY_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    assert runtime_config.get_upstream_timeout_seconds() == 10.0
    assert runtime_config.get_presign_ttl_seconds() == 600
    assert runtime_config.get_fallback_images()[0] == "/uploads/sample1.jpg"
    assert runtime_config.get_identity_base_url() == runtime_config.DEFAULT_IDENTITY_BASE_URL


def test_legacy_names_and_trailing_slash(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("FIREBASE_DATABASE_URL", "https://db.example.com/")
    monkeypatch.delenv("IDENTITY_API_KEY", raising=False)
    monkeypatch.setenv("FIREBASE_WEB_API_KEY", "k")
    assert runtime_config.get_database_url() == "https://db.example.com"
    assert runtime_config.get_identity_api_key() == "k"


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("PRESIGN_TTL_SECONDS", "-5")
    assert runtime_config.get_upstream_timeout_seconds() == 10.0
    assert runtime_config.get_presign_ttl_seconds() == 600


def test_fallback_images_list(monkeypatch):
    monkeypatch.setenv("FALLBACK_IMAGES", "/a.jpg, ,/b.jpg")
    assert runtime_config.get_fallback_images() == ["/a.jpg", "/b.jpg"]

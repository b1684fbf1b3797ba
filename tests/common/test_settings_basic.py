from tagvocab.common.settings import get_settings


def _fresh(monkeypatch, **env):
    from tagvocab.common import settings as s
    s.get_settings.cache_clear()
    for k, v in env.items():
        monkeypatch.setenv(k, v)
    cfg = get_settings()
    s.get_settings.cache_clear()
    return cfg


def test_tagging_defaults(monkeypatch):
    monkeypatch.delenv("TAGGING__STRICT_CASE_MATCH", raising=False)
    cfg = _fresh(monkeypatch)
    assert cfg.tagging.strict_case_match is False
    assert cfg.tagging.max_name_length == 255
    assert cfg.tagging.resolve_max_attempts == 3
    assert cfg.tagging.validate_name_uniqueness is True
    assert cfg.tagging.default_usage_limit == 20


def test_strict_case_match_from_env(monkeypatch):
    cfg = _fresh(monkeypatch, TAGGING__STRICT_CASE_MATCH="yes")
    assert cfg.tagging.strict_case_match is True


def test_database_url_prefers_explicit_url(monkeypatch):
    cfg = _fresh(monkeypatch, DB__DATABASE_URL="sqlite:///./x.db")
    assert cfg.database_url == "sqlite:///./x.db"


def test_cors_origins_are_trimmed(monkeypatch):
    cfg = _fresh(monkeypatch, API__CORS_ALLOW_ORIGINS='["http://a.test", " http://b.test "]')
    assert cfg.api.cors_allow_origins == ["http://a.test", "http://b.test"]

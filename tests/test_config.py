from buzzwall.config import Settings


def test_rate_limit_depends_on_profile(monkeypatch):
    monkeypatch.delenv('RATE_LIMIT_MAX_REQUESTS', raising=False)
    monkeypatch.setenv('APP_ENV', 'production')
    assert Settings().max_requests == 300
    monkeypatch.setenv('APP_ENV', 'development')
    assert Settings().max_requests == 500


def test_explicit_rate_limit_wins(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('RATE_LIMIT_MAX_REQUESTS', '12')
    assert Settings().max_requests == 12


def test_defaults():
    settings = Settings(environment='test')
    assert settings.max_words == 200
    assert settings.word_ttl_sec == 1800
    assert settings.max_batch_size == 80
    assert settings.rate_limit_window_sec == 60

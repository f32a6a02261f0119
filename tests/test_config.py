from invader_news.config import DEFAULT_SITE_URL, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.delenv("SITE_URL", raising=False)
    s = Settings(_env_file=None)
    assert s.site_url == DEFAULT_SITE_URL
    assert s.feed_window_days == 90
    assert s.github_actions is False


def test_blank_site_url_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("SITE_URL", "  ")
    assert Settings(_env_file=None).site_url == DEFAULT_SITE_URL


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SITE_URL", "https://example.org/feed/")
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.setenv("FEED_WINDOW_DAYS", "30")
    s = Settings(_env_file=None)
    assert s.site_url == "https://example.org/feed"
    assert s.github_actions is True
    assert s.feed_window_days == 30

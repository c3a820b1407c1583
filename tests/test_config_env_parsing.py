from __future__ import annotations

from wordguard.config import ModerationConfig, TelegramConfig, WordGuardConfig


def test_forbidden_words_default() -> None:
    assert ModerationConfig().forbidden_words == ["aww"]


def test_forbidden_words_parse_comma_separated_string() -> None:
    cfg = ModerationConfig(forbidden_words="aww, heck")
    assert cfg.forbidden_words == ["aww", "heck"]


def test_forbidden_words_parse_json_list_string() -> None:
    cfg = ModerationConfig(forbidden_words='["aww", "heck"]')
    assert cfg.forbidden_words == ["aww", "heck"]


def test_env_fields_accept_plain_strings(monkeypatch) -> None:
    monkeypatch.setenv("WORDGUARD_MODERATION_FORBIDDEN_WORDS", "aww,darn")
    monkeypatch.setenv("WORDGUARD_TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setenv("WORDGUARD_PORT", "8080")

    config = WordGuardConfig.load()

    assert config.moderation.forbidden_words == ["aww", "darn"]
    assert config.telegram.bot_token == "123:abc"
    assert config.port == 8080


def test_yaml_config_is_loaded(monkeypatch, tmp_path) -> None:
    path = tmp_path / "wordguard.yaml"
    path.write_text(
        "port: 4000\nmoderation:\n  forbidden_words: [aww, gosh]\n  ban_duration_s: 60\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("WORDGUARD_CONFIG_PATH", str(path))

    config = WordGuardConfig.load()

    assert config.port == 4000
    assert config.moderation.forbidden_words == ["aww", "gosh"]
    assert config.moderation.ban_duration_s == 60


def test_telegram_endpoint_includes_token() -> None:
    cfg = TelegramConfig(bot_token="42:xyz", api_base="https://api.telegram.org/")
    assert cfg.endpoint == "https://api.telegram.org/bot42:xyz"


def test_env_overrides_yaml(monkeypatch, tmp_path) -> None:
    path = tmp_path / "wordguard.yaml"
    path.write_text(
        "port: 4000\nmoderation:\n  forbidden_words: [aww]\n  ban_duration_s: 60\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WORDGUARD_CONFIG_PATH", str(path))
    monkeypatch.setenv("WORDGUARD_PORT", "8080")
    monkeypatch.setenv("WORDGUARD_MODERATION_FORBIDDEN_WORDS", "heck")

    config = WordGuardConfig.load()

    assert config.port == 8080
    assert config.moderation.forbidden_words == ["heck"]
    assert config.moderation.ban_duration_s == 60


def test_dotenv_overrides_yaml(monkeypatch, tmp_path) -> None:
    path = tmp_path / "wordguard.yaml"
    path.write_text("port: 4000\n", encoding="utf-8")
    (tmp_path / ".env").write_text("WORDGUARD_PORT=8081\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WORDGUARD_CONFIG_PATH", str(path))
    monkeypatch.delenv("WORDGUARD_PORT", raising=False)

    assert WordGuardConfig.load().port == 8081

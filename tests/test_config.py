import pytest

from safelog.config import LoggerSettings, load_settings, load_settings_from_path, settings_from_env

ENV_NAMES = [
    "SAFELOG_PATH",
    "SAFELOG_LEVEL",
    "SAFELOG_MAX_MESSAGE_SIZE",
    "SAFELOG_TAIL_LINES",
    "SAFELOG_TAIL_WIDTH",
    "SAFELOG_FILTER_KEYS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = LoggerSettings()
    assert settings.path is None
    assert settings.level == "info"
    assert settings.max_message_size == 1_048_576
    assert settings.tail_lines == 1000
    assert settings.tail_width is None
    assert settings.filter_keys == []


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("SAFELOG_PATH", "/var/log/app.log")
    monkeypatch.setenv("SAFELOG_LEVEL", "WARN")
    monkeypatch.setenv("SAFELOG_MAX_MESSAGE_SIZE", "2048")
    monkeypatch.setenv("SAFELOG_TAIL_LINES", "50")
    monkeypatch.setenv("SAFELOG_TAIL_WIDTH", "120")
    monkeypatch.setenv("SAFELOG_FILTER_KEYS", "bind_pwd, amazon_secret,,")
    settings = settings_from_env()
    assert settings.path == "/var/log/app.log"
    assert settings.level == "warn"
    assert settings.max_message_size == 2048
    assert settings.tail_lines == 50
    assert settings.tail_width == 120
    assert settings.filter_keys == ["bind_pwd", "amazon_secret"]


def test_settings_from_env_ignores_blank_values(monkeypatch):
    monkeypatch.setenv("SAFELOG_TAIL_WIDTH", "  ")
    assert settings_from_env().tail_width is None


@pytest.mark.parametrize(
    "name, value",
    [
        ("SAFELOG_LEVEL", "verbose"),
        ("SAFELOG_MAX_MESSAGE_SIZE", "0"),
        ("SAFELOG_TAIL_LINES", "many"),
    ],
)
def test_settings_from_env_rejects_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        settings_from_env()


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "logger.yaml"
    path.write_text(
        "path: log/evm.log\nlevel: debug\ntail_lines: 200\nfilter_keys:\n  - region\n",
        encoding="utf-8",
    )
    settings = load_settings_from_path(path)
    assert settings.path == "log/evm.log"
    assert settings.level == "debug"
    assert settings.tail_lines == 200
    assert settings.filter_keys == ["region"]


def test_load_settings_from_empty_yaml(tmp_path):
    path = tmp_path / "logger.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings_from_path(path) == LoggerSettings()


def test_load_settings_rejects_non_mapping_yaml(tmp_path):
    path = tmp_path / "logger.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings_from_path(path)


def test_load_settings_wraps_validation_errors():
    with pytest.raises(ValueError, match="tail_width"):
        load_settings({"tail_width": -5})

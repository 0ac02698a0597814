import io
import json

import pytest
from pydantic import BaseModel

from flagtree import App
from flagtree.config import ConfigSettings, config_handler, load_file
from flagtree.exceptions import ConfigError, DuplicateFlagError


class ServerConfig(BaseModel):
    host: str = "localhost"
    port: int = 8000


def make_app(settings, **kwargs):
    return App(
        name="server",
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        options=[config_handler(settings)],
        **kwargs,
    )


def test_config_handler_declares_flags():
    app = make_app(ConfigSettings())

    flags = {flag.name: flag for flag in app.flags}
    assert flags["config"].help == "Path to configuration file"
    assert flags["json"].help == "JSON configuration (provide as literal JSON)"
    assert len(app.hooks) == 1


def test_config_handler_stores_flag_values():
    settings = ConfigSettings()
    app = make_app(settings, action=lambda ctx: None)

    assert app.run(["./server", "--config", "conf.yaml", "--json", '{"a": 1}']) == 0
    assert settings.path == "conf.yaml"
    assert settings.json_text == '{"a": 1}'


def test_config_handler_stores_before_earlier_hooks():
    events = []
    settings = ConfigSettings()

    def earlier(ctx):
        events.append(("earlier", settings.path))

    app = make_app(settings, before=[earlier], action=lambda ctx: None)

    @app.before
    def later(ctx):
        events.append(("later", settings.path))

    assert app.run(["./server", "--config=app.toml"]) == 0
    assert events == [("earlier", "app.toml"), ("later", "app.toml")]


def test_earlier_hook_sees_config_path():
    seen = []
    settings = ConfigSettings()
    app = make_app(
        settings,
        before=[lambda ctx: seen.append(settings.path)],
        action=lambda ctx: None,
    )

    assert app.run(["./server", "--config", "a.yaml"]) == 0
    assert seen == ["a.yaml"]


def test_config_handler_rejects_existing_flag():
    app = App(name="server", flags=[])
    app.add_flag("config")

    with pytest.raises(DuplicateFlagError):
        app.apply(config_handler(ConfigSettings()))


@pytest.mark.parametrize(
    "filename, content",
    [
        ("conf.yaml", "host: example.com\nport: 9000\n"),
        ("conf.yml", "host: example.com\nport: 9000\n"),
        ("conf.toml", 'host = "example.com"\nport = 9000\n'),
        ("conf.json", json.dumps({"host": "example.com", "port": 9000})),
    ],
)
def test_load_file_formats(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content, encoding="UTF-8")

    assert load_file(path) == {"host": "example.com", "port": 9000}


def test_load_file_empty_yaml(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="UTF-8")

    assert load_file(path) == {}


def test_load_file_errors(tmp_path):
    with pytest.raises(ConfigError, match="No such config file"):
        load_file(tmp_path / "missing.yaml")

    ini = tmp_path / "conf.ini"
    ini.write_text("[section]\n", encoding="UTF-8")
    with pytest.raises(ConfigError, match="Unsupported config format"):
        load_file(ini)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="UTF-8")
    with pytest.raises(ConfigError, match="Could not parse"):
        load_file(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="UTF-8")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_file(listing)


def test_load_overlays_json_on_file(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("host: example.com\nport: 9000\n", encoding="UTF-8")
    settings = ConfigSettings(path=str(path), json_text='{"port": 9100}')

    assert settings.load() == {"host": "example.com", "port": 9100}


def test_load_without_sources():
    assert ConfigSettings().load() == {}


@pytest.mark.parametrize("json_text", ["{bad", "[1, 2]"])
def test_load_invalid_json(json_text):
    with pytest.raises(ConfigError):
        ConfigSettings(json_text=json_text).load()


def test_parse_into_model():
    settings = ConfigSettings(json_text='{"port": 9100}')

    config = settings.parse(ServerConfig)
    assert config.host == "localhost"
    assert config.port == 9100


def test_parse_invalid_model():
    settings = ConfigSettings(json_text='{"port": "not a port"}')

    with pytest.raises(ConfigError, match="Invalid configuration"):
        settings.parse(ServerConfig)


def test_config_error_reported_by_app(tmp_path):
    settings = ConfigSettings()
    stderr = io.StringIO()

    def action(ctx):
        settings.parse(ServerConfig)

    app = App(
        name="server",
        stderr=stderr,
        options=[config_handler(settings)],
        action=action,
    )
    missing = tmp_path / "nope.toml"

    assert app.run(["./server", "--config", str(missing)]) == 1
    assert stderr.getvalue() == f"No such config file: {missing}\n"

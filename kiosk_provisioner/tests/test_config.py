import pytest

from kiosk_provisioner.config import (
    CONFIG_ENV_VAR,
    DEFAULT_PACKAGES,
    ProvisionConfig,
    load_config,
    resolve_config_path,
)


def test_defaults():
    cfg = load_config(None)

    assert cfg.state_dir == ".init"
    assert cfg.home_dir == "/home/admin"
    assert cfg.kiosk_url == "https://calendar.google.com"
    assert cfg.packages == DEFAULT_PACKAGES
    assert cfg.argon1_enabled is True
    assert cfg.step_timeout_s == 1800.0
    assert cfg.dry_run is False


def test_yaml_overrides(tmp_path):
    p = tmp_path / "kiosk.yaml"
    p.write_text(
        "\n".join(
            [
                "user: pi",
                "kiosk_url: https://example.org",
                "display:",
                "  mode: 1280x720@60",
                "argon1:",
                "  enabled: false",
                "step_timeout_s: 0",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(p))

    assert cfg.home_dir == "/home/pi"
    assert cfg.display_output == "HDMI-A-1"
    assert cfg.display_mode == "1280x720@60"
    assert cfg.argon1_enabled is False
    assert cfg.step_timeout_s is None


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml_suffix(tmp_path):
    p = tmp_path / "kiosk.json"
    p.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(p))


def test_rejects_broken_yaml(tmp_path):
    p = tmp_path / "kiosk.yaml"
    p.write_text("user: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(p))


def test_packages_must_be_list():
    with pytest.raises(ValueError):
        ProvisionConfig(raw={"packages": "chromium"}).packages


@pytest.mark.parametrize(
    "body",
    [
        "step_timeout_s: 30m\n",
        "step_timeout_s: -5\n",
        "step_timeout_s: true\n",
        "packages: chromium\n",
        "packages: [chromium, [nested]]\n",
        "display: 1080p\n",
        "argon1: yes\n",
    ],
)
def test_bad_typed_keys_rejected_at_load(tmp_path, body):
    p = tmp_path / "kiosk.yaml"
    p.write_text(body, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(p))


def test_timeout_accepts_int_and_null(tmp_path):
    p = tmp_path / "kiosk.yaml"
    p.write_text("step_timeout_s: 90\n", encoding="utf-8")
    assert load_config(str(p)).step_timeout_s == 90.0

    p.write_text("step_timeout_s: null\n", encoding="utf-8")
    assert load_config(str(p)).step_timeout_s is None


def test_env_var_wins(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "kiosk.yaml").write_text("{}\n", encoding="utf-8")

    assert resolve_config_path({CONFIG_ENV_VAR: "/etc/kiosk.yaml"}) == "/etc/kiosk.yaml"
    assert resolve_config_path({}) == "kiosk.yaml"


def test_no_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert resolve_config_path({}) is None

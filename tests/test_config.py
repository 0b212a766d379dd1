import json
from pathlib import Path

from shellguard.config.loader import (
    camel_to_snake,
    convert_keys,
    convert_to_camel,
    load_config,
    save_config,
    snake_to_camel,
)
from shellguard.config.schema import Config, GuardSettings


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.json")
    assert config.guard.enabled is True
    assert config.guard.fail_mode == "mixed"
    assert config.limits.max_content_bytes == 5 * 1024 * 1024
    assert config.commit.enforce is False


def test_save_writes_camel_case_and_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    save_config(Config(guard=GuardSettings(fail_mode="closed")), path)

    raw = json.loads(path.read_text())
    assert raw["guard"]["failMode"] == "closed"
    assert "maxCommandChars" in raw["limits"]
    assert load_config(path).guard.fail_mode == "closed"


def test_legacy_root_keys_are_migrated_with_backup(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"failOpen": True, "disabledRules": ["HARD_RESET"]}))

    config = load_config(path)
    assert config.guard.fail_mode == "open"
    assert config.rules.disabled == ["HARD_RESET"]

    rewritten = json.loads(path.read_text())
    assert rewritten["configVersion"] == 1
    assert "failOpen" not in rewritten
    assert list(tmp_path.glob("config.backup.*.json"))


def test_custom_rules_load_from_camel_case(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "rules": {
                    "custom": [
                        {
                            "category": "tf",
                            "pattern": "terraform destroy",
                            "tier": "blocking",
                            "ignoreCase": False,
                        }
                    ]
                }
            }
        )
    )
    custom = load_config(path).rules.custom
    assert len(custom) == 1
    assert custom[0].category == "TF"
    assert custom[0].ignore_case is False


def test_invalid_json_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert load_config(path).guard.fail_mode == "mixed"


def test_invalid_value_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"guard": {"failMode": "sometimes"}}))
    assert load_config(path).guard.fail_mode == "mixed"


def test_key_conversion_helpers() -> None:
    assert camel_to_snake("maxContentBytes") == "max_content_bytes"
    assert snake_to_camel("diff_timeout_seconds") == "diffTimeoutSeconds"
    payload = {"extra_whitelist": ["a"], "custom": [{"blocked_as": "X"}]}
    assert convert_keys(convert_to_camel(payload)) == payload

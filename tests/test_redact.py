from __future__ import annotations

from pygta._redact import REDACTED, redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "login": {"login": "jdoe", "Token": "TOKEN", "password": "pw"},
        "structures": [{"id": 1, "api_token": "KEY"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["login"]["login"] == "jdoe"
    assert redacted["login"]["Token"] == REDACTED
    assert redacted["login"]["password"] == REDACTED
    assert redacted["structures"][0]["api_token"] == REDACTED
    assert payload["login"]["password"] == "pw"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_reprs_unknown_objects() -> None:
    assert redact_for_log({"ids": (1, 2), "when": object}) == {"ids": [1, 2], "when": repr(object)}

from devpilot.logging import REDACTED, redact_secrets


def test_redacts_top_level_and_nested_secrets():
    event = {
        "event": "provider.request_body",
        "api_key": "sk-live",
        "body": {
            "model": "gpt-4o-mini",
            "headers": {"Authorization": "Bearer sk-live"},
            "messages": [{"role": "user", "content": "hi", "token": "ghp_x"}],
        },
    }

    redacted = redact_secrets(None, "info", event)

    assert redacted["api_key"] == REDACTED
    assert redacted["body"]["headers"]["Authorization"] == REDACTED
    assert redacted["body"]["messages"][0] == {
        "role": "user",
        "content": "hi",
        "token": REDACTED,
    }
    assert redacted["body"]["model"] == "gpt-4o-mini"
    assert event["api_key"] == "sk-live"


def test_empty_secret_fields_are_left_alone():
    assert redact_secrets(None, "info", {"api_key": None}) == {"api_key": None}

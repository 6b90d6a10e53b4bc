import json
from dataclasses import replace

from getmailer_config import Settings
from getmailer_format import format_account_status, format_json, format_signup

BLOCKED_ACCOUNT = {
    "user": {"email": "ada@acme.io", "emailVerified": False},
    "subscription": {"plan": "FREE", "emailsSent": 12, "emailLimit": 3000, "emailsRemaining": 2988},
    "domains": {"total": 1, "verified": 0},
    "canSendEmails": False,
    "warnings": [
        {"type": "NO_VERIFIED_DOMAIN", "message": "No verified sending domain", "action": "Run add_domain"},
    ],
}


def test_account_status_lists_warning_and_cannot_send():
    text = format_account_status(BLOCKED_ACCOUNT)

    assert "No verified sending domain" in text
    assert "→ Run add_domain" in text
    assert "Can send emails: No" in text
    assert "cannot send" in text
    assert "ada@acme.io (Not verified)" in text
    assert "Plan: FREE" in text
    assert "Remaining quota: 2988" in text
    assert "Verified domains: 0 of 1" in text


def test_account_status_ready_to_send():
    account = dict(BLOCKED_ACCOUNT, canSendEmails=True, warnings=[])
    account["user"] = {"email": "ada@acme.io", "emailVerified": True}

    text = format_account_status(account)

    assert "Can send emails: Yes" in text
    assert "(Verified)" in text
    assert "Warnings" not in text


def test_account_status_tolerates_partial_payload():
    text = format_account_status({"canSendEmails": False, "warnings": ["Email not verified"]})

    assert "Plan: unknown" in text
    assert "  - Email not verified" in text


def test_account_status_tolerates_non_object():
    assert "Can send emails: No" in format_account_status(None)


def test_format_json_is_indented():
    assert format_json({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'


def test_signup_appends_config_snippet_with_new_key():
    settings = Settings()
    text = format_signup({"user": {"email": "ada@acme.io"}, "apiKey": "gm_new"}, settings)

    snippet = json.loads(text[text.index('{\n  "mcpServers"'):])
    server = snippet["mcpServers"]["getmailer"]
    assert server["command"] == "getmailer-mcp"
    assert server["env"] == {"GETMAILER_API_KEY": "gm_new"}


def test_signup_snippet_carries_non_default_api_url():
    settings = replace(Settings(), api_url="https://staging.getmailer.app")
    text = format_signup({"apiKey": "gm_new"}, settings)

    assert '"GETMAILER_API_URL": "https://staging.getmailer.app"' in text


def test_signup_without_key_is_plain_json():
    assert format_signup({"error": "pending"}, Settings()) == format_json({"error": "pending"})


def test_account_status_ignores_non_object_sections():
    text = format_account_status({
        "user": "ada@acme.io",
        "subscription": ["FREE"],
        "domains": 3,
        "warnings": "check your DNS",
        "canSendEmails": False,
    })

    assert "Email: unknown (unknown)" in text
    assert "Plan: unknown" in text
    assert "Verified domains: unknown of unknown" in text
    assert "Can send emails: No" in text
    assert "Warnings" not in text

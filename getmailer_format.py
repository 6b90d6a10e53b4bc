"""
getmailer_format.py
-------------------
Turns raw API payloads into the text handed back to the MCP host.

Everything is pretty-printed JSON except:
  account_status → human-readable summary
  signup         → JSON plus a ready-to-paste MCP client config snippet
"""

import json
from typing import Any, Dict, List

from getmailer_config import DEFAULT_API_URL, Settings


def format_json(result: Any) -> str:
    return json.dumps(result, indent=2)


def _value(value: Any) -> str:
    if value is None:
        return "unknown"
    return str(value)


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def format_account_status(result: Any) -> str:
    data = result if isinstance(result, dict) else {}
    user = _section(data, "user")
    subscription = _section(data, "subscription")
    domains = _section(data, "domains")
    warnings = data.get("warnings")
    if not isinstance(warnings, list):
        warnings = []

    verified = user.get("emailVerified")
    if verified is None:
        verification = "unknown"
    else:
        verification = "Verified" if verified else "Not verified"

    lines: List[str] = [
        "GetMailer Account Status",
        "========================",
        f"Email: {_value(user.get('email'))} ({verification})",
        f"Plan: {_value(subscription.get('plan'))}",
        f"Emails sent this period: {_value(subscription.get('emailsSent'))} "
        f"of {_value(subscription.get('emailLimit'))}",
        f"Remaining quota: {_value(subscription.get('emailsRemaining'))}",
        f"Verified domains: {_value(domains.get('verified'))} of {_value(domains.get('total'))}",
    ]

    if data.get("canSendEmails"):
        lines.append("Can send emails: Yes")
    else:
        lines.append("Can send emails: No (cannot send until the warnings below are resolved)")

    if warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in warnings:
            if isinstance(warning, dict):
                lines.append(f"  - {_value(warning.get('message'))}")
                if warning.get("action"):
                    lines.append(f"    → {warning['action']}")
            else:
                lines.append(f"  - {warning}")

    return "\n".join(lines)


def client_config_snippet(api_key: str, settings: Settings) -> Dict[str, Any]:
    env = {"GETMAILER_API_KEY": api_key}
    if settings.api_url != DEFAULT_API_URL:
        env["GETMAILER_API_URL"] = settings.api_url
    return {
        "mcpServers": {
            "getmailer": {
                "command": "getmailer-mcp",
                "env": env,
            }
        }
    }


def format_signup(result: Any, settings: Settings) -> str:
    text = format_json(result)
    api_key = result.get("apiKey") if isinstance(result, dict) else None
    if not api_key:
        return text

    snippet = format_json(client_config_snippet(api_key, settings))
    return (
        f"{text}\n\n"
        "Account created. Add this to your MCP client configuration "
        "(e.g. .claude/settings.json) to use the new API key:\n\n"
        f"{snippet}"
    )

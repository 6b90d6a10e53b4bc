"""
getmailer_tools.py
------------------
Static tool catalog for the GetMailer MCP server.

Descriptors are returned verbatim on tools/list. The host validates
arguments against inputSchema before calling; the server does not
re-validate.
"""

from typing import List

from mcp import types

SIGNUP_TOOL = types.Tool(
    name="signup",
    description=(
        "Create a new GetMailer account and receive an API key. "
        "No API key is needed for this tool."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "email":    {"type": "string", "description": "Account email address"},
            "password": {"type": "string", "description": "Account password (min. 8 characters)"},
            "name":     {"type": "string", "description": "Your name (optional)"},
        },
        "required": ["email", "password"],
    },
)

AUTHENTICATED_TOOLS: List[types.Tool] = [
    types.Tool(
        name="account_status",
        description=(
            "Check account status: email verification, subscription plan, "
            "remaining quota, verified domains and whether emails can be sent"
        ),
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="send_email",
        description="Send a transactional email via GetMailer",
        inputSchema={
            "type": "object",
            "properties": {
                "from":       {"type": "string", "description": "Sender email address (must be from a verified domain)"},
                "to":         {"type": "array", "items": {"type": "string"}, "description": "Recipient email address(es)"},
                "subject":    {"type": "string", "description": "Email subject line"},
                "html":       {"type": "string", "description": "HTML content of the email"},
                "text":       {"type": "string", "description": "Plain text content of the email"},
                "cc":         {"type": "array", "items": {"type": "string"}, "description": "CC recipients (optional)"},
                "bcc":        {"type": "array", "items": {"type": "string"}, "description": "BCC recipients (optional)"},
                "replyTo":    {"type": "string", "description": "Reply-to address (optional)"},
                "templateId": {"type": "string", "description": "Template ID to use instead of html/text (optional)"},
                "variables":  {"type": "object", "description": "Template variables as key-value pairs (optional)"},
            },
            "required": ["from", "to", "subject"],
        },
    ),
    types.Tool(
        name="list_emails",
        description="List sent emails with status information",
        inputSchema={
            "type": "object",
            "properties": {
                "limit":  {"type": "number", "description": "Number of emails to return (default: 20)"},
                "cursor": {"type": "string", "description": "Pagination cursor for next page"},
            },
        },
    ),
    types.Tool(
        name="get_email",
        description="Get details of a specific email including delivery events",
        inputSchema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Email ID"},
            },
            "required": ["id"],
        },
    ),
    types.Tool(
        name="list_templates",
        description="List available email templates",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="create_template",
        description="Create a new email template",
        inputSchema={
            "type": "object",
            "properties": {
                "name":    {"type": "string", "description": "Template name"},
                "subject": {"type": "string", "description": "Email subject (can include {{variables}})"},
                "html":    {"type": "string", "description": "HTML content (can include {{variables}})"},
                "text":    {"type": "string", "description": "Plain text content (optional)"},
            },
            "required": ["name", "subject", "html"],
        },
    ),
    types.Tool(
        name="list_domains",
        description="List verified sending domains",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="add_domain",
        description="Add a new sending domain (returns DNS records to configure)",
        inputSchema={
            "type": "object",
            "properties": {
                "domain": {"type": "string", "description": "Domain name to add (e.g., example.com)"},
            },
            "required": ["domain"],
        },
    ),
    types.Tool(
        name="verify_domain",
        description="Check if a domain has been verified",
        inputSchema={
            "type": "object",
            "properties": {
                "domainId": {"type": "string", "description": "Domain ID (from list_domains or add_domain)"},
            },
            "required": ["domainId"],
        },
    ),
    types.Tool(
        name="get_analytics",
        description="Get email analytics and statistics",
        inputSchema={
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "enum": ["summary", "daily"],
                    "description": "Type of analytics (summary or daily)",
                },
                "days": {"type": "number", "description": "Number of days for daily stats (default: 30)"},
            },
        },
    ),
    types.Tool(
        name="list_suppression",
        description="List suppressed email addresses (bounced, complained, or manually added)",
        inputSchema={
            "type": "object",
            "properties": {
                "limit": {"type": "number", "description": "Number of entries to return (default: 50)"},
            },
        },
    ),
    types.Tool(
        name="add_to_suppression",
        description="Add email addresses to the suppression list",
        inputSchema={
            "type": "object",
            "properties": {
                "emails": {"type": "array", "items": {"type": "string"}, "description": "Email addresses to suppress"},
                "reason": {
                    "type": "string",
                    "enum": ["MANUAL", "BOUNCE", "COMPLAINT"],
                    "description": "Reason for suppression (default: MANUAL)",
                },
            },
            "required": ["emails"],
        },
    ),
    types.Tool(
        name="create_batch",
        description="Create a batch email job to send to multiple recipients",
        inputSchema={
            "type": "object",
            "properties": {
                "name":       {"type": "string", "description": "Batch job name"},
                "from":       {"type": "string", "description": "Sender email address"},
                "subject":    {"type": "string", "description": "Email subject (can include {{variables}})"},
                "html":       {"type": "string", "description": "HTML content (can include {{variables}})"},
                "text":       {"type": "string", "description": "Plain text content (optional)"},
                "templateId": {"type": "string", "description": "Template ID to use instead of html/text (optional)"},
                "recipients": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "to":        {"type": "string"},
                            "variables": {"type": "object"},
                        },
                        "required": ["to"],
                    },
                    "description": "Array of recipients with optional per-recipient variables",
                },
                "replyTo":    {"type": "string", "description": "Reply-to address (optional)"},
            },
            "required": ["name", "from", "recipients"],
        },
    ),
    types.Tool(
        name="list_batches",
        description="List batch email jobs",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="get_batch",
        description="Get batch job status and progress",
        inputSchema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Batch ID"},
            },
            "required": ["id"],
        },
    ),
]


def list_tool_definitions(signup_enabled: bool = True) -> List[types.Tool]:
    if signup_enabled:
        return [SIGNUP_TOOL, *AUTHENTICATED_TOOLS]
    return list(AUTHENTICATED_TOOLS)


def tool_names(signup_enabled: bool = True) -> List[str]:
    return [tool.name for tool in list_tool_definitions(signup_enabled)]

"""
getmailer_dispatch.py
---------------------
Routes a tool invocation to exactly one GetMailer API call.

    dispatcher = Dispatcher(settings, GetMailerClient(settings))
    outcome = await dispatcher.dispatch("list_emails", {"limit": 10})

dispatch() never raises: every failure comes back as a ToolOutcome with
an ErrorKind, and the transport layer decides how to render it.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from getmailer_client import GetMailerAPIError, GetMailerClient
from getmailer_config import ConfigurationError, Settings
from getmailer_format import format_account_status, format_json, format_signup

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    CONFIGURATION = "configuration"
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"
    REMOTE_API = "remote_api"
    TRANSPORT = "transport"
    INTERNAL = "internal"


class InvalidArgumentsError(Exception):
    """A field needed to build the request URL is missing."""


@dataclass(frozen=True)
class ToolOutcome:
    text: str
    error: Optional[ErrorKind] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, text: str) -> "ToolOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ToolOutcome":
        return cls(text=message, error=kind)


@dataclass(frozen=True)
class ApiRequest:
    method: str
    path: str
    params: Optional[Dict[str, str]] = None
    body: Any = None
    authenticated: bool = True


# ── Argument helpers ──────────────────────────────────────────────────────────

def _query_value(value: Any) -> str:
    # JSON numbers arrive as floats from some hosts; 10.0 must go out as "10"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_query(args: Dict[str, Any], *keys: str) -> Dict[str, str]:
    return {key: _query_value(args[key]) for key in keys if args.get(key)}


def _path_segment(args: Dict[str, Any], key: str) -> str:
    value = args.get(key)
    if value is None or value == "":
        raise InvalidArgumentsError(f"Missing required argument: {key}")
    return quote(str(value), safe="")


# ── Request builders (one per tool) ───────────────────────────────────────────

def build_signup(args: Dict[str, Any]) -> ApiRequest:
    body = {"email": args.get("email"), "password": args.get("password")}
    if args.get("name"):
        body["name"] = args["name"]
    return ApiRequest("POST", "/api/signup", body=body, authenticated=False)


def build_account_status(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/account/status")


def build_send_email(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("POST", "/api/emails", body=dict(args))


def build_list_emails(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/emails", params=_optional_query(args, "limit", "cursor"))


def build_get_email(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", f"/api/emails/{_path_segment(args, 'id')}")


def build_list_templates(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/templates")


def build_create_template(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("POST", "/api/templates", body=dict(args))


def build_list_domains(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/domains")


def build_add_domain(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("POST", "/api/domains", body={"domain": args.get("domain")})


def build_verify_domain(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("POST", "/api/domains/verify", body={"domainId": args.get("domainId")})


def build_get_analytics(args: Dict[str, Any]) -> ApiRequest:
    params = {
        "type": _query_value(args.get("type") or "summary"),
        "days": _query_value(args.get("days") or 30),
    }
    return ApiRequest("GET", "/api/analytics", params=params)


def build_list_suppression(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/suppression", params=_optional_query(args, "limit"))


def build_add_to_suppression(args: Dict[str, Any]) -> ApiRequest:
    body = {"emails": args.get("emails"), "reason": args.get("reason") or "MANUAL"}
    return ApiRequest("POST", "/api/suppression", body=body)


def build_create_batch(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("POST", "/api/batch", body=dict(args))


def build_list_batches(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", "/api/batch")


def build_get_batch(args: Dict[str, Any]) -> ApiRequest:
    return ApiRequest("GET", f"/api/batch/{_path_segment(args, 'id')}")


REQUEST_BUILDERS: Dict[str, Callable[[Dict[str, Any]], ApiRequest]] = {
    "signup":             build_signup,
    "account_status":     build_account_status,
    "send_email":         build_send_email,
    "list_emails":        build_list_emails,
    "get_email":          build_get_email,
    "list_templates":     build_list_templates,
    "create_template":    build_create_template,
    "list_domains":       build_list_domains,
    "add_domain":         build_add_domain,
    "verify_domain":      build_verify_domain,
    "get_analytics":      build_get_analytics,
    "list_suppression":   build_list_suppression,
    "add_to_suppression": build_add_to_suppression,
    "create_batch":       build_create_batch,
    "list_batches":       build_list_batches,
    "get_batch":          build_get_batch,
}


# ── Dispatcher ────────────────────────────────────────────────────────────────

class Dispatcher:
    """Maps tool names to API calls and formats the results."""

    def __init__(self, settings: Settings, client: GetMailerClient):
        self.settings = settings
        self.client = client
        self._builders = dict(REQUEST_BUILDERS)
        if not settings.signup_enabled:
            del self._builders["signup"]

    @property
    def tool_names(self):
        return set(self._builders)

    def _format(self, name: str, result: Any) -> str:
        if name == "account_status":
            return format_account_status(result)
        if name == "signup":
            return format_signup(result, self.settings)
        return format_json(result)

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolOutcome:
        builder = self._builders.get(name)
        if builder is None:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolOutcome.failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {name}")

        logger.info(f"Calling tool: {name}")
        try:
            request = builder(arguments or {})
            if request.authenticated:
                result = await self.client.request(
                    request.method,
                    request.path,
                    params=request.params,
                    json=request.body,
                )
            else:
                result = await self.client.public_request(request.method, request.path, json=request.body)
            return ToolOutcome.success(self._format(name, result))
        except InvalidArgumentsError as e:
            kind = ErrorKind.INVALID_ARGUMENTS
            message = str(e)
        except ConfigurationError as e:
            kind = ErrorKind.CONFIGURATION
            message = str(e)
        except GetMailerAPIError as e:
            kind = ErrorKind.REMOTE_API
            message = str(e)
        except (httpx.HTTPError, ValueError) as e:
            kind = ErrorKind.TRANSPORT
            message = str(e) or e.__class__.__name__
        except Exception as e:
            logger.exception(f"Tool '{name}' raised an unexpected error")
            kind = ErrorKind.INTERNAL
            message = str(e) or e.__class__.__name__

        logger.warning(f"Tool '{name}' failed ({kind.value}): {message}")
        return ToolOutcome.failure(kind, message)

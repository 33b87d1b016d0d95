"""
Access control: HTTP Basic authentication against a static principal store.

Rules are evaluated first-match on the request path before routing, so an
unauthenticated request never reaches a router or the service layer:

    /api/products/**   authenticated
    /console/**        permit all
    anything else      authenticated

There is no session state and no CSRF protection; every request carries
its own credentials.
"""
import binascii
import logging
from base64 import b64decode
from dataclasses import dataclass, field

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi.security.utils import get_authorization_scheme_param
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from catalog.config import settings

logger = logging.getLogger(__name__)

password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Principals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Principal:
    username: str
    password_hash: str = field(repr=False)
    roles: frozenset[str] = frozenset()

    def has_role(self, role: str) -> bool:
        return role in self.roles


class PrincipalStore:
    """
    Fixed username -> principal mapping, built once at startup.

    ``authenticate`` always runs one hash verification, even for unknown
    usernames, so response time does not reveal which usernames exist.
    """

    def __init__(self, principals: list[Principal]) -> None:
        self._principals = {p.username: p for p in principals}
        self._dummy_hash = password_hasher.hash("dummy-password")

    def __contains__(self, username: str) -> bool:
        return username in self._principals

    def get(self, username: str) -> Principal | None:
        return self._principals.get(username)

    def authenticate(self, username: str, password: str) -> Principal | None:
        principal = self._principals.get(username)
        stored_hash = principal.password_hash if principal else self._dummy_hash
        try:
            password_hasher.verify(stored_hash, password)
        except (VerificationError, InvalidHashError):
            return None
        return principal


def build_principal_store(
    user_password: str = settings.USER_PASSWORD,
    admin_password: str = settings.ADMIN_PASSWORD,
) -> PrincipalStore:
    return PrincipalStore([
        Principal("user", password_hasher.hash(user_password), frozenset({"USER"})),
        Principal("admin", password_hasher.hash(admin_password), frozenset({"ADMIN", "USER"})),
    ])


# ---------------------------------------------------------------------------
# Path rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AccessRule:
    prefix: str
    permit_all: bool

    def matches(self, path: str) -> bool:
        prefix = self.prefix.rstrip("/")
        return path == prefix or path.startswith(prefix + "/")


DEFAULT_RULES: tuple[AccessRule, ...] = (
    AccessRule(settings.API_PREFIX, permit_all=False),
    AccessRule(settings.CONSOLE_PATH, permit_all=True),
)


def requires_authentication(path: str, rules: tuple[AccessRule, ...] = DEFAULT_RULES) -> bool:
    for rule in rules:
        if rule.matches(path):
            return not rule.permit_all
    return True


def parse_basic_credentials(authorization: str | None) -> tuple[str, str] | None:
    """Return ``(username, password)`` from a Basic header, or None if malformed."""
    scheme, param = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "basic":
        return None
    try:
        decoded = b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return username, password


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, runs before routing)
# ---------------------------------------------------------------------------

class BasicAuthMiddleware:
    """
    Enforce the path rules for every HTTP request.

    On success the principal is stored on the request state
    (``request.state.principal``); on failure a 401 with a Basic challenge
    is returned without calling the inner application.  Every response
    also gets ``X-Frame-Options: SAMEORIGIN`` so the console can be framed
    by same-origin pages only.

    Credentials that are present but wrong are refused on every path,
    permit-all ones included; only a request without credentials may use
    a permit-all path anonymously.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: PrincipalStore | None = None,
        rules: tuple[AccessRule, ...] = DEFAULT_RULES,
        realm: str = settings.AUTH_REALM,
    ) -> None:
        self.app = app
        self.store = store or build_principal_store()
        self.rules = rules
        self.realm = realm

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)["X-Frame-Options"] = "SAMEORIGIN"
            await send(message)

        request = Request(scope)
        credentials = parse_basic_credentials(request.headers.get("authorization"))
        principal = None
        if credentials is not None:
            principal = await run_in_threadpool(self.store.authenticate, *credentials)
            if principal is None:
                logger.warning("Rejected credentials for user %r on %s", credentials[0], scope["path"])
        scope.setdefault("state", {})["principal"] = principal

        rejected = credentials is not None and principal is None
        if rejected or (principal is None and requires_authentication(scope["path"], self.rules)):
            response = JSONResponse(
                {"detail": "Unauthorized"},
                status_code=401,
                headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
            )
            await response(scope, receive, send_wrapper)
            return

        await self.app(scope, receive, send_wrapper)

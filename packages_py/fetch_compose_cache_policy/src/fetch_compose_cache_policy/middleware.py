"""
ASGI middleware applying a cache policy to outgoing responses.
"""
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cache_policy import CACHE_CONTROL_HEADER, CachePolicy, CachePolicyOptions, RequestContext

from .transport import build_policy


class CachePolicyMiddleware:
    """
    Stamp Cache-Control on matching responses of an ASGI application.

    Example:
        app = FastAPI()
        app.add_middleware(
            CachePolicyMiddleware,
            options=CachePolicyOptions(
                cache_when_path_matches=["/static", re.compile(r"\\.png$")],
                when_cache_busters_present_cache_for="1 year",
            ),
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        policy: Optional[CachePolicy] = None,
        options: Optional[CachePolicyOptions] = None,
    ) -> None:
        self.app = app
        self.policy = build_policy(policy, options)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = RequestContext(
            method=scope["method"],
            path=scope.get("path", "/"),
            query_string=scope.get("query_string", b"").decode("latin-1"),
        )

        async def send_with_cache_control(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                existing = headers.getlist(CACHE_CONTROL_HEADER)
                value = self.policy.cache_control_for(
                    request, ", ".join(existing) if existing else None
                )
                if value is not None:
                    headers[CACHE_CONTROL_HEADER] = value
            await send(message)

        await self.app(scope, receive, send_with_cache_control)

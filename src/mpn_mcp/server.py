"""MPN MCP Server - classify part numbers and check replacements."""

import logging
import time
from collections import deque
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .classifier import get_classifier
from .config import HTTP_PORT, RATE_LIMIT_REQUESTS
from .lookup import check_replacement, classify_batch, describe_mpn, find_mpn

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    """Build the classifier on startup rather than on the first request."""
    classifier = get_classifier()
    logger.info(f"Classifier ready: {len(classifier.handlers)} handlers, {len(classifier.registry)} patterns")
    yield


mcp = FastMCP(
    name="mpn",
    instructions=(
        "Manufacturer part number classification. No auth required. "
        "Use mpn_describe for type, series and package of a part, "
        "mpn_check_replacement to compare two parts."
    ),
    lifespan=lifespan,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute window per client IP.

    At most MAX_TRACKED_IPS addresses are tracked; once full, idle ones are
    evicted and new clients are refused until space frees up.
    """

    MAX_TRACKED_IPS = 10_000
    WINDOW_SECONDS = 60

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.hits: dict[str, deque[float]] = {}

    @staticmethod
    def client_ip(request) -> str:
        """Rightmost X-Forwarded-For entry (set by our proxy), else the peer address."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            ips = [ip.strip() for ip in forwarded.split(",") if ip.strip()]
            if ips:
                return ips[-1]
        return request.client.host if request.client else "unknown"

    def _evict_idle(self, window_start: float) -> None:
        idle = [ip for ip, hits in self.hits.items() if not hits or hits[-1] < window_start]
        for ip in idle:
            del self.hits[ip]

    def is_limited(self, ip: str, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        window_start = now - self.WINDOW_SECONDS

        if ip not in self.hits and len(self.hits) >= self.MAX_TRACKED_IPS:
            self._evict_idle(window_start)
            if len(self.hits) >= self.MAX_TRACKED_IPS:
                logger.warning(f"Rate limiter full ({self.MAX_TRACKED_IPS} IPs), refusing {ip}")
                return True

        hits = self.hits.setdefault(ip, deque())
        while hits and hits[0] <= window_start:
            hits.popleft()
        if len(hits) >= self.requests_per_minute:
            return True
        hits.append(now)
        return False

    async def dispatch(self, request, call_next):
        if request.url.path == "/health":
            return await call_next(request)

        if self.is_limited(self.client_ip(request)):
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded", "retry_after": self.WINDOW_SECONDS},
                headers={"Retry-After": str(self.WINDOW_SECONDS)},
            )
        return await call_next(request)


# Tools

@mcp.tool(
    annotations=ToolAnnotations(
        title="Describe MPN",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def mpn_describe(mpn: str) -> dict:
    """Classify a manufacturer part number.

    Returns the manufacturer family, most specific component type, generic
    type, series, package and mounting style, plus the ordering-suffix split
    and the strings to try when searching a catalogue.

    Args:
        mpn: Part number as printed on a BOM, e.g. "IRFP460", "MAX3483EESA+"
    """
    return describe_mpn(mpn)


@mcp.tool(
    annotations=ToolAnnotations(
        title="Check Replacement",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def mpn_check_replacement(original: str, candidate: str) -> dict:
    """Check whether a candidate part can officially replace the original.

    Replacement is not always symmetric: a 1000V RL207 replaces a 400V RL204,
    not the other way round, so both directions are reported. Both extracted
    packages are returned with whether they fall in the same package group.

    Args:
        original: Part number currently on the BOM
        candidate: Proposed substitute
    """
    return check_replacement(original, candidate)


@mcp.tool(
    annotations=ToolAnnotations(
        title="Classify MPN Batch",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def mpn_classify_batch(mpns: list[str]) -> dict:
    """Classify several part numbers at once (same fields as mpn_describe).

    Args:
        mpns: Part numbers, up to MAX_BATCH_MPNS per call
    """
    return classify_batch(mpns)


@mcp.tool(
    annotations=ToolAnnotations(
        title="Find MPN In Text",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def mpn_find_in_text(text: str) -> dict:
    """Find the first recognisable part number in free text such as a BOM
    comment or description ("P/N: LM358N, dual op-amp").

    Args:
        text: Free text to scan
    """
    return find_mpn(text)


async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "mpn-mcp",
        "version": __version__,
    })


def create_app():
    """Create the ASGI application."""
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]

    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Drop /health access log lines (container healthchecks)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def main():
    """Run the server."""
    import uvicorn

    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "mpn_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()

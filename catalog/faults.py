import logging
import random
from typing import Callable, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class FaultInjector:
    """
    Decides whether a request should fail with a 500.

    A uniform draw from `random_fn` above `1 - rate` triggers the fault, so the
    default rate of 0.1 fails when the draw exceeds 0.9.
    """

    def __init__(
        self,
        rate: float = 0.1,
        enabled: bool = True,
        random_fn: Optional[Callable[[], float]] = None,
        exempt_prefixes: Iterable[str] = ("/doc",),
        exempt_paths: Iterable[str] = (),
    ):
        self.rate = rate
        self.enabled = enabled
        self.random_fn = random_fn or random.random
        self.exempt_prefixes = tuple(exempt_prefixes)
        self.exempt_paths = set(exempt_paths)

    @property
    def threshold(self) -> float:
        return 1.0 - self.rate

    def is_exempt(self, path: str) -> bool:
        if path in self.exempt_paths:
            return True
        return any(path == p or path.startswith(p + "/") for p in self.exempt_prefixes)

    def should_fail(self, path: str) -> bool:
        if not self.enabled or self.rate <= 0 or self.is_exempt(path):
            return False
        return self.random_fn() > self.threshold

    @classmethod
    def disabled(cls) -> "FaultInjector":
        return cls(enabled=False)


class FaultInjectionMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, injector: FaultInjector):
        super().__init__(app)
        self.injector = injector

    async def dispatch(self, request: Request, call_next):
        if self.injector.should_fail(request.url.path):
            logger.warning("Injected fault for %s %s", request.method, request.url.path)
            return PlainTextResponse("Internal Server Error", status_code=500)
        return await call_next(request)

from .database import begin_request_scope, end_request_scope
from .response import Response, static_file


class StaticFilesMiddleware:
    """
    Serves files under ``static_url`` from ``static_dir`` before the request
    reaches the router.
    """

    def __init__(self, app, static_url, static_dir):
        self.app = app
        self.static_url = static_url.rstrip("/")
        self.static_dir = static_dir

    async def __call__(self, scope, receive, send):
        path = scope.get("path", "")
        if path.startswith(self.static_url + "/"):
            filename = path[len(self.static_url) + 1:]
            response = static_file(self.static_dir, filename)
            if response is None:
                response = Response("Not Found", status_code=404)
            await response(scope, receive, send)
            return
        await self.app(scope, receive, send)


class DBSessionMiddleware:
    """Gives each request its own database session, discarded once the response is sent."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        token = begin_request_scope()
        try:
            await self.app(scope, receive, send)
        finally:
            end_request_scope(token)

import asyncio
from io import BytesIO
from urllib.parse import parse_qs

from werkzeug.formparser import parse_form_data


def _first_values(query_string):
    return {k: v[0] for k, v in parse_qs(query_string, keep_blank_values=True).items()}


class Request:
    """
    The parts of an ASGI HTTP request the admin and public pages read: method,
    path, query parameters, headers and the posted form.
    """

    def __init__(self, scope, receive, app):
        self.scope = scope
        self.receive = receive
        self.app = app
        self.method = scope.get("method", "GET").upper()
        self.path = scope.get("path", "/")
        self.query = _first_values(scope.get("query_string", b"").decode())
        self.headers = {k.decode().lower(): v.decode() for k, v in scope.get("headers", [])}
        self._body = None
        self._form = None

    @property
    def content_type(self):
        return self.headers.get("content-type", "")

    async def body(self):
        """Reads the whole body once and caches it."""
        if self._body is None:
            chunks = []
            more_body = True
            while more_body:
                message = await self.receive()
                chunks.append(message.get("body", b""))
                more_body = message.get("more_body", False)
            self._body = b"".join(chunks)
        return self._body

    async def form(self):
        """
        The posted form as a dict. Both urlencoded bodies (jQuery's default)
        and multipart bodies (``FormData``) are understood; anything else, or
        a request that is not a POST, gives an empty dict.
        """
        if self._form is not None:
            return self._form

        if self.method != "POST":
            self._form = {}
        elif "application/x-www-form-urlencoded" in self.content_type:
            self._form = _first_values((await self.body()).decode())
        elif "multipart/form-data" in self.content_type:
            self._form = await self._parse_multipart()
        else:
            self._form = {}
        return self._form

    async def _parse_multipart(self):
        body_bytes = await self.body()
        environ = {
            "wsgi.input": BytesIO(body_bytes),
            "CONTENT_LENGTH": str(len(body_bytes)),
            "CONTENT_TYPE": self.content_type,
            "REQUEST_METHOD": self.method,
        }

        loop = asyncio.get_running_loop()
        _, form_data, _ = await loop.run_in_executor(None, lambda: parse_form_data(environ))
        return {k: v[0] if len(v) == 1 else v for k, v in form_data.lists()}

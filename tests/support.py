import asyncio
import json
from urllib.parse import urlencode

from userdata import Config, create_app


class Result:
    def __init__(self, status, headers, body):
        self.status = status
        self.headers = headers
        self.body = body

    @property
    def text(self):
        return self.body.decode("utf-8")

    def json(self):
        return json.loads(self.body)


def make_app():
    return create_app(Config(DATABASE_URL="sqlite://", SECRET_KEY="test-secret"))


def call(app, method, path, query="", form=None, body=None, content_type=None):
    headers = []
    if form is not None:
        body = urlencode(form).encode()
        content_type = "application/x-www-form-urlencoded"
    if content_type:
        headers.append((b"content-type", content_type.encode()))
    body = body or b""

    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query.encode(),
        "headers": headers,
    }
    messages = []

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    async def send(message):
        messages.append(message)

    asyncio.run(app(scope, receive, send))

    start = messages[0]
    response_headers = {k.decode(): v.decode() for k, v in start["headers"]}
    response_body = b"".join(m.get("body", b"") for m in messages[1:])
    return Result(start["status"], response_headers, response_body)


def ajax(app, **form):
    return call(app, "POST", "/admin/ajax", form=form)

# userdata/response.py
import json
import logging
import mimetypes
import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

_template_env = None


def configure_template_env(template_paths):
    """Points the shared Jinja2 environment at ``template_paths``."""
    global _template_env
    _template_env = Environment(
        loader=FileSystemLoader(template_paths),
        autoescape=select_autoescape(['html', 'xml'])
    )
    return _template_env


def get_template_env():
    if _template_env is None:
        raise RuntimeError("Template environment not configured. Create a UserDataApp first.")
    return _template_env


class Response:
    """
    Status, headers and body of an HTTP response, sent by calling it with
    the ASGI ``send`` channel.
    """
    content_type = "text/plain; charset=utf-8"

    def __init__(self, body, status_code=200, content_type=None):
        self.body = body if isinstance(body, bytes) else body.encode("utf-8")
        self.status_code = status_code
        self.headers = {
            "content-type": content_type or self.content_type,
            "content-length": str(len(self.body)),
        }

    async def __call__(self, scope, receive, send):
        await send({
            "type": "http.response.start",
            "status": self.status_code,
            "headers": [[k.encode(), v.encode()] for k, v in self.headers.items()],
        })
        await send({"type": "http.response.body", "body": self.body})


class HTMLResponse(Response):
    content_type = "text/html; charset=utf-8"


class JSONResponse(Response):
    content_type = "application/json"

    def __init__(self, data, status_code=200):
        self.data = data
        super().__init__(json.dumps(data), status_code)


def render(req, template_name, context=None, status_code=200):
    """
    Renders ``template_name`` with ``context`` plus ``url_for`` and the
    scripts and styles enqueued for this request.
    """
    context = dict(context or {})
    context['url_for'] = req.app.router.url_for
    context.setdefault('scripts', list(req.app.enqueued_scripts.values()))
    context.setdefault('styles', list(req.app.enqueued_styles.values()))
    body = get_template_env().get_template(template_name).render(**context)
    return HTMLResponse(body, status_code=status_code)


def static_file(directory, filename):
    """A response with the contents of ``directory/filename``, or None if there is no such file."""
    root = os.path.abspath(directory)
    path = os.path.abspath(os.path.join(root, filename))
    if not path.startswith(root + os.sep) or not os.path.isfile(path):
        logger.debug("Static file not found: %s", filename)
        return None
    content_type, _ = mimetypes.guess_type(path)
    with open(path, "rb") as f:
        return Response(f.read(), content_type=content_type or "application/octet-stream")

import asyncio
import logging
import os

from .config import Config
from .hooks import HookRegistry
from .middleware import DBSessionMiddleware, StaticFilesMiddleware
from .nonce import InvalidNonce, check_nonce, create_nonce
from .request import Request
from .response import HTMLResponse, JSONResponse, Response, configure_template_env, render
from .routing import MethodNotAllowed, NotFound, Router

logger = logging.getLogger(__name__)

AJAX_PREFIX = "wp_ajax_"


class MenuPage:
    def __init__(self, page_title, menu_title, slug, callback, icon=None, position=None):
        self.page_title = page_title
        self.menu_title = menu_title
        self.slug = slug
        self.callback = callback
        self.icon = icon
        self.position = position


class UserDataApp:
    """
    The host application the plugin runs inside.

    It provides what the plugin expects from its CMS: a hook registry, an admin
    area made of menu pages, a single admin-ajax endpoint that dispatches on the
    posted ``action`` field, script/style enqueueing and nonces. It is also the
    ASGI application served by :func:`userdata.server.run`.

    Attributes:
        router (Router): The application's router instance.
        hooks (HookRegistry): Actions, filters and shortcodes.
        config (Config): Application settings.
        menu_pages (dict): Admin pages registered during ``admin_menu``, by slug.
    """

    def __init__(self, config=None):
        """
        Initializes the app.

        Args:
            config: A :class:`~userdata.config.Config` instance or any object
                    with the same attributes. Defaults to ``Config.from_env()``.
        """
        self.config = config or Config.from_env()
        self.router = Router()
        self.hooks = HookRegistry()
        self.menu_pages = {}
        self.enqueued_scripts = {}
        self.enqueued_styles = {}
        self.localized = {}
        self.plugin = None
        self._init_from_config()
        self._register_core_routes()

    def _init_from_config(self):
        """
        Sets up the template environment from the configured folders.
        """
        template_paths = []

        user_template_path = os.path.join(self.config.BASE_DIR, self.config.TEMPLATE_FOLDER)
        if os.path.isdir(user_template_path):
            template_paths.append(user_template_path)

        lib_template_path = os.path.join(os.path.dirname(__file__), "templates")
        if os.path.isdir(lib_template_path) and lib_template_path not in template_paths:
            template_paths.append(lib_template_path)

        if template_paths:
            configure_template_env(template_paths)

    def _register_core_routes(self):
        self.router.add_route("/admin", self.admin_page, ["GET"], endpoint="admin")
        self.router.add_route("/admin/ajax", self.admin_ajax, ["POST"], endpoint="admin_ajax")

    def boot(self):
        """Fires ``init`` once every plugin has registered its hooks."""
        self.hooks.do_action("init", self)
        logger.debug("Application booted")

    # --- Admin area ---

    def add_menu_page(self, page_title, menu_title, slug, callback, icon=None, position=None):
        self.menu_pages[slug] = MenuPage(page_title, menu_title, slug, callback, icon, position)
        return slug

    def enqueue_script(self, handle, src):
        self.enqueued_scripts[handle] = src

    def enqueue_style(self, handle, src):
        self.enqueued_styles[handle] = src

    def localize_script(self, handle, object_name, data):
        """Exposes ``data`` to the page as a global JS object named ``object_name``."""
        self.localized[object_name] = {"handle": handle, "data": data}

    def create_nonce(self, action):
        return create_nonce(self.config.SECRET_KEY, action, self.config.NONCE_LIFETIME)

    def check_ajax_referer(self, form, action, field="nonce"):
        """
        Verifies the nonce posted in ``form[field]`` for ``action``.

        Raises:
            InvalidNonce: if the nonce is missing or invalid.
        """
        return check_nonce(self.config.SECRET_KEY, form.get(field), action, self.config.NONCE_LIFETIME)

    def ajax_url(self):
        return self.router.url_for("admin_ajax")

    def admin_page(self, req):
        self.menu_pages.clear()
        self.enqueued_scripts.clear()
        self.enqueued_styles.clear()
        self.localized.clear()
        self.hooks.do_action("admin_menu", self)

        slug = req.query.get("page")
        page = self.menu_pages.get(slug)
        if page is None:
            if slug is None and self.menu_pages:
                return render(req, "admin/index.html", {"menu_pages": self._sorted_menu()})
            return JSONResponse({"error": f"Admin page '{slug}' not found"}, status_code=404)

        self.hooks.do_action("admin_enqueue_scripts", slug)
        return page.callback(req)

    def _sorted_menu(self):
        return sorted(self.menu_pages.values(), key=lambda p: (p.position is None, p.position or 0, p.slug))

    async def admin_ajax(self, req):
        form = await req.form()
        action = form.get("action")
        hook = f"{AJAX_PREFIX}{action}"
        if not action or not self.hooks.has_action(hook):
            logger.warning("Unknown ajax action %r", action)
            return JSONResponse({"result": False}, status_code=400)

        logger.info("Dispatching ajax action %s", action)
        response = self.hooks.do_action(hook, req, form)
        if asyncio.iscoroutine(response):
            response = await response
        if response is None:
            return JSONResponse({"result": False}, status_code=500)
        return response

    # --- ASGI ---

    async def _asgi_app_handler(self, scope, receive, send):
        """
        Resolves the route for a single request, calls its handler and sends
        the response. Routing failures become JSON 404/405 responses, a bad
        nonce a 403 and anything unexpected a 500.
        """
        req = scope['userdata.request']
        try:
            handler, params = self.router.resolve(req.path, req.method)
        except NotFound as e:
            response = JSONResponse({"error": str(e)}, status_code=404)
            await response(scope, receive, send)
            return
        except MethodNotAllowed as e:
            response = JSONResponse({"error": str(e)}, status_code=405)
            await response(scope, receive, send)
            return

        try:
            if asyncio.iscoroutinefunction(handler):
                response = await handler(req, **params)
            else:
                response = handler(req, **params)
        except InvalidNonce as e:
            logger.warning("%s %s rejected: %s", req.method, req.path, e)
            response = JSONResponse({"result": False, "error": "invalid nonce"}, status_code=403)
        except Exception:
            logger.exception("Unhandled error on %s %s", req.method, req.path)
            response = JSONResponse({"error": "Internal Server Error"}, status_code=500)

        if isinstance(response, str):
            response = HTMLResponse(response)

        if not isinstance(response, Response):
            raise TypeError(f"View function did not return a Response object (got {type(response).__name__})")

        await response(scope, receive, send)

    async def __call__(self, scope, receive, send):
        """
        The ASGI entry point. Builds the request object and runs the handler
        wrapped in the static files and database session middleware.
        """
        if scope["type"] != "http":
            return

        req = Request(scope, receive, self)
        scope['userdata.request'] = req

        handler = self._asgi_app_handler
        handler = DBSessionMiddleware(handler)
        handler = StaticFilesMiddleware(handler, self.config.STATIC_URL, self.config.STATIC_DIR)

        await handler(scope, receive, send)

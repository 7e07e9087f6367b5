from . import __VERSION__
from .admin import Admin
from .loader import Loader
from .public import Public, SHORTCODE_TAG


class Plugin:
    """
    Defines the plugin's hooks and hands them to the host.

    Admin and public components are built here; every hook they need is
    queued on a :class:`~userdata.loader.Loader` and registered by :meth:`run`.
    """

    plugin_name = "users_data"

    def __init__(self, app):
        self.app = app
        self.version = __VERSION__
        self.loader = Loader()
        self.admin = Admin(app, self.plugin_name, self.version)
        self.public = Public(app, self.plugin_name, self.version)
        self._define_admin_hooks()
        self._define_public_hooks()

    def _define_admin_hooks(self):
        self.loader.add_action("admin_menu", self.admin, "add_menu")
        self.loader.add_action("admin_enqueue_scripts", self.admin, "enqueue_styles")
        self.loader.add_action("admin_enqueue_scripts", self.admin, "enqueue_scripts")
        self.loader.add_action("wp_ajax_new_crud_table", self.admin, "ajax_crud_table", 10, 2)
        self.loader.add_action("wp_ajax_ajax_delete_table", self.admin, "ajax_delete_table", 10, 2)
        self.loader.add_action("wp_ajax_ajax_add_users", self.admin, "ajax_users", 10, 2)

    def _define_public_hooks(self):
        self.loader.add_action("init", self.public, "register_routes")
        self.loader.add_filter("the_content", self.public, "the_content")
        self.loader.add_shortcode(SHORTCODE_TAG, self.public, "shortcode_users")

    def run(self):
        self.loader.run(self.app.hooks)

    def deactivate(self):
        """Takes the plugin's hooks and public route back out of the app."""
        self.loader.remove(self.app.hooks)
        self.public.unregister_routes()

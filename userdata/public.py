from .models import DataTable
from .response import get_template_env, render

SHORTCODE_TAG = "userdata"


class Public:
    """Public-facing side of the plugin: the ``[userdata id="N"]`` shortcode."""

    def __init__(self, app, plugin_name, version):
        self.app = app
        self.plugin_name = plugin_name
        self.version = version

    def register_routes(self, app):
        app.router.add_route("/tables/<int:table_id>", self.table_page, ["GET"], endpoint="public_table")

    def the_content(self, content):
        return self.app.hooks.do_shortcode(content)

    def shortcode_users(self, attrs, content, tag):
        try:
            table_id = int(attrs.get("id", ""))
        except ValueError:
            return ""
        table = DataTable.get(table_id)
        if table is None:
            return ""
        template = get_template_env().get_template("public/users.html")
        return template.render(table=table, users=table.users)

    def table_page(self, req, table_id):
        content = self.app.hooks.apply_filters("the_content", f'[{SHORTCODE_TAG} id="{table_id}"]')
        return render(req, "public/page.html", {"content": content})

    def unregister_routes(self):
        self.app.router.remove_route("public_table")

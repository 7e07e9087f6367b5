import logging

from .database import DatabaseError
from .models import DataTable
from .response import JSONResponse, render
from .validation import ValidationError, validate_table_name, validate_user_fields

logger = logging.getLogger(__name__)

MENU_SLUG = "new_data"
NONCE_ACTION = "new_data_seg"
DELETE_NONCE_ACTION = "new_tab_delete_seg"

MATERIALIZE_CSS = "https://cdnjs.cloudflare.com/ajax/libs/materialize/1.0.0/css/materialize.min.css"
MATERIALIZE_JS = "https://cdnjs.cloudflare.com/ajax/libs/materialize/1.0.0/js/materialize.min.js"
MATERIAL_ICONS = "https://fonts.googleapis.com/icon?family=Material+Icons"
JQUERY_JS = "https://code.jquery.com/jquery-3.7.1.min.js"
SWEETALERT_JS = "https://unpkg.com/sweetalert/dist/sweetalert.min.js"

DATABASE_ERROR_MESSAGE = "database error"


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class Admin:
    """
    The admin side of the plugin: its menu page, the assets that page needs
    and the handlers behind the AJAX actions.
    """

    def __init__(self, app, plugin_name, version):
        self.app = app
        self.plugin_name = plugin_name
        self.version = version

    def static(self, filename):
        return f"{self.app.config.STATIC_URL}/{filename}?ver={self.version}"

    def enqueue_styles(self, hook_suffix):
        if hook_suffix != MENU_SLUG:
            return
        self.app.enqueue_style("material_icons", MATERIAL_ICONS)
        self.app.enqueue_style("materialize_css", MATERIALIZE_CSS)
        self.app.enqueue_style(self.plugin_name, self.static("css/new-admin.css"))

    def enqueue_scripts(self, hook_suffix):
        if hook_suffix != MENU_SLUG:
            return
        self.app.enqueue_script("jquery", JQUERY_JS)
        self.app.enqueue_script("materialize_js", MATERIALIZE_JS)
        self.app.enqueue_script("sweetalert", SWEETALERT_JS)
        self.app.enqueue_script(self.plugin_name, self.static("js/new-admin.js"))

        ajax_url = self.app.ajax_url()
        self.app.localize_script(self.plugin_name, "newdata", {
            "url": ajax_url,
            "seguridad": self.app.create_nonce(NONCE_ACTION),
        })
        self.app.localize_script(self.plugin_name, "newtabdelete", {
            "url": ajax_url,
            "seguridad": self.app.create_nonce(DELETE_NONCE_ACTION),
        })

    def add_menu(self, app):
        app.add_menu_page(
            "Users Data",
            "Users Data",
            MENU_SLUG,
            self.render_page,
            icon="dashicons-id",
            position=40,
        )

    # --- Pages ---

    def render_page(self, req):
        if req.query.get("accion") == "edit":
            return self.render_edit(req, _to_int(req.query.get("id")))
        context = {
            "tables": DataTable.all(),
            "localized": self.app.localized,
            "edit_url": f"?page={MENU_SLUG}&accion=edit&id=",
        }
        return render(req, "admin/tables.html", context)

    def render_edit(self, req, table_id):
        table = DataTable.get(table_id) if table_id is not None else None
        if table is None:
            return JSONResponse({"error": f"Table {req.query.get('id')} not found"}, status_code=404)
        context = {
            "table": table,
            "users": table.users,
            "localized": self.app.localized,
        }
        return render(req, "admin/edit.html", context)

    # --- AJAX actions ---

    def ajax_crud_table(self, req, form):
        self.app.check_ajax_referer(form, NONCE_ACTION)

        if form.get("tipo") != "add":
            return JSONResponse({"result": False})

        try:
            name = validate_table_name(form.get("nombre"))
        except ValidationError as e:
            return JSONResponse({"result": False, "error": str(e), "errors": e.errors})

        table = DataTable(nombre=name, data="[]")
        try:
            table.save()
        except DatabaseError as e:
            logger.error("Could not create table %r: %s", name, e)
            return JSONResponse({"result": False, "error": DATABASE_ERROR_MESSAGE})

        logger.info("Created table %s (%r)", table.id, name)
        return JSONResponse({"result": True, "insert_id": table.id})

    def ajax_delete_table(self, req, form):
        self.app.check_ajax_referer(form, DELETE_NONCE_ACTION)

        table_id = _to_int(form.get("id"))
        nombre = form.get("nombre", "")
        failure = JSONResponse({"result": 0})

        if form.get("tipo") != "delete" or table_id is None:
            return failure

        try:
            table = DataTable.get(table_id)
            if table is None:
                return failure
            table.delete()
        except DatabaseError as e:
            logger.error("Could not delete table %s: %s", table_id, e)
            return failure

        logger.info("Deleted table %s", table_id)
        return JSONResponse({"result": 1, "id": table_id, "nombre": nombre or table.nombre})

    def ajax_users(self, req, form):
        self.app.check_ajax_referer(form, NONCE_ACTION)

        tipo = form.get("tipo")
        handler = {
            "add": self._add_user,
            "update": self._update_user,
            "delete": self._delete_user,
        }.get(tipo)
        if handler is None:
            return JSONResponse({"result": False})

        table_id = _to_int(form.get("idTable"))
        if table_id is None:
            return JSONResponse({"result": False, "error": "table not found"})

        try:
            table = DataTable.get(table_id)
            if table is None:
                return JSONResponse({"result": False, "error": "table not found"})
            return handler(table, form)
        except ValidationError as e:
            return JSONResponse({"result": False, "error": str(e), "errors": e.errors})
        except DatabaseError as e:
            logger.error("User %s on table %s failed: %s", tipo, table_id, e)
            return JSONResponse({"result": False, "error": DATABASE_ERROR_MESSAGE})

    def _add_user(self, table, form):
        fields = validate_user_fields(form)
        user_id = table.add_user(fields)
        table.save()
        logger.info("Added user %s to table %s", user_id, table.id)
        return JSONResponse({"result": True, "insert_id": user_id})

    def _update_user(self, table, form):
        fields = validate_user_fields(form)
        user_id = _to_int(form.get("idUser"))
        if user_id is None or not table.update_user(user_id, fields):
            return JSONResponse({"result": False, "error": "user not found"})
        table.save()
        logger.info("Updated user %s on table %s", user_id, table.id)
        return JSONResponse({"result": True})

    def _delete_user(self, table, form):
        user_id = _to_int(form.get("idUser"))
        if user_id is None or not table.remove_user(user_id):
            return JSONResponse({"result": False, "error": "user not found"})
        table.save()
        logger.info("Removed user %s from table %s", user_id, table.id)
        return JSONResponse({"result": True})

import re

EMAIL_RE = re.compile(r"^([a-zA-Z0-9_.\-])+@(([a-zA-Z0-9\-])+\.)+([a-zA-Z0-9]{2,4})+$")

TABLE_NAME_MAX_LENGTH = 70

USER_FIELDS = ("nombres", "apellidos", "email", "imgUrl")
REQUIRED_USER_FIELDS = ("nombres", "apellidos", "email")


class ValidationError(Exception):
    """Raised when submitted form data does not pass validation."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def is_blank(value):
    return value is None or str(value).strip() == ""


def validate_email(email):
    """Returns True when ``email`` has the basic ``local@domain.tld`` shape."""
    if email is None:
        return False
    return EMAIL_RE.match(email) is not None


def validate_table_name(name):
    """
    Checks a new table's name and returns it stripped.

    Raises:
        ValidationError: if the name is blank or too long.
    """
    if is_blank(name):
        raise ValidationError({"nombre": "Insertar nombre de la tabla."})
    name = name.strip()
    if len(name) > TABLE_NAME_MAX_LENGTH:
        raise ValidationError({"nombre": f"El nombre no puede superar {TABLE_NAME_MAX_LENGTH} caracteres."})
    return name


def validate_user_fields(form):
    """
    Validates the user form and returns a clean dict with the user fields.

    The image URL is optional; every other field must be filled in and the
    email must match the simple pattern.
    """
    errors = {}
    for field in REQUIRED_USER_FIELDS:
        if is_blank(form.get(field)):
            errors[field] = "Campo obligatorio."

    email = (form.get("email") or "").strip()
    if "email" not in errors and not validate_email(email):
        errors["email"] = "Correo incorrecto."

    if errors:
        raise ValidationError(errors)

    return {
        "nombres": form["nombres"].strip(),
        "apellidos": form["apellidos"].strip(),
        "email": email,
        "imgUrl": (form.get("imgUrl") or "").strip(),
    }

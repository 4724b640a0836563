from flask import Blueprint, current_app, render_template_string, send_from_directory

from models import store
from utils.errors import StoreError

views_bp = Blueprint("views", __name__)

_TABLE_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>{{ title }}</title>
    <style>
      body { font-family: Arial; margin: 20px; }
      table { width: 100%; border-collapse: collapse; }
      th, td { padding: 8px; border: 1px solid #ddd; text-align: left; }
      th { background: #f2f2f2; }
      .password-col { font-weight: bold; color: #ed4956; }
      .failed-row { background: #ffebee; }
      .duplicate-row { background: #fff8e1; }
    </style>
  </head>
  <body>
    <h2>{{ title }}</h2>
    <table>
      <tr><th>ID</th><th>Email</th><th>Full Name</th><th>Username</th><th>Password</th><th>Birthday</th></tr>
      {% for row, css in rows %}
      <tr class="{{ css }}"><td>{{ row.id }}</td><td>{{ row.email }}</td><td>{{ row.fullName }}</td><td>{{ row.username }}</td><td class="password-col">{{ row.password }}</td><td>{{ row.birthday }}</td></tr>
      {% endfor %}
    </table>
    <p>Total: {{ rows|length }}</p>
    <a href="/">Back</a>
  </body>
</html>
"""

_ERROR_PAGE = "<h2>Error: {{ message }}</h2>"


def _row_classes(records, flag_duplicates: bool):
    out = []
    previous = None
    for record in records:
        classes = []
        if record.is_failed_login():
            classes.append("failed-row")
        if (
            flag_duplicates
            and previous is not None
            and (record.username, record.email) == (previous.username, previous.email)
        ):
            classes.append("duplicate-row")
        out.append((record, " ".join(classes)))
        previous = record
    return out


def _render_table(table: str, title: str, flag_duplicates: bool):
    try:
        records = store.load_all(table)
    except StoreError as exc:
        return render_template_string(_ERROR_PAGE, message=exc.message), 200
    return render_template_string(
        _TABLE_PAGE,
        title=title,
        rows=_row_classes(records, flag_duplicates),
    ), 200


@views_bp.get("/view-users")
def view_users():
    return _render_table("users", "Users Data", flag_duplicates=False)


@views_bp.get("/view-audit")
def view_audit():
    return _render_table("audit", "Audit Data", flag_duplicates=True)


@views_bp.get("/")
def index():
    return send_from_directory(current_app.static_folder, current_app.config.get("LOGIN_PAGE", "login.html"))

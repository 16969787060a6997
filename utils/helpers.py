import json
import bleach
from flask import jsonify


def format_datetime(datetime_obj):
    """Format datetime to a readable string."""
    if not datetime_obj:
        return None
    return datetime_obj.strftime('%Y-%m-%d %H:%M:%S')

def format_date(date_obj):
    if not date_obj:
        return None
    return date_obj.strftime('%Y-%m-%d')

def load_json_list(raw):
    """Decode a JSON array column. Missing or corrupt values come back as []."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return value if isinstance(value, list) else []

def dump_json_list(values):
    return json.dumps(list(values or []))

def sanitize_input(value):
    """Trim, strip HTML tags and escape what is left, before storing free text.

    bleach escapes `& < >`; quotes are escaped here as well.
    """
    cleaned = bleach.clean(str(value).strip(), tags=[], strip=True)
    return cleaned.replace('"', "&quot;").replace("'", "&#039;")


def send_response(payload=None, status=200, **fields):
    """
    Build the JSON response every endpoint returns. The body always carries
    a `success` flag; it defaults to True for 2xx statuses.
    """
    body = {"success": 200 <= status < 300}
    if payload:
        body.update(payload)
    body.update(fields)
    return jsonify(body), status

def send_error(message, status=400, **fields):
    return send_response({"success": False, "message": message}, status, **fields)

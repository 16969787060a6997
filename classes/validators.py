# validators.py
import re
from datetime import datetime
from urllib.parse import urlparse

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
URL_SCHEMES = ("http", "https", "ftp")


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValueError(f"{field_name} must be {max_length} characters or fewer.")

def validate_min_length(field_name, value, min_length):
    if len(value) < min_length:
        raise ValueError(f"{field_name} must be at least {min_length} characters")

def validate_email(value):
    value = str(value).strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value

def validate_date(value, field_name="date"):
    """Strict YYYY-MM-DD that is also a real calendar date."""
    value = str(value).strip()
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid {field_name} format. Expected YYYY-MM-DD.")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid {field_name} format. Expected YYYY-MM-DD.")

def validate_url(value):
    value = str(value).strip()
    parsed = urlparse(value)
    if parsed.scheme not in URL_SCHEMES or not parsed.netloc or " " in value:
        raise ValueError("Invalid URL format for link.")
    return value

def validate_string_list(value, field_name):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return [item.strip() for item in value if item.strip()]

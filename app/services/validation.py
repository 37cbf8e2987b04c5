"""
Validation rules for catalog writes.

Each rule takes the submitted field map and either returns silently or raises
a ValidationError. Rules run in a fixed order and always before the store
touches the database, so a failing rule never leaves a partial write behind.
"""
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from app.core.errors import ConflictError, ValidationError


class _Clear:
    """Marker for "set this optional column back to empty" in an update."""

    def __repr__(self):
        return "CLEAR"


CLEAR = _Clear()

NAME_MAX_LENGTH = 100
CODE_MAX_LENGTH = 50  # terms and SKUs

# Numeric(digits, places) of the cost and percent columns
COST_DIGITS = 10
PERCENT_DIGITS = 5
AMOUNT_PLACES = 2

PLAN_TITLE = "Plan Entry Error"
ADDON_TITLE = "Addon Entry Error"
CATEGORY_TITLE = "Category Entry Error"
CREDENTIAL_TITLE = "API KEY Creation Error"


def is_blank(value) -> bool:
    if value is None or value is CLEAR:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def to_decimal(value) -> Optional[Decimal]:
    """Parse a submitted number; None for blank input, ValueError if not numeric"""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"{value!r} is not a number")
    if not number.is_finite():
        raise ValueError(f"{value!r} is not a number")
    return number


def is_numeric(value) -> bool:
    try:
        return to_decimal(value) is not None
    except ValueError:
        return False


def fits_amount(number: Decimal, digits: int = COST_DIGITS, places: int = AMOUNT_PLACES) -> bool:
    """True when ``number`` can be stored in a Numeric(digits, places) column without loss"""
    if abs(number) >= Decimal(10) ** (digits - places):
        return False
    return number == number.quantize(Decimal(1).scaleb(-places))


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("true", "1", "on", "yes")


def require_method(method: str, expected: str = "POST", title: str = "Entry Error") -> None:
    if (method or "").upper() != expected:
        raise ValidationError("Method not allowed", code=405, title=title)


def _fail(message: str, title: str):
    raise ValidationError(message, title=title)


def _check_length(value, label: str, title: str, limit: int = NAME_MAX_LENGTH) -> None:
    if value is not None and value is not CLEAR and len(str(value).strip()) > limit:
        _fail(f"{label} length is too long. Max of {limit} characters.", title)


def _check_code(value, label: str, title: str) -> None:
    _check_length(value, label, title, limit=CODE_MAX_LENGTH)


def _check_amount(value, message: str, title: str, required: bool = False, digits: int = COST_DIGITS) -> None:
    if is_blank(value) and not required:
        return
    try:
        number = to_decimal(value)
    except ValueError:
        number = None
    if number is None:
        _fail(message, title)
    if not fits_amount(number, digits):
        _fail(f"{message} Use at most {digits - AMOUNT_PLACES} digits before "
              f"and {AMOUNT_PLACES} after the decimal point.", title)


def _check_not_cleared(data: dict, required: tuple, title: str) -> None:
    for field in required:
        if data.get(field) is CLEAR:
            _fail(f"The {field} field can not be cleared.", title)


# ---------------------------
# Plans

def validate_plan_add(data: dict) -> None:
    _check_length(data.get("name"), "Plan name", PLAN_TITLE)
    _check_amount(data.get("min_cost"), "The minimum cost is not a valid value.", PLAN_TITLE)
    _check_amount(data.get("max_cost"), "The maximum cost is not a valid value.", PLAN_TITLE)
    if is_blank(data.get("tier1_term")):
        _fail("Tier 1 term is required.", PLAN_TITLE)
    _check_code(data.get("tier1_term"), "Tier 1 term", PLAN_TITLE)
    _check_amount(data.get("tier1_cost"), "Tier 1 cost is not a valid value.", PLAN_TITLE, required=True)
    if is_blank(data.get("tier1_sku")):
        _fail("Tier 1 sku is not a valid value.", PLAN_TITLE)
    _check_code(data.get("tier1_sku"), "Tier 1 sku", PLAN_TITLE)

    tier2_required = not is_blank(data.get("tier2_term"))
    _check_code(data.get("tier2_term"), "Tier 2 term", PLAN_TITLE)
    _check_amount(data.get("tier2_cost"), "Tier 2 cost is not a valid value.", PLAN_TITLE, required=tier2_required)
    if tier2_required and is_blank(data.get("tier2_sku")):
        _fail("Tier 2 sku is not a valid value.", PLAN_TITLE)
    _check_code(data.get("tier2_sku"), "Tier 2 sku", PLAN_TITLE)


def validate_plan_update(data: dict) -> None:
    _check_not_cleared(data, ("tier1_term", "tier1_cost", "tier1_sku"), PLAN_TITLE)
    _check_length(data.get("name"), "Plan name", PLAN_TITLE)
    for field, label in (("min_cost", "minimum cost"), ("max_cost", "maximum cost"),
                         ("tier1_cost", "tier 1 cost"), ("tier2_cost", "tier 2 cost")):
        _check_amount(data.get(field), f"The {label} is not a valid value.", PLAN_TITLE)
    for field, label in (("tier1_term", "Tier 1 term"), ("tier1_sku", "Tier 1 sku"),
                         ("tier2_term", "Tier 2 term"), ("tier2_sku", "Tier 2 sku")):
        _check_code(data.get(field), label, PLAN_TITLE)


# ---------------------------
# Addons

def validate_addon_add(data: dict) -> None:
    title = data.get("title")
    if is_blank(title):
        _fail("Addon title is required.", ADDON_TITLE)
    _check_length(title, "Addon title", ADDON_TITLE)
    _check_amount(data.get("cost"), "The addon cost is not a valid value.", ADDON_TITLE, required=True)
    if is_blank(data.get("sku")):
        _fail("Addon sku is not a valid value.", ADDON_TITLE)
    _check_code(data.get("sku"), "Addon sku", ADDON_TITLE)


def validate_addon_update(data: dict) -> None:
    _check_not_cleared(data, ("title", "cost", "sku"), ADDON_TITLE)
    _check_length(data.get("title"), "Addon title", ADDON_TITLE)
    _check_amount(data.get("cost"), "The addon cost is not a valid value.", ADDON_TITLE)
    _check_code(data.get("sku"), "Addon sku", ADDON_TITLE)


# ---------------------------
# Categories

def _check_surcharge(data: dict) -> None:
    _check_amount(data.get("ts_percent"), "The tax surcharge percent is not a valid value.",
                  CATEGORY_TITLE, digits=PERCENT_DIGITS)


def validate_category_add(data: dict, name_exists: Callable[[str], bool]) -> None:
    name = data.get("name")
    if is_blank(name):
        _fail("Category name can not be empty.", CATEGORY_TITLE)
    _check_length(name, "Category name", CATEGORY_TITLE)
    _check_surcharge(data)
    if name_exists(str(name).strip()):
        raise ConflictError("Category exists in database.", title=CATEGORY_TITLE)


def validate_category_update(category_id, data: dict, name_taken: Callable[[str], bool]) -> None:
    if is_blank(category_id):
        _fail("Missing the category id.", CATEGORY_TITLE)
    name = data.get("name")
    if is_blank(name):
        _fail("Category name can not be empty.", CATEGORY_TITLE)
    _check_length(name, "Category name", CATEGORY_TITLE)
    _check_surcharge(data)
    if name_taken(str(name).strip()):
        raise ConflictError("Another category already uses this name.", title=CATEGORY_TITLE)


# ---------------------------
# Credentials

def validate_credential(name, username, password) -> None:
    if is_blank(name):
        _fail("Name is required.", CREDENTIAL_TITLE)
    _check_length(name, "Name", CREDENTIAL_TITLE)
    if is_blank(username):
        _fail("Username is required.", CREDENTIAL_TITLE)
    _check_length(username, "Username", CREDENTIAL_TITLE)
    if is_blank(password):
        _fail("Password is required.", CREDENTIAL_TITLE)

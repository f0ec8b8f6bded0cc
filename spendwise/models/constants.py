"""Domain constants for expense validation."""

from typing import Tuple

# Order matches the category dropdown shown to users.
CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transport",
    "Entertainment",
    "Shopping",
    "Bills",
    "Other",
)
DEFAULT_CATEGORY = "Other"

# Ten significant digits, two after the point.
MAX_AMOUNT = "99999999.99"

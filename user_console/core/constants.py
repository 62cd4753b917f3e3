"""Console constants.

Operator-facing texts (notices, prompts, form labels) and record defaults.
"""

# ---------------------------------------------------------------------------
# Record defaults
# ---------------------------------------------------------------------------
DEFAULT_STATUS: str = "ACTIVE"

# ---------------------------------------------------------------------------
# Generic failure notices (used when the directory sends no message)
# ---------------------------------------------------------------------------
FETCH_FAILED_MESSAGE: str = "Failed to load users"
SUBMIT_FAILED_MESSAGE: str = "Operation failed"
DELETE_FAILED_MESSAGE: str = "Delete failed"
MISSING_FIELDS_MESSAGE: str = "Please fill in the required fields: {fields}"

# ---------------------------------------------------------------------------
# Confirmation gate
# ---------------------------------------------------------------------------
DELETE_CONFIRMATION_PROMPT: str = "Are you sure you want to delete this user?"

# ---------------------------------------------------------------------------
# List status messages
# ---------------------------------------------------------------------------
LOADING_MESSAGE: str = "Loading records..."
EMPTY_MESSAGE: str = "No users found."

# ---------------------------------------------------------------------------
# Form labels, keyed by mode
# ---------------------------------------------------------------------------
FORM_TITLES: dict[str, str] = {
    "create": "Register New Account",
    "edit": "Update User Profile",
}

SUBMIT_LABELS: dict[str, str] = {
    "create": "Create User",
    "edit": "Save Changes",
}

PASSWORD_LABELS: dict[str, str] = {
    "create": "Password",
    "edit": "New Password (optional)",
}

"""User-facing messages and notification strings.

Every string shown to the user in a notification or in the rates list lives
here, so wording can change without touching the logic modules.
"""

# Validation Messages
ERROR_SELECT_ORIGIN_PORT = "Please select origin port"
ERROR_SELECT_DESTINATION_PORT = "Please select destination port"
ERROR_SELECT_ORIGIN_CITY = "Please select origin city"
ERROR_NEGATIVE_PRICE = "Price cannot be negative"
ERROR_UNKNOWN_RATE_TYPE = "Unknown rate type: {rate_type}"
ERROR_UNKNOWN_FILTER = "Unknown rate filter: {rate_filter}"

# Auth / Backend Messages
ERROR_NOT_AUTHENTICATED = "User not authenticated"
ERROR_BACKEND_NOT_CONFIGURED = "Backend URL and key are not configured"
ERROR_SAVING_RATE = "Error saving rate: {error}"
ERROR_DELETING_RATE = "Error deleting rate: {error}"
ERROR_LOADING_RATES = "Error loading rates: {error}"
ERROR_GENERIC = "Error: {error}"
ERROR_SIGN_IN_FAILED = "Sign-in failed: {error}"

# Success Messages
SUCCESS_SEA_SAVED = "Sea Freight rate saved! {origin} → {destination}"
SUCCESS_PRE_CARRIAGE_SAVED = "Pre-Carriage rate saved! {origin} → {destination}"
SUCCESS_ON_CARRIAGE_SAVED = "On-Carriage rate saved! {origin} → {destination}"
SUCCESS_TERMINAL_SAVED = "Terminal rate saved! {port}"
SUCCESS_CUSTOMS_SAVED = "Customs rate saved! {country}"
SUCCESS_RATE_DELETED = "Rate deleted"
SUCCESS_SIGNED_IN = "Signed in as {email}"

# Status Messages
STATUS_DELETE_NOT_CONFIRMED = "Deletion cancelled"
STATUS_LOADING_RATES = "Loading rates..."
STATUS_NO_RATES = "No saved rates yet"
STATUS_NO_RATES_HINT = "Start by adding rates from the tabs above"

# Default Values
DEFAULT_ROUTE_UNKNOWN = "Unknown"
DEFAULT_ROUTE_TERMINAL = "Terminal"
DEFAULT_EMPTY_CELL = "-"

"""
Status enums, display labels and dashboard-wide constants.
"""

from __future__ import annotations

# --- Pagination / API / search ---

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 25, 50, 100)
MAX_PAGE_SIZE = 100
MAX_VISIBLE_PAGES = 5

API_TIMEOUT_SECONDS = 30.0
API_RETRY_ATTEMPTS = 3
API_RETRY_DELAY_SECONDS = 1.0
AUTH_CHECK_TIMEOUT_SECONDS = 8.0

MIN_SEARCH_LENGTH = 2

DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")

DEFAULT_CURRENCY = "USD"
PASSWORD_MIN_LENGTH = 8
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
SLUG_PATTERN = r"^[a-z0-9-]+$"

# Dashboard panels show at most this many rows.
DASHBOARD_PANEL_ROWS = 10

# --- Users ---

USER_TYPES: tuple[str, ...] = ("customer", "provider", "admin")
USER_TYPE_LABELS: dict[str, str] = {
    "customer": "Customer",
    "provider": "Provider",
    "admin": "Admin",
}
ADMIN_USER_TYPE = "admin"

ACTIVE_STATUS_LABELS: dict[bool, str] = {True: "Active", False: "Inactive"}
ACTIVE_STATUS_COLORS: dict[bool, str] = {True: "success", False: "danger"}

# --- Companies ---

COMPANY_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected", "suspended")
COMPANY_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "approved": "Approved",
    "rejected": "Rejected",
    "suspended": "Suspended",
}
COMPANY_STATUS_COLORS: dict[str, str] = {
    "pending": "warning",
    "approved": "success",
    "rejected": "danger",
    "suspended": "secondary",
}

# --- Businesses ---

BUSINESS_STATUSES: tuple[str, ...] = (
    "pending", "active", "rejected", "suspended", "removed", "deleted",
)
BUSINESS_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "active": "Active",
    "rejected": "Rejected",
    "suspended": "Suspended",
    "removed": "Removed",
    "deleted": "Deleted",
}
BUSINESS_STATUS_COLORS: dict[str, str] = {
    "pending": "warning",
    "active": "success",
    "rejected": "danger",
    "suspended": "secondary",
    "removed": "default",
    "deleted": "danger",
}

# --- Services ---

SERVICE_STATUSES: tuple[str, ...] = (
    "pending", "active", "rejected", "suspended", "deleted", "requestDeletion",
)
SERVICE_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "active": "Active",
    "rejected": "Rejected",
    "suspended": "Suspended",
    "deleted": "Deleted",
    "requestDeletion": "Deletion Requested",
}
SERVICE_STATUS_COLORS: dict[str, str] = {
    "pending": "warning",
    "active": "success",
    "rejected": "danger",
    "suspended": "secondary",
    "deleted": "default",
    "requestDeletion": "danger",
}

# --- Legal pages ---

LEGAL_PAGE_TYPES: tuple[str, ...] = ("terms", "privacy", "refund", "cookie", "other")
LEGAL_PAGE_TYPE_LABELS: dict[str, str] = {
    "terms": "Terms of Service",
    "privacy": "Privacy Policy",
    "refund": "Refund Policy",
    "cookie": "Cookie Policy",
    "other": "Other",
}

# --- Transactions ---

TRANSACTION_STATUSES: tuple[str, ...] = (
    "pending", "completed", "failed", "refunded", "cancelled", "processing",
)
TRANSACTION_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "completed": "Completed",
    "failed": "Failed",
    "refunded": "Refunded",
    "cancelled": "Cancelled",
    "processing": "Processing",
}
TRANSACTION_STATUS_COLORS: dict[str, str] = {
    "pending": "warning",
    "completed": "success",
    "failed": "danger",
    "refunded": "secondary",
    "cancelled": "default",
    "processing": "primary",
}

PAYMENT_PROVIDERS: tuple[str, ...] = (
    "stripe", "paypal", "cash", "bank_transfer", "square",
    "razorpay", "flutterwave", "mpesa", "google_pay", "apple_pay",
)
PAYMENT_PROVIDER_LABELS: dict[str, str] = {
    "stripe": "Stripe",
    "paypal": "PayPal",
    "cash": "Cash",
    "bank_transfer": "Bank Transfer",
    "square": "Square",
    "razorpay": "Razorpay",
    "flutterwave": "Flutterwave",
    "mpesa": "M-Pesa",
    "google_pay": "Google Pay",
    "apple_pay": "Apple Pay",
}

# Lookup used by status_label(); keyed by entity kind.
STATUS_LABELS: dict[str, dict[str, str]] = {
    "company": COMPANY_STATUS_LABELS,
    "business": BUSINESS_STATUS_LABELS,
    "service": SERVICE_STATUS_LABELS,
    "transaction": TRANSACTION_STATUS_LABELS,
    "user_type": USER_TYPE_LABELS,
    "legal_page_type": LEGAL_PAGE_TYPE_LABELS,
    "payment_provider": PAYMENT_PROVIDER_LABELS,
}

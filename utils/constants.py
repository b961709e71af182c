APP_NAME = "FinTrack"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "fintrack.db"

DATE_FORMAT = "%Y-%m-%d"

BUDGET_WARNING_PERCENT = 80     # budget_status() "warning" cut-off, not user-configurable
ALERT_WARNING_PERCENT = 90      # alert severity "warning" cut-off
ALERT_POLL_INTERVAL_MS = 30_000
ALERT_SETTLE_MS = 100           # wait after a transaction is created before re-checking
RECURRING_CATCHUP_DAYS = 90

NOTIFICATIONS_KEY = "notifications"
NOTIFICATION_SETTINGS_KEY = "notificationSettings"

DEFAULT_NOTIFICATION_SETTINGS = {
    "budget_alerts": True,
    "threshold": 80,
    "email_notifications": False,
    "push_notifications": True,
}

TRANSACTION_TYPES = ("income", "expense")
FREQUENCIES = ("daily", "weekly", "monthly", "yearly")
FREQUENCY_LABELS = {
    "daily": "Daily",
    "weekly": "Weekly",
    "monthly": "Monthly",
    "yearly": "Yearly",
}

DEFAULT_CATEGORIES = [
    {"name": "Salary",         "type": "income",   "color": "#4CAF50"},
    {"name": "Freelance",      "type": "income",   "color": "#8BC34A"},
    {"name": "Food & Dining",  "type": "expense",  "color": "#FF9800"},
    {"name": "Housing",        "type": "expense",  "color": "#F44336"},
    {"name": "Utilities",      "type": "expense",  "color": "#9C27B0"},
    {"name": "Transportation", "type": "expense",  "color": "#2196F3"},
    {"name": "Healthcare",     "type": "expense",  "color": "#00BCD4"},
    {"name": "Entertainment",  "type": "expense",  "color": "#FF5722"},
    {"name": "Shopping",       "type": "expense",  "color": "#E91E63"},
]

ACCOUNT_TYPE_LABELS = {
    "checking": "Checking",
    "savings": "Savings",
    "money market": "Money Market",
    "cd": "CD",
    "other": "Other",
}

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
}

SEVERITY_ICONS = {
    "error":   "❗",
    "warning": "⚠",
    "info":    "ℹ",
}

STATUS_COLORS = {
    "over":    "#F44336",
    "warning": "#FF9800",
    "good":    "#4CAF50",
}

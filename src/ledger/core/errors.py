"""Error codes and user-friendly messages.

Each entry in the catalog carries:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the operation can be retried as-is
"""

ERROR_CATALOG: dict[str, dict] = {
    "TXN_001": {
        "code": "TXN_001",
        "message": "Invalid transaction value",
        "user_message": "The transaction value must be greater than zero.",
        "suggestion": "Enter a positive amount and try again.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Not enough resources to make an outcome transaction",
        "user_message": "Your balance is too low for this outcome.",
        "suggestion": "Register an income first or lower the outcome value.",
        "retry_allowed": False,
    },
    "TXN_003": {
        "code": "TXN_003",
        "message": "Transaction does not exist",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "IMP_001": {
        "code": "IMP_001",
        "message": "One of the transactions has an invalid value",
        "user_message": "Every imported transaction must have a value greater than zero.",
        "suggestion": "Fix the rows with zero or negative values and upload the file again.",
        "retry_allowed": False,
    },
    "IMP_002": {
        "code": "IMP_002",
        "message": "Not enough resources to make these transactions",
        "user_message": "Your balance is too low for the outcomes in this file.",
        "suggestion": "Add more income rows or split the import.",
        "retry_allowed": False,
    },
    "IMP_003": {
        "code": "IMP_003",
        "message": "CSV file could not be parsed",
        "user_message": "The uploaded file isn't a valid transactions CSV.",
        "suggestion": "Use the columns title,type,value,category with a header line.",
        "retry_allowed": False,
    },
    "IMP_004": {
        "code": "IMP_004",
        "message": "Invalid file type uploaded",
        "user_message": "Only CSV files are supported.",
        "suggestion": "Please upload a file with the .csv extension.",
        "retry_allowed": False,
    },
    "IMP_005": {
        "code": "IMP_005",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please split the file into smaller imports.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]

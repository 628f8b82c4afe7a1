"""
Error Sanitization for tool responses.

Unexpected exceptions are reported back to MCP clients, so their messages are
scrubbed of database locations, file paths, credentials and email addresses
first.
"""

import re
from typing import Dict, List

# Regex patterns for sensitive data detection
PATTERNS: Dict[str, List[str]] = {
    "db_connection": [
        r"sqlite:///[^\s\"']+",
        r"postgresql(\+\w+)?://[^\s\"']+",
        r"mysql(\+\w+)?://[^\s\"']+",
    ],
    "file_paths": [
        r"/[\w\-./]+/[\w\-./]+",
        r"[A-Z]:\\[\w\-\\./]+",
        r"\./[\w\-./]+",
        r"\.\./[\w\-./]+",
    ],
    "auth_tokens": [
        r"token[=:]\s*['\"]?[\w\-._]+['\"]?",
        r"password[=:]\s*['\"]?[^\s\"']+['\"]?",
        r"secret[=:]\s*['\"]?[\w\-._]+['\"]?",
        r"bearer\s+[\w\-._]+",
    ],
    "emails": [
        r"[^@\s\"']+@[^@\s\"']+\.[^@\s\"']+",
    ],
}

REPLACEMENTS = {
    "db_connection": "[REDACTED_DB_CONNECTION]",
    "file_paths": "[REDACTED_PATH]",
    "auth_tokens": "[REDACTED_CREDENTIAL]",
    "emails": "[REDACTED_EMAIL]",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize an error message by removing sensitive information."""
    sanitized = message
    for category, patterns in PATTERNS.items():
        replacement = REPLACEMENTS[category]
        for pattern in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)
    return sanitized


def sanitize_exception(exception: BaseException) -> str:
    """Sanitize an exception as ``<ExceptionType>: <scrubbed message>``."""
    return f"{type(exception).__name__}: {sanitize_error_message(str(exception))}"

"""Log sanitization module for preventing token leakage.

Polyfact tokens travel in the X-Access-Token header and can be echoed back in
transport errors (requests includes the prepared request in some messages).
Everything that is logged or shown to the user after a failed API call goes
through this module first.

Security Controls:
- Access tokens are never printed in full
- Error messages don't leak tokens
"""

import re
from re import Pattern
from typing import Any


class LogSanitizer:
    """Sanitize tokens from logs and error messages.

    All methods are class methods and can be called without instantiation.
    """

    REDACTED = "[REDACTED]"
    MASKED = "****"

    # Order matters: more specific patterns first
    SECRET_PATTERNS: dict[str, Pattern] = {
        "access_token_header": re.compile(
            r"(X-Access-Token[\"']?\s*[:=]\s*[\"']?)([^\s\"'&,\)\}]+)", re.IGNORECASE
        ),
        "authorization_bearer": re.compile(r"(Authorization:\s*Bearer\s+)([^\s]+)", re.IGNORECASE),
        "token_env": re.compile(
            r"(POLYFACT_TOKEN[\"']?\s*[:=]\s*[\"']?)([^\s\"'&,\)]+)", re.IGNORECASE
        ),
        # "token=..." but not the bare word "token"
        "token_assignment": re.compile(
            r"((?:^|[^a-zA-Z_])token[\"']?\s*[:=]\s*[\"']?)([^\s\"'&,\)\}]+)", re.IGNORECASE
        ),
    }

    SENSITIVE_KEYS = {"token", "access_token", "authorization", "x-access-token", "api_key"}

    @classmethod
    def sanitize(cls, message: Any, secrets: tuple[str | None, ...] = ()) -> str:
        """Sanitize message by redacting token patterns and known secret values.

        Args:
            message: The message to sanitize (converted with str())
            secrets: Literal secret values to redact wherever they appear

        Returns:
            Sanitized message

        Examples:
            >>> LogSanitizer.sanitize("X-Access-Token: pk_abc123")
            'X-Access-Token: [REDACTED]'
            >>> LogSanitizer.sanitize("bad key pk_abc123", secrets=("pk_abc123",))
            'bad key [REDACTED]'
        """
        result = message if isinstance(message, str) else str(message)

        for secret in secrets:
            if secret:
                result = result.replace(secret, cls.REDACTED)

        for pattern in cls.SECRET_PATTERNS.values():
            result = pattern.sub(r"\1" + cls.REDACTED, result)

        return result

    @classmethod
    def mask_token(cls, token: str | None) -> str:
        """Show the first four characters of a token and mask the rest.

        Examples:
            >>> LogSanitizer.mask_token("pk_1234567890")
            'pk_1****'
            >>> LogSanitizer.mask_token(None)
            '(not set)'
        """
        if not token:
            return "(not set)"
        if len(token) <= 8:
            return cls.MASKED
        return f"{token[:4]}{cls.MASKED}"

    @classmethod
    def create_safe_error_message(
        cls, error: Exception, context: str = "", secrets: tuple[str | None, ...] = ()
    ) -> str:
        """Create error message with tokens sanitized.

        Examples:
            >>> err = ValueError("request failed: token=abc123")
            >>> LogSanitizer.create_safe_error_message(err, "Polling")
            'Polling: request failed: token=[REDACTED]'
        """
        sanitized_msg = cls.sanitize(str(error), secrets=secrets)
        if context:
            return f"{context}: {sanitized_msg}"
        return sanitized_msg

    @classmethod
    def sanitize_dict(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of ``data`` with token values masked.

        Token-like keys keep a recognizable prefix (see mask_token) so users can
        tell which token is configured; nested dictionaries are handled
        recursively.
        """
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in cls.SENSITIVE_KEYS:
                result[key] = cls.mask_token(value if isinstance(value, str) else None)
            elif isinstance(value, dict):
                result[key] = cls.sanitize_dict(value)
            elif isinstance(value, str):
                result[key] = cls.sanitize(value)
            else:
                result[key] = value
        return result

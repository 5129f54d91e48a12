import re
from typing import Any
from urllib.parse import urlsplit, SplitResult

from config.constants import TEXT_CONFIG
from exceptions import InvalidInputException

class InputValidator:

    SCRIPT_PATTERN = re.compile(
        r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
        re.IGNORECASE
    )

    HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    HOST_PATTERN = re.compile(r"^[\w.\-\[\]:]+$")

    SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)

    @staticmethod
    def sanitize_text(text: Any) -> str:
        """Validate a claim's length and strip script blocks, HTML tags and control characters."""
        if not text or not isinstance(text, str):
            raise InvalidInputException("text", "Texto válido é obrigatório")

        text = text.strip()

        if len(text) < TEXT_CONFIG.MIN_LENGTH:
            raise InvalidInputException(
                "text", f"Texto muito curto. Mínimo de {TEXT_CONFIG.MIN_LENGTH} caracteres."
            )

        if len(text) > TEXT_CONFIG.MAX_LENGTH:
            raise InvalidInputException(
                "text", f"Texto excede o limite máximo de {TEXT_CONFIG.MAX_LENGTH} caracteres."
            )

        text = InputValidator.SCRIPT_PATTERN.sub('', text)
        text = InputValidator.HTML_TAG_PATTERN.sub('', text)
        text = InputValidator.CONTROL_CHARS_PATTERN.sub('', text)

        return text[:TEXT_CONFIG.MAX_LENGTH]

    @staticmethod
    def normalize_url(url: Any) -> SplitResult:
        """Parse a user-supplied URL, assuming https:// when no scheme is given."""
        if not url or not isinstance(url, str) or not url.strip():
            raise InvalidInputException("url", "URL inválida")

        url = InputValidator.CONTROL_CHARS_PATTERN.sub('', url.strip())
        candidate = url if InputValidator.SCHEME_PATTERN.match(url) else f"https://{url}"

        try:
            parts = urlsplit(candidate)
            hostname = parts.hostname
            parts.port  # raises on a malformed port
        except ValueError:
            raise InvalidInputException("url", "Formato de URL inválido")

        if parts.scheme.lower() not in ("http", "https") or not hostname:
            raise InvalidInputException("url", "Formato de URL inválido")
        if not InputValidator.HOST_PATTERN.match(hostname) or ".." in hostname:
            raise InvalidInputException("url", "Formato de URL inválido")

        return parts

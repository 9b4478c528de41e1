"""HTTP client for retrieving sales exports."""

import requests
import structlog
from attrs import define, field

logger = structlog.get_logger(__name__)

# Spreadsheet tools commonly prefix CSV exports with a UTF-8 byte order mark.
DEFAULT_ENCODING = "utf-8-sig"


@define(slots=True)
class SalesHttpClient:
    """Download remote CSV exports and JSON snapshots as text.

    Payloads are decoded from the raw bytes with ``encoding`` rather than the
    charset guessed by requests, which falls back to ISO-8859-1 for ``text/csv``
    responses that do not declare one.
    """

    timeout: float = 60.0
    encoding: str = DEFAULT_ENCODING
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {
            "User-Agent": "sales-dash/0.1",
            "Accept": "text/csv,application/json,text/plain,*/*;q=0.1",
        },
    )

    def _get(self, url: str) -> requests.Response:
        log = logger.bind(url=url)
        log.debug("http.fetch_start", timeout=self.timeout)
        try:
            response = self.session.get(url, timeout=self.timeout, headers=self.headers)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("http.fetch_failed", status=status, exc_info=True)
            raise
        return response

    def get_text(self, url: str) -> str:
        """Fetch ``url`` and return its body decoded, without a byte order mark.

        Raises ``UnicodeDecodeError`` when the body is not valid in ``encoding``.
        """
        payload = self._get(url).content
        text = payload.decode(self.encoding)
        logger.debug("http.fetch_success", url=url, bytes=len(payload), encoding=self.encoding)
        return text

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


__all__ = ["DEFAULT_ENCODING", "SalesHttpClient"]

"""
HTTP client for the FounderHQ workspace REST backend (PostgREST).

Responsibilities:
- apikey / Bearer authentication
- Rate limiting (100ms between requests)
- Retry with exponential backoff
- Range-header pagination
- Read-only table endpoints scoped to one workspace
"""

import logging
import time

import requests

from founderhq.config import (
    ACCESS_TOKEN,
    API_KEY,
    API_URL,
    MAX_RETRIES,
    MIN_REQUEST_INTERVAL,
    PAGE_SIZE,
    RETRY_BACKOFF,
    WORKSPACE_ID,
)

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)

TABLES = {
    "financial_logs": "financial_logs",
    "expenses": "expenses",
    "revenue_transactions": "revenue_transactions",
    "deals": "deals",
    "marketing_items": "marketing_items",
    "crm_items": "crm_items",
}


class WorkspaceClient:
    """Low-level client for the workspace tables."""

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        workspace_id: str = None,
        access_token: str = None,
        session: requests.Session = None,
    ):
        self.base_url = (base_url or API_URL or "").rstrip("/")
        self.api_key = api_key or API_KEY
        self.workspace_id = workspace_id or WORKSPACE_ID
        self.access_token = access_token or ACCESS_TOKEN or self.api_key
        if not self.base_url or not self.api_key:
            raise ValueError(
                "FOUNDERHQ_API_URL and FOUNDERHQ_API_KEY must be configured "
                "in .env or st.secrets."
            )
        if not self.workspace_id:
            raise ValueError("FOUNDERHQ_WORKSPACE_ID is not configured.")
        self.session = session or requests.Session()
        self._last_request_time = 0.0

    # ─── HTTP primitives ───

    def _get_headers(self) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _throttle(self):
        elapsed = time.time() - self._last_request_time
        if elapsed < MIN_REQUEST_INTERVAL:
            time.sleep(MIN_REQUEST_INTERVAL - elapsed)
        self._last_request_time = time.time()

    def _request(self, method: str, path: str, headers: dict = None, **kwargs):
        last_error = None
        for attempt in range(MAX_RETRIES):
            self._throttle()
            try:
                resp = self.session.request(
                    method,
                    f"{self.base_url}{path}",
                    headers={**self._get_headers(), **(headers or {})},
                    **kwargs,
                )
                resp.raise_for_status()
                if resp.status_code == 204 or not resp.content:
                    return None
                return resp.json()
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else 0
                if status in RETRY_STATUSES:
                    last_error = e
                    logger.warning("%s %s returned %s, retry %d", method, path, status, attempt + 1)
                    time.sleep(RETRY_BACKOFF * (2 ** attempt))
                    continue
                raise
            except requests.exceptions.ConnectionError as e:
                last_error = e
                logger.warning("%s %s connection failed, retry %d", method, path, attempt + 1)
                time.sleep(RETRY_BACKOFF * (2 ** attempt))
                continue

        raise last_error

    def get(self, path: str, params: dict = None, headers: dict = None):
        return self._request("GET", path, params=params, headers=headers)

    # ─── Pagination ───

    def fetch_all_rows(self, table: str, params: dict = None, page_size: int = PAGE_SIZE) -> list:
        """Fetch every row of a table for the workspace, page by page."""
        params = {"select": "*", "workspace_id": f"eq.{self.workspace_id}", **(params or {})}
        rows = []
        offset = 0

        while True:
            page = self.get(
                f"/rest/v1/{table}",
                params=params,
                headers={"Range-Unit": "items", "Range": f"{offset}-{offset + page_size - 1}"},
            )
            if not page:
                break
            rows.extend(page)
            if len(page) < page_size:
                break
            offset += page_size

        logger.debug("Fetched %d rows from %s", len(rows), table)
        return rows

    # ─── Workspace tables ───

    def get_table(self, name: str) -> list:
        return self.fetch_all_rows(TABLES[name])

    def get_workspace_rows(self) -> dict:
        """Raw rows of every table the dashboard reads, keyed by table name."""
        return {name: self.get_table(name) for name in TABLES}

"""High-level facade over the remote plan/log datastore.

The datastore is a Supabase project reached through its PostgREST API.
All methods wrap raw HTTP calls with error handling and retry logic.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from log_store.exceptions import (
    LogStoreAuthError,
    PersistenceError,
    RateLimitError,
)
from log_store.rows import map_plan_row, map_session_log_row, session_log_to_row
from session_engine.models.plan_entry import PlanEntry, PlanFilter
from session_engine.models.session_log import SessionLog
from session_engine.plan.reader import select_plan_entries

logger = logging.getLogger(__name__)

_REST_PREFIX = "/rest/v1"
_DEFAULT_TIMEOUT_S = 30
_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2

_PLAN_SELECT = "*,exercises(id,name,video_url,tempo,coach_instructions)"
_PLAN_ORDER = "year.asc,month_num.asc,week.asc,order_index.asc"


class LogStoreClient:
    """Facade for plan loading and session-log persistence for one athlete."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        athlete_id: str,
        access_token: str | None = None,
        timeout: float = _DEFAULT_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        self._rest_url = base_url.rstrip("/") + _REST_PREFIX
        self._athlete_id = athlete_id
        self._timeout = timeout
        self._http = session or requests.Session()
        self._http.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Content-Type": "application/json",
            }
        )

    @property
    def athlete_id(self) -> str:
        return self._athlete_id

    # ------------------------------------------------------------------
    # Training plans
    # ------------------------------------------------------------------

    def load_plan_entries(self, plan_filter: PlanFilter | None = None) -> list[PlanEntry]:
        """Plan rows visible to the athlete, optionally for one selection.

        Row-level security on the datastore decides which coach plans are
        visible. With a filter, rows come back in display order.
        """
        params: dict[str, str] = {"select": _PLAN_SELECT, "order": _PLAN_ORDER}
        if plan_filter is not None:
            params.update(
                {
                    "year": f"eq.{plan_filter.year}",
                    "month_num": f"eq.{plan_filter.month_num}",
                    "week": f"eq.{plan_filter.week}",
                    "session": f"in.({','.join(plan_filter.session_codes)})",
                }
            )
        rows = self._request("GET", "/training_plans", params=params) or []
        entries = [map_plan_row(row) for row in rows]
        if plan_filter is not None:
            entries = list(select_plan_entries(entries, plan_filter))
        logger.info("Loaded %d plan entries", len(entries))
        return entries

    # ------------------------------------------------------------------
    # Session logs
    # ------------------------------------------------------------------

    def load_history(self, athlete_id: str | None = None) -> list[SessionLog]:
        """Every session log of the athlete, in no particular order.

        Rows that cannot be mapped are skipped with a warning (partial
        history is OK).
        """
        athlete = athlete_id or self._athlete_id
        rows = self._request(
            "GET",
            "/session_logs",
            params={"select": "*", "user_id": f"eq.{athlete}"},
        ) or []

        history: list[SessionLog] = []
        for row in rows:
            try:
                history.append(map_session_log_row(row))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed session log row: %r", row)
        logger.info("Loaded %d session logs for %s", len(history), athlete)
        return history

    def persist_log(self, log: SessionLog) -> SessionLog:
        """Upsert *log* by id and return the stored version."""
        rows = self._request(
            "POST",
            "/session_logs",
            params={"on_conflict": "id"},
            json=session_log_to_row(log, self._athlete_id),
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        if isinstance(rows, list) and rows:
            saved = map_session_log_row(rows[0])
            logger.info("Persisted session log %s", saved.id)
            return saved
        raise PersistenceError(f"Unexpected upsert response: {rows}")

    def delete_log(self, log_id: str) -> None:
        """Delete one session log."""
        self._request("DELETE", "/session_logs", params={"id": f"eq.{log_id}"})
        logger.info("Deleted session log %s", log_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._safe_call(self._send, method, path, **kwargs)

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self._http.request(
            method, self._rest_url + path, timeout=self._timeout, **kwargs
        )
        if resp.status_code >= 400:
            raise requests.HTTPError(
                f"{resp.status_code} {method} {path}: {resp.text}", response=resp
            )
        if not resp.content:
            return None
        return resp.json()

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn* with retry + exponential backoff on 429."""
        last_exc: Optional[Exception] = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except requests.HTTPError as exc:
                last_exc = exc
                status = exc.response.status_code if exc.response is not None else None
                if status == 429:
                    wait = _BASE_BACKOFF_S * (2 ** attempt)
                    logger.warning(
                        "Rate limited (attempt %d/%d), retrying in %ds",
                        attempt + 1,
                        _MAX_RETRIES,
                        wait,
                    )
                    time.sleep(wait)
                    continue
                if status in (401, 403):
                    raise LogStoreAuthError(f"Datastore rejected credentials: {exc}") from exc
                raise PersistenceError(str(exc), status_code=status) from exc
            except requests.RequestException as exc:
                # Connection errors and timeouts
                raise PersistenceError(str(exc)) from exc

        raise RateLimitError(
            f"Rate limited after {_MAX_RETRIES} retries: {last_exc}"
        )

"""Worker-side client for the Conductor task queue REST API."""

import threading
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config.settings import Settings
from app.logging.logger import Log
from app.queue.exceptions import QueueAuthError, QueueError
from app.queue.models import Task, TaskResult


class QueueClient:
    """Polls tasks, reports results and starts workflows.

    One instance is created at startup and shared by the poll loop and all
    task threads. The access token is fetched lazily and refreshed once when
    the server answers 401.
    """

    def __init__(
        self,
        *,
        server_url: str,
        key_id: str = "",
        key_secret: str = "",
        timeout_seconds: int = 10,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._key_id = key_id
        self._key_secret = key_secret
        self._http = http_client or httpx.Client(
            base_url=server_url.rstrip("/"),
            timeout=timeout_seconds,
        )
        self._token: str | None = None
        self._token_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueueClient":
        return cls(
            server_url=settings.conductor_server_url,
            key_id=settings.conductor_key_id,
            key_secret=settings.conductor_key_secret,
            timeout_seconds=settings.conductor_timeout_seconds,
        )

    def poll(self, task_type: str, worker_id: str, count: int, timeout_ms: int) -> list[Task]:
        """Lease up to `count` tasks of `task_type`."""
        response = self._request(
            "GET",
            f"/tasks/poll/batch/{task_type}",
            params={"workerid": worker_id, "count": count, "timeout": timeout_ms},
        )
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return []
        return [Task.from_payload(item) for item in response.json()]

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    def _post_task_result(self, result: TaskResult) -> None:
        self._send("POST", "/tasks", json=result.to_payload())

    def update_task(self, result: TaskResult) -> None:
        """Report a task's completion to the queue."""
        try:
            self._post_task_result(result)
        except httpx.TransportError as exc:
            raise QueueError(f"Failed to report task {result.task_id}: {exc}") from exc

    def start_workflow(self, name: str, version: int, input_data: dict[str, Any]) -> str:
        """Start one workflow instance and return its id."""
        response = self._request(
            "POST",
            "/workflow",
            json={"name": name, "version": version, "input": input_data},
        )
        workflow_id = response.text.strip().strip('"')
        if not workflow_id:
            raise QueueError("Queue service returned an empty workflow id")
        return workflow_id

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._send(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise QueueError(f"Queue service unreachable: {exc}") from exc

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self._http.request(method, url, headers=self._auth_headers(), **kwargs)
        if response.status_code == httpx.codes.UNAUTHORIZED and self._key_id:
            Log.info("Queue access token rejected, refreshing")
            response = self._http.request(
                method, url, headers=self._auth_headers(refresh=True), **kwargs
            )
        if response.is_error:
            raise QueueError(
                f"Queue service returned {response.status_code} for {method} {url}: "
                f"{response.text}"
            )
        return response

    def _auth_headers(self, refresh: bool = False) -> dict[str, str]:
        if not self._key_id:
            return {}
        with self._token_lock:
            if self._token is None or refresh:
                self._token = self._fetch_token()
            return {"X-Authorization": self._token}

    def _fetch_token(self) -> str:
        response = self._http.post(
            "/token",
            json={"keyId": self._key_id, "keySecret": self._key_secret},
        )
        if response.is_error:
            raise QueueAuthError(
                f"Queue service refused credentials: {response.status_code}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise QueueAuthError(
                f"Queue service returned an unreadable token response: {exc}"
            ) from exc
        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise QueueAuthError("Queue service returned no access token")
        return str(token)

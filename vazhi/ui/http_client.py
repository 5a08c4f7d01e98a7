"""Backend implementation over Qt's asynchronous network stack."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Type

from PySide6.QtCore import QByteArray, QObject, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from vazhi.core.api import (
    BackendError,
    FetchFailure,
    OnFailure,
    OnSuccess,
    WriteFailure,
    career_paths_url,
    progress_url,
)

logger = logging.getLogger(__name__)


class QtHttpBackend(QObject):
    """JSON over HTTP. Callbacks fire from the Qt event loop when a reply finishes."""

    def __init__(self, base_url: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._base_url = base_url
        self._manager = QNetworkAccessManager(self)

    def fetch_career_paths(self, on_success: OnSuccess, on_failure: OnFailure) -> None:
        self._get(career_paths_url(self._base_url), on_success, on_failure)

    def fetch_progress(
        self,
        user_id: str,
        path_id: str,
        on_success: OnSuccess,
        on_failure: OnFailure,
    ) -> None:
        self._get(progress_url(self._base_url, user_id, path_id), on_success, on_failure)

    def post_progress(
        self,
        user_id: str,
        path_id: str,
        body: Dict[str, Any],
        on_success: OnSuccess,
        on_failure: OnFailure,
    ) -> None:
        url = progress_url(self._base_url, user_id, path_id)
        request = self._request(url)
        request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, "application/json")
        data = QByteArray(json.dumps(body).encode("utf-8"))
        logger.debug("POST %s %s", url, body)
        reply = self._manager.post(request, data)
        reply.finished.connect(
            lambda: self._finish(reply, url, on_success, on_failure, WriteFailure, parse=False)
        )

    def _request(self, url: str) -> QNetworkRequest:
        request = QNetworkRequest(QUrl(url))
        request.setRawHeader(b"Accept", b"application/json")
        return request

    def _get(self, url: str, on_success: OnSuccess, on_failure: OnFailure) -> None:
        logger.debug("GET %s", url)
        reply = self._manager.get(self._request(url))
        reply.finished.connect(
            lambda: self._finish(reply, url, on_success, on_failure, FetchFailure, parse=True)
        )

    def _finish(
        self,
        reply: QNetworkReply,
        url: str,
        on_success: OnSuccess,
        on_failure: OnFailure,
        failure: Type[BackendError],
        parse: bool,
    ) -> None:
        try:
            status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
            if reply.error() != QNetworkReply.NetworkError.NoError:
                on_failure(failure(f"{url}: {reply.errorString()}"))
                return
            if status is not None and int(status) >= 400:
                on_failure(failure(f"{url}: HTTP {status}"))
                return
            raw = bytes(reply.readAll().data())
            if not parse:
                on_success(None)
                return
            try:
                payload = json.loads(raw.decode("utf-8")) if raw else None
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                on_failure(failure(f"{url}: invalid JSON: {e}"))
                return
            on_success(payload)
        finally:
            reply.deleteLater()

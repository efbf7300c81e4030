from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..provider import ImageProvider
from ..request import API_BASE_URL, build_request_body, endpoint_url, request_headers
from ..response import interpret_response
from ..types import GenerationFailure, GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)


def _error_body(response: requests.Response) -> Any:
    # Error pages from proxies and gateways are often not JSON.
    try:
        return response.json()
    except ValueError:
        return None


class GeminiProvider(ImageProvider):
    """Image generation through the Gemini ``generateContent`` endpoint."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url
        self._session = session

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def generate(self, req: GenerationRequest) -> GenerationResult:
        url = endpoint_url(req.model, self._base_url)
        payload = build_request_body(req).to_payload()
        logger.debug("POST %s", url)

        try:
            response = self.session.post(url, json=payload, headers=request_headers(req.api_key))
            body = response.json() if response.ok else _error_body(response)
            return interpret_response(response.ok, response.status_code, response.reason, body)
        except (requests.RequestException, ValueError) as e:
            logger.debug("Request to %s failed", url, exc_info=True)
            return GenerationFailure(error=f"Request failed: {e}")

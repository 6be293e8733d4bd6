"""
Typed HTTP client for the Story App API.

Thin caller over httpx: builds the request, decodes the response envelope
into pydantic models and raises StoryApiError for any non-2xx answer.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import httpx
from loguru import logger
from pydantic import BaseModel

from errors import StoryApiError
from schemas import Envelope, HealthInfo, Story, StoryPayload

DEFAULT_BASE_URL = "http://localhost:5000/api"

T = TypeVar("T")


class StoryClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "StoryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _request(
        self,
        model: Type[Envelope[T]],
        method: str,
        endpoint: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Envelope[T]:
        url = f"{self._base_url}{endpoint}"
        try:
            response = self._http.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            logger.error("API request failed: {} {}: {}", method, url, exc)
            raise

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if not response.is_success:
            message = body.get("message") or f"HTTP error! status: {response.status_code}"
            logger.warning("API request failed: {} {} -> {}", method, url, response.status_code)
            raise StoryApiError(response.status_code, message, body.get("error"))

        return model.model_validate(body)

    @staticmethod
    def _body(payload: Union[StoryPayload, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(payload, BaseModel):
            return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        return payload

    # Stories

    def list_stories(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Envelope[List[Story]]:
        params = {
            key: value
            for key, value in (("search", search), ("category", category), ("status", status))
            if value
        }
        return self._request(Envelope[List[Story]], "GET", "/stories", params=params or None)

    def get_story(self, story_id: str) -> Envelope[Story]:
        return self._request(Envelope[Story], "GET", f"/stories/{story_id}")

    def create_story(self, payload: Union[StoryPayload, Dict[str, Any]]) -> Envelope[Story]:
        return self._request(Envelope[Story], "POST", "/stories", json=self._body(payload))

    def update_story(self, story_id: str, payload: Union[StoryPayload, Dict[str, Any]]) -> Envelope[Story]:
        return self._request(Envelope[Story], "PUT", f"/stories/{story_id}", json=self._body(payload))

    def delete_story(self, story_id: str) -> Envelope[Story]:
        return self._request(Envelope[Story], "DELETE", f"/stories/{story_id}")

    # Metadata

    def get_categories(self) -> Envelope[List[str]]:
        return self._request(Envelope[List[str]], "GET", "/categories")

    def get_statuses(self) -> Envelope[List[str]]:
        return self._request(Envelope[List[str]], "GET", "/statuses")

    def health_check(self) -> Envelope[HealthInfo]:
        return self._request(Envelope[HealthInfo], "GET", "/health")

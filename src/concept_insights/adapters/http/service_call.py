"""
Deferred service calls.

A ServiceCall holds one fully built request and the model its response is
read into. Nothing is sent until `execute()` (or `execute_async()`) is called,
so the request can be inspected or executed more than once.
"""

import asyncio
import logging
from typing import Generic, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from concept_insights.adapters.http.client import APIClient
from concept_insights.exceptions import ServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ServiceCall(Generic[T]):

    def __init__(self,
                 client: APIClient,
                 request: requests.Request,
                 response_model: Optional[Type[T]] = None):
        self._client = client
        self._request = request
        self._response_model = response_model

    @property
    def request(self) -> requests.Request:
        """The request that `execute()` sends (method, url, params, data, headers)."""
        return self._request

    @property
    def response_model(self) -> Optional[Type[T]]:
        return self._response_model

    def execute(self) -> Optional[T]:
        """
        Sends the request and returns the typed response.

        Returns:
            An instance of the response model, or None for calls without a result

        Raises:
            ServiceError: non-2xx status, transport failure, or a body that
                does not match the response model
        """
        resp = self._client.send(self._request)
        expect_body = self._response_model is not None
        payload = self._client.handle_response(resp, expect_body=expect_body)
        if not expect_body:
            return None

        if payload is None:
            logger.warning(f"Empty response received for {resp.url}")
            raise ServiceError(
                f"Empty response, expected {self._response_model.__name__}",
                status_code=resp.status_code,
                body=resp.text,
                url=resp.url,
            )
        try:
            return self._response_model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected {self._response_model.__name__} payload from {resp.url}: {e}")
            raise ServiceError(
                f"Malformed {self._response_model.__name__} response",
                status_code=resp.status_code,
                body=resp.text,
                url=resp.url,
            ) from e

    async def execute_async(self) -> Optional[T]:
        """Runs `execute()` in a worker thread."""
        return await asyncio.to_thread(self.execute)

    def __repr__(self) -> str:
        model = self._response_model.__name__ if self._response_model else None
        return f"ServiceCall({self._request.method} {self._request.url}, response_model={model})"

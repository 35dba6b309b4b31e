"""Tests for the response envelope builders."""

import json
import time
import uuid

import pytest
from fastapi import FastAPI
from starlette.requests import Request

from shopcatalog.api.responses import (
    REQUEST_ID_HEADER,
    error_response,
    send_no_content,
    send_paginated,
    send_success,
)
from shopcatalog.api.schemas.common import FieldError
from shopcatalog.core.config import Settings

REQUEST_ID = "7d9f6a52-1c1e-4b8e-9a55-3f0f4c1f2a10"


def _request(app: FastAPI | None = None, **state) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [],
        "query_string": b"",
        "app": app or FastAPI(),
        "state": dict(state),
    }
    return Request(scope)


def _body(response) -> dict:
    return json.loads(response.body)


class TestSendSuccess:
    def test_envelope_shape(self):
        resp = send_success(_request(request_id=REQUEST_ID), 200, {"name": "Shirt"})
        body = _body(resp)

        assert resp.status_code == 200
        assert body["data"] == {"name": "Shirt"}
        meta = body["meta"]
        assert meta["requestId"] == REQUEST_ID
        assert meta["apiVersion"] == "1.0.0"
        assert isinstance(meta["processingTimeMs"], int)
        assert "timestamp" in meta
        assert "pagination" not in meta
        assert resp.headers[REQUEST_ID_HEADER] == REQUEST_ID

    def test_created_status_kept(self):
        assert send_success(_request(), 201, {}).status_code == 201

    @pytest.mark.parametrize("status", [0, 99, 199, 300, 302, 404, 500, 600])
    def test_status_outside_2xx_coerced(self, status):
        assert send_success(_request(), status, {}).status_code == 200

    def test_missing_request_id_synthesized(self):
        body = _body(send_success(_request(), 200, None))
        uuid.UUID(body["meta"]["requestId"])

    def test_processing_time_from_start(self):
        req = _request(start_time=time.perf_counter() - 0.05)
        body = _body(send_success(req, 200, {}))
        assert body["meta"]["processingTimeMs"] >= 50

    def test_processing_time_zero_without_start(self):
        body = _body(send_success(_request(), 200, {}))
        assert body["meta"]["processingTimeMs"] == 0

    def test_api_version_from_settings(self):
        app = FastAPI()
        app.state.settings = Settings(api_version="2.3.4")
        body = _body(send_success(_request(app), 200, {}))
        assert body["meta"]["apiVersion"] == "2.3.4"


class TestSendPaginated:
    def test_embeds_pagination(self):
        resp = send_paginated(_request(request_id=REQUEST_ID), [1, 2, 3], 2, 3, 8)
        body = _body(resp)

        assert body["data"] == [1, 2, 3]
        assert body["meta"]["pagination"] == {
            "page": 2,
            "limit": 3,
            "totalPages": 3,
            "totalItems": 8,
            "hasNext": True,
            "hasPrev": True,
        }

    def test_empty_page(self):
        body = _body(send_paginated(_request(), [], 5, 10, 12))
        assert body["data"] == []
        assert body["meta"]["pagination"]["hasNext"] is False


class TestNoContent:
    def test_delete_response(self):
        resp = send_no_content(_request(request_id=REQUEST_ID))
        assert resp.status_code == 204
        assert resp.body == b""
        assert resp.headers[REQUEST_ID_HEADER] == REQUEST_ID


class TestErrorResponse:
    def test_without_fields(self):
        resp = error_response(_request(request_id=REQUEST_ID), 404, "PRODUCT_NOT_FOUND", "nope")
        assert resp.status_code == 404
        assert _body(resp) == {"error": {"code": "PRODUCT_NOT_FOUND", "message": "nope"}}
        assert resp.headers[REQUEST_ID_HEADER] == REQUEST_ID

    def test_with_fields_and_headers(self):
        fields = [
            FieldError(field="name", tag="required", message="This field is required.")
        ]
        resp = error_response(
            _request(),
            400,
            "VALIDATION_ERROR",
            "Validation failed.",
            fields=fields,
            headers={"Retry-After": "5"},
        )
        body = _body(resp)
        assert body["error"]["fields"] == [
            {"field": "name", "tag": "required", "message": "This field is required."}
        ]
        assert resp.headers["Retry-After"] == "5"

# ============================================================================
# JSON RESPONSE + TAG INVOCATION TESTS
# ============================================================================
# STATUS: Tests - jsonResponse shim and tag-style invocation
# PURPOSE: Verify terminal responses and tag attribute/body handling
# CREATED: 19 OCT 2026
# ============================================================================
"""
JSON Response + Tag Invocation Tests

Covers:
1. jsonResponse echoes body content or parameters
2. jsonResponse never records a success/fail result
3. invoke_tag passes attributes verbatim and reports outcomes
4. invoke_tag scopes the log context to the shim and request

Run with:
    pytest tests/test_json_response.py -v
"""

import json

import pytest

from core.config import reset_defaults
from core.contracts import ShimResponse, ShimStatus
from core.logging import get_current_context
from core.tags import TagInvocation, invoke_tag
from shims.json_response import JsonResponse


# ============================================================================
# JSON RESPONSE
# ============================================================================

class TestJsonResponse:
    """Tests for the jsonResponse shim."""

    def test_echoes_params(self):
        shim = JsonResponse({"addon-name": "EE Shim", "shim": "jsonResponse"})
        response = shim.execute()
        assert isinstance(response, ShimResponse)
        assert json.loads(response.body) == {"addon-name": "EE Shim", "shim": "jsonResponse"}

    def test_response_headers_and_status(self):
        response = JsonResponse({"a": "1"}).execute()
        assert response.status_code == 200
        assert response.headers == {"Content-Type": "application/json"}
        assert response.media_type == "application/json"

    def test_content_takes_precedence(self):
        body = '{"addon-name": "EE Shim", "shim-info": {"name": "jsonResponse"}}'
        response = JsonResponse({"ignored": "yes"}, content=body).execute()
        assert json.loads(response.body) == {
            "addon-name": "EE Shim",
            "shim-info": {"name": "jsonResponse"},
        }

    def test_nested_params_echoed(self):
        params = {"shim-info": {"name": "jsonResponse", "tags": ["a", "b"]}}
        response = JsonResponse(params).execute()
        assert json.loads(response.body) == params

    def test_no_params_is_empty_object(self):
        assert JsonResponse().execute().body == "{}"

    def test_invalid_content_emits_null(self):
        response = JsonResponse(content="{not json").execute()
        assert response.body == "null"
        assert response.status_code == 200

    def test_no_result_recorded(self):
        calls = []
        shim = JsonResponse(
            {"a": "1"},
            on_success=lambda data: calls.append("success"),
            on_fail=lambda errors, data: calls.append("fail"),
        )
        shim.execute()
        assert calls == []
        assert shim.status == ShimStatus.PENDING
        assert shim.has_errors() is False


# ============================================================================
# TAG INVOCATION
# ============================================================================

@pytest.fixture
def image_root(tmp_path, monkeypatch):
    monkeypatch.setenv("IMAGE_ROOT", str(tmp_path))
    reset_defaults()
    yield tmp_path
    reset_defaults()


class TestInvokeTag:
    """Tests for invoke_tag."""

    def test_unknown_shim(self):
        assert invoke_tag(TagInvocation(name="noSuchShim")) is None

    def test_terminal_response(self):
        output = invoke_tag(TagInvocation(name="jsonResponse", params={"k": "v"}))
        assert output.terminated is True
        assert output.shim == "eeshim_jsonResponse"
        assert json.loads(output.response.body) == {"k": "v"}

    def test_body_content_used(self):
        output = invoke_tag(TagInvocation(name="eeshim_jsonResponse", content='  [1, 2, 3]\n'))
        assert json.loads(output.response.body) == [1, 2, 3]

    def test_blank_body_ignored(self):
        output = invoke_tag(TagInvocation(name="jsonResponse", params={"k": "v"}, content="  \n "))
        assert json.loads(output.response.body) == {"k": "v"}

    def test_failure_reported(self, image_root, tmp_path):
        missing = str(tmp_path / "missing.jpg")
        output = invoke_tag(TagInvocation(name="crop", params={"in": missing, "scale": "50"}))
        assert output.terminated is False
        assert output.status == ShimStatus.FAILED
        assert output.errors == [f"Cannot read source image: {missing}"]
        assert output.success_data == {}

    def test_callbacks_forwarded(self, image_root, tmp_path):
        output = invoke_tag(
            TagInvocation(name="crop", params={"in": str(tmp_path / "x.jpg"), "scale": "50"}),
            on_fail=lambda errors, data: len(errors),
        )
        assert output.return_value == 1

    def test_log_context_carries_request_id(self, image_root, tmp_path):
        seen = []

        def on_fail(errors, data):
            context = get_current_context()
            seen.append((context.shim, context.operation, context.request_id))

        invoke_tag(
            TagInvocation(name="crop", params={"in": str(tmp_path / "x.jpg")}),
            on_fail=on_fail,
            request_id="req-42",
        )
        assert seen == [("eeshim_crop", "tag", "req-42")]
        assert get_current_context().request_id is None

    def test_attributes_must_be_strings(self):
        with pytest.raises(ValueError):
            TagInvocation(name="crop", params={"scale": 50})

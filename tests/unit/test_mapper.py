"""Tests for gateway response mapping."""

from __future__ import annotations

from src.models import ResponseStatus
from src.sms.mapper import map_response, map_transport_failure, to_outcome
from src.sms.models import GatewayError, GatewayResponse, Success


class TestMapResponse:
    def test_2xx_is_success(self) -> None:
        result = map_response(GatewayResponse(200, b'{"ok":true}'), "cid")
        assert result == Success(message="SMS sent successfully", correlation_id="cid")

    def test_3xx_is_success(self) -> None:
        assert isinstance(map_response(GatewayResponse(302, b""), "cid"), Success)

    def test_error_with_json_object_keeps_status(self) -> None:
        result = map_response(GatewayResponse(429, b'{"error":"rate limited"}'), "cid")
        assert result == GatewayError(http_status=429, detail={"error": "rate limited"})

    def test_error_with_non_json_degrades_to_502(self) -> None:
        result = map_response(GatewayResponse(500, b"<html>oops</html>"), "cid")
        assert result == GatewayError(http_status=502, detail="SMS service returned an error")

    def test_error_with_json_array_degrades_to_502(self) -> None:
        result = map_response(GatewayResponse(400, b'["bad"]'), "cid")
        assert isinstance(result, GatewayError)
        assert result.http_status == 502

    def test_error_with_invalid_utf8_degrades_to_502(self) -> None:
        result = map_response(GatewayResponse(400, b"\xff\xfe"), "cid")
        assert isinstance(result, GatewayError)
        assert result.http_status == 502

    def test_transport_failure(self) -> None:
        assert map_transport_failure() == GatewayError(
            http_status=502, detail="Failed to connect to SMS service",
        )


class TestToOutcome:
    def test_success_carries_request_id(self) -> None:
        outcome = to_outcome(Success(message="SMS sent successfully", correlation_id="cid"))
        assert outcome.status_code == 200
        assert outcome.response.to_wire() == {
            "message": "SMS sent successfully",
            "status": "success",
            "requestId": "cid",
        }

    def test_decoded_detail_embedded_in_message(self) -> None:
        outcome = to_outcome(GatewayError(http_status=429, detail={"error": "rate limited"}))
        assert outcome.status_code == 429
        assert outcome.response.status == ResponseStatus.ERROR
        assert "rate limited" in outcome.response.message
        assert outcome.response.message.startswith("SMS service error:")

    def test_error_omits_request_id(self) -> None:
        outcome = to_outcome(map_transport_failure())
        assert "requestId" not in outcome.response.to_wire()
        assert outcome.response.message == "Failed to connect to SMS service"

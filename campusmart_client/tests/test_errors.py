import pytest

from campusmart_client.errors import NETWORK_ERROR_MESSAGE, ApiError, NetworkError, error_message


@pytest.mark.unit
class TestErrorMessage:
    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, "Invalid request. Please check your input."),
            (401, "Session expired. Please log in again."),
            (403, "You do not have permission to perform this action."),
            (404, "The requested resource was not found."),
            (409, "This item already exists."),
            (500, "Server error. Please try again later."),
            (502, "Server error: 502"),
        ],
    )
    def test_status_fallback(self, status, expected):
        assert error_message(status, {}) == expected

    def test_no_response_is_network_error(self):
        assert error_message(None) == NETWORK_ERROR_MESSAGE

    def test_message_beats_error_and_detail(self):
        payload = {"message": "Shown", "error": "Hidden", "detail": "Hidden too"}
        assert error_message(400, payload) == "Shown"

    def test_error_then_detail(self):
        assert error_message(401, {"error": "Invalid credentials"}) == "Invalid credentials"
        assert error_message(409, {"detail": "Cannot change order status"}) == "Cannot change order status"

    def test_field_errors_are_joined(self):
        payload = {"errors": {"email": "Email is taken", "password": ["Too short", "Too common"]}}
        assert error_message(400, payload) == "Email is taken, Too short, Too common"

    def test_non_dict_payload_uses_status(self):
        assert error_message(404, "<html>Not Found</html>") == "The requested resource was not found."


@pytest.mark.unit
class TestErrorTypes:
    def test_api_error_carries_status_and_payload(self):
        error = ApiError(403, {"detail": "You are not a party to this order"})

        assert error.status == 403
        assert error.message == "You are not a party to this order"
        assert str(error) == error.message
        assert not error.is_unauthorized

    def test_network_error_has_no_status(self):
        error = NetworkError(ConnectionError("refused"))

        assert isinstance(error, ApiError)
        assert error.status is None
        assert error.message == NETWORK_ERROR_MESSAGE

import uuid
from unittest import TestCase, main
from http import HTTPStatus
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient
from backend.common.fast_api_response_wrapper import api_response, error_response
from backend.dto.availability_dto import MentorAvailabilityDto

MENTOR_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


def route_success(request):
    return api_response("OK", True, {"a": 1}, HTTPStatus.OK)


def route_empty(request):
    return api_response("Empty", True)


def route_dto(request):
    return api_response(
        "Dto", data={"availability": MentorAvailabilityDto(mentor_id=MENTOR_ID)}
    )


def route_error(request):
    return error_response("Fail", HTTPStatus.BAD_REQUEST)


def route_error_details(request):
    return error_response("Fail", HTTPStatus.CONFLICT, details="already booked")


class TestApiResponseWrapper(TestCase):
    def setUp(self):
        # Create a minimal Starlette app to test JSONResponse
        self.app = Starlette(
            routes=[
                Route("/test_success", route_success),
                Route("/test_empty", route_empty),
                Route("/test_dto", route_dto),
                Route("/test_error", route_error),
                Route("/test_error_details", route_error_details),
            ]
        )
        self.client = TestClient(self.app)

    def test_success_with_data(self):
        res = self.client.get("/test_success")
        self.assertEqual(res.status_code, HTTPStatus.OK)
        payload = res.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["data"], {"a": 1})
        self.assertEqual(payload["message"], "OK")

    def test_success_with_empty_data(self):
        res = self.client.get("/test_empty")
        self.assertEqual(res.status_code, HTTPStatus.OK)
        payload = res.json()
        self.assertIsNone(payload["data"])
        self.assertEqual(payload["message"], "Empty")

    def test_dto_serialized_by_alias(self):
        res = self.client.get("/test_dto")
        payload = res.json()
        self.assertEqual(payload["data"]["availability"]["mentorId"], str(MENTOR_ID))

    def test_error_response(self):
        res = self.client.get("/test_error")
        self.assertEqual(res.status_code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(res.json(), {"error": "Fail"})

    def test_error_response_with_details(self):
        res = self.client.get("/test_error_details")
        self.assertEqual(res.status_code, HTTPStatus.CONFLICT)
        self.assertEqual(
            res.json(), {"error": "Fail", "details": "already booked"}
        )


if __name__ == "__main__":
    main()

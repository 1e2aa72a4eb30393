import json

from django.http import Http404, JsonResponse
from django.test import RequestFactory, SimpleTestCase

from core.api import api_view, id_param, int_param, parse_json, sanitize_input
from core.exceptions import BadRequest, Forbidden, NotFound, TooManyRequests


def body(response):
    return json.loads(response.content)


class ApiViewTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_rejects_other_methods(self):
        view = api_view(["GET"])(lambda request: JsonResponse({}))
        response = view(self.factory.post("/"))
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response["Allow"], "GET")
        self.assertEqual(body(response), {"error": "Method not allowed"})

    def test_renders_api_errors(self):
        @api_view(["GET"])
        def view(request):
            raise Forbidden()

        response = view(self.factory.get("/"))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(body(response), {"error": "Forbidden"})

    def test_not_found_names_the_resource(self):
        @api_view(["GET"])
        def view(request):
            raise NotFound("Quiz")

        self.assertEqual(body(view(self.factory.get("/"))), {"error": "Quiz not found"})

    def test_http404_becomes_json(self):
        @api_view(["GET"])
        def view(request):
            raise Http404

        response = view(self.factory.get("/"))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(body(response)["error"], "Resource not found")

    def test_too_many_requests_carries_retry_after(self):
        @api_view(["POST"])
        def view(request):
            raise TooManyRequests(retry_after=42)

        response = view(self.factory.post("/"))
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response["Retry-After"], "42")
        self.assertEqual(body(response)["retryAfter"], 42)

    def test_unexpected_errors_are_opaque(self):
        @api_view(["GET"])
        def view(request):
            raise RuntimeError("database password is hunter2")

        with self.assertLogs("core.api", level="ERROR"):
            response = view(self.factory.get("/"))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(body(response), {"error": "Internal server error"})


class RequestHelperTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_parse_json(self):
        request = self.factory.post("/", data='{"a": 1}', content_type="application/json")
        self.assertEqual(parse_json(request), {"a": 1})

    def test_parse_json_rejects_garbage_and_non_objects(self):
        for raw in ["{nope", "[1, 2]", '"text"']:
            with self.subTest(raw=raw), self.assertRaises(BadRequest):
                parse_json(self.factory.post("/", data=raw, content_type="application/json"))

    def test_int_param(self):
        self.assertEqual(int_param(self.factory.get("/"), "page", 1), 1)
        self.assertEqual(int_param(self.factory.get("/?limit=500"), "limit", 12, maximum=50), 50)
        with self.assertRaises(BadRequest):
            int_param(self.factory.get("/?page=0"), "page", 1)
        with self.assertRaises(BadRequest):
            int_param(self.factory.get("/?page=x"), "page", 1)

    def test_id_param(self):
        self.assertEqual(id_param(self.factory.get("/?quiz_id=12"), "quiz_id"), 12)
        self.assertIsNone(id_param(self.factory.get("/"), "quiz_id", required=False))
        with self.assertRaises(BadRequest):
            id_param(self.factory.get("/"), "quiz_id")
        with self.assertRaises(BadRequest):
            id_param(self.factory.get("/?quiz_id=abc"), "quiz_id")

    def test_sanitize_input_escapes_html(self):
        self.assertEqual(sanitize_input('  <b>"hi"</b> '), "&lt;b&gt;&quot;hi&quot;&lt;/b&gt;")

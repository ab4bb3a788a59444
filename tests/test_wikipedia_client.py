import unittest

import httpx

from wikitrans.config import WikiConfig
from wikitrans.models import LangLink, Language
from wikitrans.wikipedia import WikipediaClient, WikipediaError


def _client(handler, **config) -> WikipediaClient:
    return WikipediaClient(WikiConfig(**config), transport=httpx.MockTransport(handler))


class WikipediaClientTests(unittest.TestCase):
    def test_get_languages_keeps_api_order_and_unique_tags(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.host, "en.wikipedia.org")
            self.assertEqual(request.url.params["meta"], "siteinfo")
            self.assertEqual(request.url.params["siprop"], "languages")
            self.assertIn("wikitrans", request.headers["user-agent"])
            return httpx.Response(
                200,
                json={
                    "query": {
                        "languages": [
                            {"code": "fr", "name": "français"},
                            {"code": "de", "name": "Deutsch"},
                            {"code": "fr", "name": "duplicate"},
                        ]
                    }
                },
            )

        with _client(handler) as client:
            languages = client.get_languages()
        self.assertEqual(languages, [Language("fr", "français"), Language("de", "Deutsch")])

    def test_search_uses_requested_language(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.host, "fr.wikipedia.org")
            self.assertEqual(request.url.params["list"], "search")
            self.assertEqual(request.url.params["srsearch"], " chat")
            self.assertEqual(request.url.params["srlimit"], "5")
            return httpx.Response(200, json={"query": {"search": [{"title": "Chat"}, {"title": "Chaton"}]}})

        with _client(handler, search_results=5) as client:
            self.assertEqual(client.search(" chat", "fr"), ["Chat", "Chaton"])
            self.assertEqual(client.language, "en")

    def test_get_langlinks_parses_titles(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.params["prop"], "langlinks")
            self.assertEqual(request.url.params["titles"], "Cat")
            self.assertEqual(request.url.params["lllimit"], "max")
            return httpx.Response(
                200,
                json={
                    "query": {
                        "pages": [
                            {
                                "title": "Cat",
                                "langlinks": [{"lang": "fr", "title": "Chat"}, {"lang": "de"}],
                            }
                        ]
                    }
                },
            )

        with _client(handler) as client:
            links = client.get_langlinks("Cat", "en")
        self.assertEqual(links, [LangLink("fr", "Chat"), LangLink("de", None)])

    def test_missing_page_has_no_langlinks(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"query": {"pages": [{"title": "Nope", "missing": True}]}})

        with _client(handler) as client:
            self.assertEqual(client.get_langlinks("Nope"), [])

    def test_http_error_status_raises(self) -> None:
        with _client(lambda request: httpx.Response(503)) as client:
            with self.assertRaises(WikipediaError):
                client.search("cat")

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        with _client(handler) as client:
            with self.assertRaises(WikipediaError):
                client.get_languages()

    def test_invalid_json_raises(self) -> None:
        with _client(lambda request: httpx.Response(200, content=b"not json")) as client:
            with self.assertRaises(WikipediaError):
                client.search("cat")

    def test_api_error_payload_raises(self) -> None:
        payload = {"error": {"code": "badvalue", "info": "Unrecognized value"}}
        with _client(lambda request: httpx.Response(200, json=payload)) as client:
            with self.assertRaisesRegex(WikipediaError, "Unrecognized value"):
                client.search("cat")

    def test_unexpected_schema_raises(self) -> None:
        with _client(lambda request: httpx.Response(200, json={"query": {}})) as client:
            with self.assertRaises(WikipediaError):
                client.search("cat")


if __name__ == "__main__":
    unittest.main()

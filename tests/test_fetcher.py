"""
Unittest suite for the document fetcher.

`requests.get` and `requests.Session` are replaced with mocks returning
real `requests.Response` objects, so status handling and decoding go
through requests itself without touching the network.
"""

from __future__ import annotations

import unittest
from unittest import mock

import requests

from refranero.ingest.fetcher import USER_AGENT, FetchError, fetch_document

URL = "http://cvc.cervantes.es/lengua/refranero/ficha.aspx?Par=58020"


def _response(status: int, body: bytes, reason: str = "OK",
              content_type: str = "text/html") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.url = URL
    resp._content = body
    resp.headers["Content-Type"] = content_type
    # Same default the HTTP adapter applies: ISO-8859-1 for text/* without charset.
    resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    return resp


class TestFetchDocument(unittest.TestCase):

    def test_utf8_page_without_header_charset(self) -> None:
        body = (
            "<html><head><meta charset='utf-8'></head><body>"
            "<div class='tabbertab'><p><strong>Enunciado:</strong> Más vale tarde</p></div>"
            "</body></html>"
        ).encode("utf-8")
        with mock.patch("requests.get", return_value=_response(200, body)):
            doc = fetch_document(URL)
        strong = doc.find_first("div.tabbertab p")
        self.assertEqual(doc.text(strong), "Enunciado: Más vale tarde")

    def test_error_status_raises_fetch_error(self) -> None:
        resp = _response(503, b"busy", reason="Service Unavailable")
        with mock.patch("requests.get", return_value=resp):
            with self.assertRaises(FetchError) as ctx:
                fetch_document(URL)
        self.assertEqual(ctx.exception.url, URL)
        self.assertIn("503", ctx.exception.reason)
        self.assertIsInstance(ctx.exception.__cause__, requests.HTTPError)

    def test_transport_error_is_wrapped(self) -> None:
        with mock.patch("requests.get", side_effect=requests.ConnectionError("connection refused")):
            with self.assertRaises(FetchError) as ctx:
                fetch_document(URL)
        self.assertIn("connection refused", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_uses_session_with_user_agent_and_timeout(self) -> None:
        session = mock.Mock(spec=requests.Session)
        session.get.return_value = _response(200, b"<html><body><p>ok</p></body></html>")
        with mock.patch("requests.get") as get_mock:
            doc = fetch_document(URL, session=session, timeout=4.0)
        get_mock.assert_not_called()
        session.get.assert_called_once_with(URL, headers={"User-Agent": USER_AGENT}, timeout=4.0)
        self.assertEqual(doc.text(doc.find_first("p")), "ok")


if __name__ == "__main__":
    unittest.main()

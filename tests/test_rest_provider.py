from __future__ import annotations

import io
import json
import socket
import unittest
import urllib.error
from unittest.mock import MagicMock, patch

from domain.errors import TransportError
from infrastructure.transaction_sources.rest_provider import RestTransactionSource


def _response(body: bytes) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = body
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


class RestTransactionSourceTests(unittest.TestCase):
    def test_page_url(self) -> None:
        source = RestTransactionSource(base_url="http://example.test/", timeout_seconds=5)
        self.assertEqual(source.page_url(3), "http://example.test/transactions/3.json")

    @patch.dict("os.environ", {"LEDGER_API_BASE_URL": "http://env.test", "LEDGER_API_TIMEOUT_SECONDS": "7"})
    def test_reads_defaults_from_environment(self) -> None:
        source = RestTransactionSource()
        self.assertEqual(source.base_url, "http://env.test")
        self.assertEqual(source.timeout_seconds, 7.0)

    @patch("infrastructure.transaction_sources.rest_provider.urllib.request.urlopen")
    def test_fetch_page_decodes_json(self, mock_urlopen) -> None:
        payload = {"page": 1, "totalCount": 0, "transactions": []}
        mock_urlopen.return_value = _response(json.dumps(payload).encode("utf-8"))
        source = RestTransactionSource(base_url="http://example.test", timeout_seconds=5)

        body = source.fetch_page(1)

        self.assertEqual(body, payload)
        req = mock_urlopen.call_args.args[0]
        self.assertEqual(req.full_url, "http://example.test/transactions/1.json")
        self.assertEqual(req.get_method(), "GET")
        self.assertEqual(mock_urlopen.call_args.kwargs["timeout"], 5)

    @patch("infrastructure.transaction_sources.rest_provider.urllib.request.urlopen")
    def test_http_error_becomes_transport_error(self, mock_urlopen) -> None:
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "http://example.test/transactions/9.json", 404, "Not Found", {}, io.BytesIO(b"")
        )
        with self.assertRaises(TransportError) as ctx:
            RestTransactionSource(base_url="http://example.test", timeout_seconds=5).fetch_page(9)
        self.assertIn("404", str(ctx.exception))

    @patch("infrastructure.transaction_sources.rest_provider.urllib.request.urlopen")
    def test_network_errors_become_transport_errors(self, mock_urlopen) -> None:
        for error in (urllib.error.URLError("refused"), socket.timeout("timed out"), TimeoutError()):
            with self.subTest(error=type(error).__name__):
                mock_urlopen.side_effect = error
                with self.assertRaises(TransportError):
                    RestTransactionSource(base_url="http://example.test", timeout_seconds=5).fetch_page(1)

    @patch("infrastructure.transaction_sources.rest_provider.urllib.request.urlopen")
    def test_non_json_body_becomes_transport_error(self, mock_urlopen) -> None:
        mock_urlopen.return_value = _response(b"<html>oops</html>")
        with self.assertRaises(TransportError):
            RestTransactionSource(base_url="http://example.test", timeout_seconds=5).fetch_page(1)


if __name__ == "__main__":
    unittest.main()

# public/tests/test_blob.py

import io
import json
from unittest import mock
from urllib.error import HTTPError, URLError

from django.test import SimpleTestCase, override_settings

from public.services.blob import BlobConfigurationError, BlobUploadError, put_blob


def _response(payload):
    resp = mock.MagicMock()
    resp.read.return_value = json.dumps(payload).encode("utf-8")
    resp.__enter__.return_value = resp
    return resp


@override_settings(BLOB_READ_WRITE_TOKEN="vercel_blob_rw_test")
class PutBlobTests(SimpleTestCase):
    @mock.patch("public.services.blob.urlopen")
    def test_put_request(self, urlopen):
        urlopen.return_value = _response({"url": "https://blob.example.com/products/a.png", "pathname": "products/a.png"})

        blob = put_blob("products/a b.png", b"bytes", content_type="image/png")

        self.assertEqual(blob["url"], "https://blob.example.com/products/a.png")
        req = urlopen.call_args[0][0]
        self.assertEqual(req.get_method(), "PUT")
        self.assertEqual(req.full_url, "https://blob.vercel-storage.com/?pathname=products/a%20b.png")
        self.assertEqual(req.get_header("Authorization"), "Bearer vercel_blob_rw_test")
        self.assertEqual(req.get_header("X-content-type"), "image/png")
        self.assertEqual(req.data, b"bytes")

    @override_settings(BLOB_READ_WRITE_TOKEN="")
    def test_missing_token(self):
        with self.assertRaises(BlobConfigurationError):
            put_blob("products/a.png", b"bytes")

    @mock.patch("public.services.blob.urlopen")
    def test_http_error(self, urlopen):
        urlopen.side_effect = HTTPError(
            "https://blob.vercel-storage.com", 403, "Forbidden", {}, io.BytesIO(b'{"error":"denied"}')
        )
        with self.assertRaisesMessage(BlobUploadError, "403"):
            put_blob("products/a.png", b"bytes")

    @mock.patch("public.services.blob.urlopen", side_effect=URLError("timed out"))
    def test_network_error(self, _urlopen):
        with self.assertRaises(BlobUploadError):
            put_blob("products/a.png", b"bytes")

    @mock.patch("public.services.blob.urlopen")
    def test_response_without_url(self, urlopen):
        urlopen.return_value = _response({"pathname": "products/a.png"})
        with self.assertRaises(BlobUploadError):
            put_blob("products/a.png", b"bytes")

# products/tests/test_uploads.py

import re
from unittest import mock

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status

from backend.testing import auth_client, make_admin, make_user
from products.services.uploads import (
    MAX_AUDIO_SIZE,
    MAX_IMAGE_SIZE,
    UploadValidationError,
    secure_filename,
    validate_audio,
    validate_image,
)
from public.services.blob import BlobUploadError


def _fake_upload(name, content_type, size):
    upload = mock.Mock()
    upload.name = name
    upload.content_type = content_type
    upload.size = size
    return upload


class UploadValidationTests(SimpleTestCase):
    def test_secure_filename_shape(self):
        name = secure_filename("Photo de Noël (1).PNG")
        self.assertRegex(name, r"^\d{13}-[0-9a-f]{8}-Photo_de_No_l__1_\.png$")

    def test_secure_filename_truncates_base(self):
        name = secure_filename("a" * 80 + ".jpg")
        base = re.match(r"^\d+-[0-9a-f]{8}-(.*)\.jpg$", name).group(1)
        self.assertEqual(len(base), 50)

    def test_image_limits(self):
        validate_image(_fake_upload("a.webp", "image/webp", 1024))

        with self.assertRaises(UploadValidationError):
            validate_image(_fake_upload("a.png", "image/png", MAX_IMAGE_SIZE + 1))
        with self.assertRaises(UploadValidationError):
            validate_image(_fake_upload("a.svg", "image/svg+xml", 10))
        with self.assertRaises(UploadValidationError):
            validate_image(_fake_upload("a.bmp", "image/png", 10))

    def test_audio_accepts_any_audio_subtype(self):
        validate_audio(_fake_upload("message.m4a", "audio/x-m4a", 2048))

        with self.assertRaises(UploadValidationError):
            validate_audio(_fake_upload("message.mp3", "video/mp4", 2048))
        with self.assertRaises(UploadValidationError):
            validate_audio(_fake_upload("message.flac", "audio/flac", 2048))
        with self.assertRaises(UploadValidationError):
            validate_audio(_fake_upload("message.mp3", "audio/mpeg", MAX_AUDIO_SIZE + 1))


class UploadEndpointTests(TestCase):
    def setUp(self):
        self.admin_client = auth_client(make_admin())
        self.image_url = reverse("catalog-admin:upload-image")

    def _png(self):
        return SimpleUploadedFile("candle.png", b"\x89PNG fake", content_type="image/png")

    @mock.patch("products.services.uploads.put_blob")
    def test_image_upload_returns_blob_url(self, put_blob):
        put_blob.return_value = {"url": "https://blob.example.com/products/candle.png"}

        res = self.admin_client.post(self.image_url, {"file": self._png()}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"url": "https://blob.example.com/products/candle.png"})
        pathname = put_blob.call_args[0][0]
        self.assertTrue(pathname.startswith("products/"))
        self.assertTrue(pathname.endswith("-candle.png"))

    def test_missing_file_is_400(self):
        res = self.admin_client.post(self.image_url, {}, format="multipart")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_wrong_type_is_400(self):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = self.admin_client.post(self.image_url, {"file": upload}, format="multipart")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    @mock.patch("products.services.uploads.put_blob", side_effect=BlobUploadError("boom"))
    def test_blob_failure_is_502(self, _put_blob):
        with self.assertLogs("products.views.uploads", level="ERROR"):
            res = self.admin_client.post(self.image_url, {"file": self._png()}, format="multipart")

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"], "File upload failed")

    def test_customer_cannot_upload_catalog_images(self):
        res = auth_client(make_user()).post(self.image_url, {"file": self._png()}, format="multipart")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    @mock.patch("products.services.uploads.put_blob")
    def test_customer_audio_upload(self, put_blob):
        put_blob.return_value = {"url": "https://blob.example.com/uploads/audio/msg.webm"}
        audio = SimpleUploadedFile("msg.webm", b"webm-bytes", content_type="audio/webm")

        res = auth_client(make_user()).post(
            reverse("catalog:upload-audio"), {"file": audio}, format="multipart"
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(put_blob.call_args[0][0].startswith("uploads/audio/"))

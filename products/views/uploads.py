# products/views/uploads.py

"""
UPLOAD ENDPOINTS

Admin (catalog media):
- POST /api/admin/uploads/image/   multipart "file" -> {url}
- POST /api/admin/uploads/model/   multipart "file" (.glb/.gltf) -> {url}

Customer (personalized message):
- POST /api/uploads/audio/         multipart "file" -> {url}
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from backend.exceptions import error_response
from permissions.roles import IsAdmin, IsNotBanned
from products.services.uploads import (
    UploadValidationError,
    upload_audio,
    upload_image,
    upload_model,
)
from public.services.blob import BlobConfigurationError, BlobUploadError

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "File upload failed"

UPLOAD_RESPONSES = {
    200: OpenApiResponse(description="{url}"),
    400: OpenApiResponse(description="Missing or invalid file"),
    502: OpenApiResponse(description="Storage failure"),
}


class BaseUploadView(APIView):
    """
    Subclasses set `store` to one of products.services.uploads.upload_*.
    """

    parser_classes = [MultiPartParser, FormParser]
    store = None

    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            return error_response("No file was provided", http_status=status.HTTP_400_BAD_REQUEST)

        try:
            url = self.store(upload)
        except UploadValidationError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        except (BlobUploadError, BlobConfigurationError):
            logger.exception(
                "Blob upload failed",
                extra={"view": self.__class__.__name__, "upload_name": upload.name},
            )
            return error_response(UPLOAD_FAILED_MESSAGE, http_status=status.HTTP_502_BAD_GATEWAY)

        return Response({"url": url}, status=status.HTTP_200_OK)


@extend_schema(request={"multipart/form-data": {"type": "object"}}, responses=UPLOAD_RESPONSES, tags=["Admin"])
class AdminImageUploadView(BaseUploadView):
    permission_classes = [IsAuthenticated, IsAdmin]
    store = staticmethod(upload_image)


@extend_schema(request={"multipart/form-data": {"type": "object"}}, responses=UPLOAD_RESPONSES, tags=["Admin"])
class AdminModelUploadView(BaseUploadView):
    permission_classes = [IsAuthenticated, IsAdmin]
    store = staticmethod(upload_model)


class AudioUploadThrottle(UserRateThrottle):
    scope = "public_write"


@extend_schema(request={"multipart/form-data": {"type": "object"}}, responses=UPLOAD_RESPONSES, tags=["Uploads"])
class AudioUploadView(BaseUploadView):
    permission_classes = [IsAuthenticated, IsNotBanned]
    throttle_classes = [AudioUploadThrottle]
    store = staticmethod(upload_audio)

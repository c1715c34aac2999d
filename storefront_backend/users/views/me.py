import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.responses import error_response
from products.services.storage import ImageUploadError, InvalidImageError
from users.serializers import ProfileUpdateSerializer, UserSerializer

logger = logging.getLogger(__name__)


class MeView(APIView):
    """
    GET   -> current profile
    PATCH -> name / avatar / password change
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Get current authenticated user profile",
    )
    def get(self, request):
        return Response(
            {
                "authenticated": True,
                "user": UserSerializer(request.user).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        request=ProfileUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(description="Validation error"),
            502: OpenApiResponse(description="Avatar upload failed"),
        },
        description="Update the current user's profile (multipart for avatar upload).",
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(
            instance=request.user, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)

        try:
            user = serializer.save()
        except InvalidImageError as exc:
            return error_response(
                code="invalid_image",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except ImageUploadError as exc:
            return error_response(
                code="upload_failed",
                message=str(exc),
                http_status=status.HTTP_502_BAD_GATEWAY,
            )

        logger.info("Profile updated for user %s", user.pk)

        return Response(
            {
                "message": "Profile updated successfully",
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )

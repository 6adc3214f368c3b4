from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status, permissions
from rest_framework.authtoken.models import Token
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer
import logging

logger = logging.getLogger(__name__)

auth_response = openapi.Response(
    description='Authenticated user and API token',
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            'token': openapi.Schema(type=openapi.TYPE_STRING),
            'user': openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={
                    'id': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'name': openapi.Schema(type=openapi.TYPE_STRING),
                    'email': openapi.Schema(type=openapi.TYPE_STRING),
                    'phone_number': openapi.Schema(type=openapi.TYPE_STRING),
                    'rating': openapi.Schema(type=openapi.TYPE_NUMBER),
                    'completed_jobs': openapi.Schema(type=openapi.TYPE_INTEGER),
                    'created_jobs': openapi.Schema(type=openapi.TYPE_INTEGER),
                }
            )
        }
    )
)


class RegisterView(APIView):
    permission_classes = []
    authentication_classes = []

    @swagger_auto_schema(
        request_body=RegisterSerializer,
        responses={201: auth_response, 400: 'Bad Request'}
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        return Response(
            {"user": UserSerializer(user).data, "token": token.key},
            status=status.HTTP_201_CREATED
        )


class LoginView(APIView):
    permission_classes = []
    authentication_classes = []

    @swagger_auto_schema(
        request_body=LoginSerializer,
        responses={200: auth_response, 401: 'Invalid credentials'}
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        if not serializer.is_valid():
            return Response(
                {"message": "Invalid credentials", "code": "invalid_credentials"},
                status=status.HTTP_401_UNAUTHORIZED
            )
        user = serializer.validated_data['user']
        token, _ = Token.objects.get_or_create(user=user)
        logger.info(f"User logged in successfully: {user.email}")
        return Response({"user": UserSerializer(user).data, "token": token.key})


class CurrentUserView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Profile of the authenticated user.",
        responses={200: UserSerializer, 401: 'Unauthorized'}
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

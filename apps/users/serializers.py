from rest_framework import serializers
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password

import logging

User = get_user_model()
logger = logging.getLogger(__name__)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone_number', 'rating', 'completed_jobs', 'created_jobs']
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Creator/assignee summary embedded in job payloads."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'rating']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        max_length=128,
        write_only=True,
        min_length=6,
        error_messages={'min_length': 'Password must be at least 6 characters long.'}
    )
    phone_number = serializers.CharField(max_length=20)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name may not be blank.")
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("User already exists")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        user = User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
            phone_number=validated_data['phone_number'].strip(),
        )
        logger.info(f"User created successfully: {user.email}")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        user = authenticate(
            request=self.context.get('request'),
            email=data['email'].strip().lower(),
            password=data['password'],
        )
        if user is None:
            logger.warning(f"Invalid credentials for {data['email']}")
            raise serializers.ValidationError("Invalid credentials")
        data['user'] = user
        return data

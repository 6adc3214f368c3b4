from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from .serializers import JobSerializer, JobInputSerializer, JobFilterSerializer
from .services import job_lifecycle
from core.exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)

error_response = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'message': openapi.Schema(type=openapi.TYPE_STRING),
        'code': openapi.Schema(type=openapi.TYPE_STRING),
    }
)

transition_responses = {
    200: JobSerializer,
    400: openapi.Response('Validation error', error_response),
    401: openapi.Response('Unauthorized', error_response),
    403: openapi.Response('Forbidden', error_response),
    404: openapi.Response('Not Found', error_response),
    409: openapi.Response('Invalid state or concurrent update', error_response),
}


class JobListCreateView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="List jobs. Statuses are resolved against the current time, "
                              "so a job past its deadline is reported as expired.",
        query_serializer=JobFilterSerializer,
        responses={200: JobSerializer(many=True), 400: 'Bad Request'}
    )
    def get(self, request):
        filters = JobFilterSerializer(data=request.query_params)
        if not filters.is_valid():
            raise ValidationError("Invalid filter", errors=filters.errors)
        params = dict(filters.validated_data)
        mine = params.pop('mine')
        if mine:
            if not request.user.is_authenticated:
                raise ValidationError("mine=true requires authentication")
            params['participant'] = request.user.pk
        jobs = self.lifecycle.list_jobs(**params)
        return Response(JobSerializer(jobs, many=True).data)

    @swagger_auto_schema(
        operation_description="Post a new job. It starts open and expires after 7 days unless expires_at is given.",
        request_body=JobInputSerializer,
        responses={
            201: JobSerializer,
            400: openapi.Response('Validation error', error_response),
            401: openapi.Response('Unauthorized', error_response),
        }
    )
    def post(self, request):
        logger.info(f"Creating job for user {request.user.pk}")
        job = self.lifecycle.create_job(request.user.pk, request.data)
        return Response(JobSerializer(job).data, status=status.HTTP_201_CREATED)


class JobDetailView(APIView):
    permission_classes = [IsAuthenticatedOrReadOnly]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="Retrieve a single job.",
        responses={200: JobSerializer, 404: 'Not Found'}
    )
    def get(self, request, pk):
        return Response(JobSerializer(self.lifecycle.get_job(pk)).data)

    @swagger_auto_schema(
        operation_description="Edit an open job. Only the creator may edit; status cannot be changed here.",
        request_body=JobInputSerializer(partial=True),
        responses=transition_responses
    )
    def put(self, request, pk):
        job = self.lifecycle.update_job(pk, request.user.pk, request.data)
        return Response(JobSerializer(job).data)

    @swagger_auto_schema(
        operation_description="Delete a job. Only the creator may delete.",
        responses={
            200: openapi.Response('Deleted', openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={'message': openapi.Schema(type=openapi.TYPE_STRING)}
            )),
            401: 'Unauthorized',
            403: 'Forbidden',
            404: 'Not Found'
        }
    )
    def delete(self, request, pk):
        self.lifecycle.delete_job(pk, request.user.pk)
        return Response({"message": "Job deleted successfully"})


class JobApplyView(APIView):
    permission_classes = [IsAuthenticated]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="Take an open job. The caller becomes the assignee and the job moves to in_progress.",
        request_body=openapi.Schema(type=openapi.TYPE_OBJECT, properties={}),
        responses=transition_responses
    )
    def put(self, request, pk):
        job = self.lifecycle.apply_for_job(pk, request.user.pk)
        return Response(JobSerializer(job).data)


class JobCompleteView(APIView):
    permission_classes = [IsAuthenticated]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="Assignee asks the creator to sign off on the work.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={'comment': openapi.Schema(type=openapi.TYPE_STRING)}
        ),
        responses=transition_responses
    )
    def post(self, request, pk):
        job = self.lifecycle.submit_completion(pk, request.user.pk, request.data.get('comment'))
        return Response(JobSerializer(job).data)


class JobApproveView(APIView):
    permission_classes = [IsAuthenticated]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="Creator approves the completion and rates the assignee.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            required=['rating'],
            properties={
                'rating': openapi.Schema(type=openapi.TYPE_NUMBER, minimum=0, maximum=5)
            }
        ),
        responses=transition_responses
    )
    def post(self, request, pk):
        job = self.lifecycle.approve_completion(pk, request.user.pk, request.data.get('rating'))
        return Response(JobSerializer(job).data)


class JobRejectView(APIView):
    permission_classes = [IsAuthenticated]
    lifecycle = job_lifecycle

    @swagger_auto_schema(
        operation_description="Creator rejects the completion; the job goes back to in_progress.",
        request_body=openapi.Schema(type=openapi.TYPE_OBJECT, properties={}),
        responses=transition_responses
    )
    def post(self, request, pk):
        job = self.lifecycle.reject_completion(pk, request.user.pk)
        return Response(JobSerializer(job).data)

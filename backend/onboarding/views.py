import logging

from django.conf import settings
from django.http import Http404
from django.utils import timezone
from rest_framework import status
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from onboarding.auth import ApiTokenPermission
from onboarding.models import Submission
from onboarding.risk_engine.types import ApplicationRecord
from onboarding.serializers import (
    AssessRequestSerializer,
    DocumentUploadSerializer,
    StatusOverrideSerializer,
    SubmissionCreateSerializer,
    SubmissionListSerializer,
    SubmissionSerializer,
    SubmissionUpdateSerializer,
)
from onboarding.services import (
    attach_document,
    build_assessment_payload,
    create_submission,
    delete_submission,
    evaluate_application,
    get_statistics,
    get_submission,
    list_submissions,
    override_status,
    update_submission,
)

logger = logging.getLogger(__name__)


def _server_error_response() -> Response:
    return Response(
        {
            'error': 'server_error',
            'detail': 'Submission service error. Please try again.',
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class HealthAPIView(APIView):
    throttle_scope = 'default'
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok', 'timestamp': timezone.now(), 'version': settings.APP_VERSION})


class AssessAPIView(APIView):
    throttle_scope = 'assess'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def post(self, request):
        serializer = AssessRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payload = dict(serializer.validated_data)
        exclude_id = payload.pop('submission_id', None)
        include_breakdown = payload.pop('include_breakdown', False)

        record = ApplicationRecord.from_mapping(payload)
        result, warnings = evaluate_application(record, exclude_id=exclude_id)
        return Response(
            build_assessment_payload(result, warnings, include_breakdown=include_breakdown),
            status=status.HTTP_200_OK,
        )


class SubmissionListCreateAPIView(APIView):
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get_throttles(self):
        self.throttle_scope = 'submit' if self.request.method == 'POST' else 'lookup'
        return super().get_throttles()

    def get(self, request):
        try:
            limit = min(max(int(request.query_params.get('limit', 50)), 1), 200)
        except ValueError:
            limit = 50

        submissions = list_submissions(
            status=(request.query_params.get('status') or '').lower() or None,
            entity_type=(request.query_params.get('entity_type') or '').lower() or None,
            sort=request.query_params.get('sort') or 'newest',
            q=request.query_params.get('q') or '',
            limit=limit,
        )
        return Response({'results': SubmissionListSerializer(submissions, many=True).data})

    def post(self, request):
        serializer = SubmissionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            submission = create_submission(serializer.validated_data)
        except Exception:
            logger.exception(
                'Unexpected submission create failure (entity_type=%s).',
                serializer.validated_data.get('entity_type'),
            )
            return _server_error_response()

        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)


class SubmissionDetailAPIView(APIView):
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get_throttles(self):
        self.throttle_scope = 'lookup' if self.request.method == 'GET' else 'submit'
        return super().get_throttles()

    def get(self, request, submission_id):
        try:
            submission = get_submission(submission_id)
        except Submission.DoesNotExist as exc:
            raise Http404('Submission not found') from exc

        return Response(SubmissionSerializer(submission).data)

    def patch(self, request, submission_id):
        serializer = SubmissionUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            submission = update_submission(submission_id, serializer.validated_data)
        except Submission.DoesNotExist as exc:
            raise Http404('Submission not found') from exc

        return Response(SubmissionSerializer(submission).data)

    def delete(self, request, submission_id):
        if not delete_submission(submission_id):
            raise Http404('Submission not found')
        return Response(status=status.HTTP_204_NO_CONTENT)


class SubmissionStatusAPIView(APIView):
    throttle_scope = 'submit'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def post(self, request, submission_id):
        serializer = StatusOverrideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            submission = override_status(submission_id, serializer.validated_data['status'])
        except Submission.DoesNotExist as exc:
            raise Http404('Submission not found') from exc

        return Response(SubmissionSerializer(submission).data)


class SubmissionDocumentAPIView(APIView):
    throttle_scope = 'submit'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]
    parser_classes = [MultiPartParser]

    def post(self, request, submission_id):
        serializer = DocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            submission = attach_document(submission_id, serializer.validated_data['document'])
        except Submission.DoesNotExist as exc:
            raise Http404('Submission not found') from exc
        except Exception:
            logger.exception('Unexpected document upload failure (submission_id=%s).', submission_id)
            return _server_error_response()

        return Response(SubmissionSerializer(submission).data)


class StatisticsAPIView(APIView):
    throttle_scope = 'lookup'
    authentication_classes = []
    permission_classes = [ApiTokenPermission]

    def get(self, request):
        return Response(get_statistics())

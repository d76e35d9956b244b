from django.urls import path

from onboarding import views

urlpatterns = [
    path('health', views.HealthAPIView.as_view(), name='health-api'),
    path('assess', views.AssessAPIView.as_view(), name='assess-api'),
    path('submissions', views.SubmissionListCreateAPIView.as_view(), name='submission-list-api'),
    path('submissions/<uuid:submission_id>', views.SubmissionDetailAPIView.as_view(), name='submission-detail-api'),
    path(
        'submissions/<uuid:submission_id>/status',
        views.SubmissionStatusAPIView.as_view(),
        name='submission-status-api',
    ),
    path(
        'submissions/<uuid:submission_id>/document',
        views.SubmissionDocumentAPIView.as_view(),
        name='submission-document-api',
    ),
    path('statistics', views.StatisticsAPIView.as_view(), name='statistics-api'),
]

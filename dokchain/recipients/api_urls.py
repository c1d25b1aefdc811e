from django.urls import path
from .views import FileUploadAPIView, RecipientFilesAPIView

urlpatterns = [
    path('upload', FileUploadAPIView.as_view(), name='file-upload'),
    path('recipients/<str:identifier>/files', RecipientFilesAPIView.as_view(), name='recipient-files'),
]

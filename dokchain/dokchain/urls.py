from django.urls import path, include

from recipients.views import banner_view

urlpatterns = [
    path('', banner_view, name='banner'),
    path('', include('recipients.api_urls')),
]

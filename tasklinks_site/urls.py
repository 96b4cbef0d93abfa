"""Root URL configuration for tasklinks_site."""

from django.urls import include, path

urlpatterns = [
    path('', include('tasklinks.urls')),
]

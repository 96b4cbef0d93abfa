"""URL configuration for the tasklinks app."""

from django.urls import path

from . import views

app_name = 'tasklinks'

urlpatterns = [
    path('', views.preview, name='preview'),
    path('title/', views.title_lookup, name='title'),
]

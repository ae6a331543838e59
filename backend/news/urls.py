"""
News app URL configuration.

Included in the project-level ``urls.py`` as::

    path('api/news/', include('news.urls')),
"""

from django.urls import path

from .views import CybercrimeNewsView

app_name = "news"

urlpatterns = [
    path("cybercrime-news/", CybercrimeNewsView.as_view(), name="cybercrime-news"),
]

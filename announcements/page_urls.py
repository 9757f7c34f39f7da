"""
announcements/page_urls.py

Server-rendered board pages. Include this under the /board/ prefix.
"""
from django.urls import path

from . import pages


app_name = "board"

urlpatterns = [
    path("", pages.board, name="feed"),
    path("post/", pages.post_announcement, name="post"),
    path("<int:pk>/delete/", pages.delete_announcement, name="delete"),
    path("<int:pk>/edit/", pages.edit_announcement, name="edit"),
    path("<int:pk>/images/<int:index>/", pages.image_viewer, name="image"),
]

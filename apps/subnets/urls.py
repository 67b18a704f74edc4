from django.urls import include, path

from .v1.router import router

urlpatterns = [
    path("api/v1/", include(router.urls)),
]

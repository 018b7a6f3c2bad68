"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and designed to be included
in the project-level ``urls.py`` as::

    path('api/accounts/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /auth/signup/                → SignupView
    POST   /auth/login/                 → LoginView

Current User Profile ("Me")
    GET    /me/                         → MeView  (retrieve)
    PATCH  /me/                         → MeView  (partial update)

User Directory
    GET    /users/?query=               → UserSearchView

Officer Management (Admin)
    GET    /administratives/            → AdministrativeViewSet.list
    POST   /administratives/            → AdministrativeViewSet.create
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AdministrativeViewSet,
    LoginView,
    MeView,
    SignupView,
    UserSearchView,
)

app_name = "accounts"

router = DefaultRouter()
router.register(r"administratives", AdministrativeViewSet, basename="administrative")

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("auth/signup/", SignupView.as_view(), name="signup"),
    path("auth/login/", LoginView.as_view(), name="login"),

    # ── Current User (Me) ───────────────────────────────────────────
    path("me/", MeView.as_view(), name="me"),

    # ── Directory ────────────────────────────────────────────────────
    path("users/", UserSearchView.as_view(), name="user-search"),

    # ── Router-registered viewsets (administratives/) ────────────────
    path("", include(router.urls)),
]

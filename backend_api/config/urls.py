from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="Grid Puzzle Solver API",
        default_version="v1",
        description="Exact solvers for Queens, Tango and Zip puzzles.",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path("api/", include("api.urls")),
    path("docs/", schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("docs/openapi.json", schema_view.without_ui(cache_timeout=0), name="schema-json"),
]

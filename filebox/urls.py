"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.
"""

from django.contrib import admin
from django.http import HttpRequest, JsonResponse
from django.urls import include, path
from django.views.decorators.http import require_GET

from filebox.apps.accounts import urls as accounts_urls
from filebox.apps.files import urls as files_urls

admin.autodiscover()


@require_GET
def index(request: HttpRequest) -> JsonResponse:
    """Liveness check."""
    return JsonResponse({'message': 'File uploader ready!'})


urlpatterns = [
    path('auth/', include(accounts_urls, namespace='accounts')),
    path('api/', include(files_urls, namespace='files')),
    path('admin/', admin.site.urls),
    path('', index, name='index'),
]

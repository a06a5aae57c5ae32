"""
URL Configuration for Sky Hostel
"""
from django.urls import path, include, reverse
from django.conf import settings
from django.conf.urls.static import static
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from apps.core.admin_site import custom_admin_site


def home_view(request):
    """Service banner listing the public endpoints."""
    return JsonResponse({
        'service': 'Sky Hostel API',
        'version': settings.SPECTACULAR_SETTINGS['VERSION'],
        'docs': request.build_absolute_uri(reverse('swagger-ui')),
        'endpoints': {
            'register': reverse('students:register'),
            'generate_reference': reverse('payments:rrr-generation'),
            'check_status': reverse('payments:check-payment-status'),
            'record_payment': reverse('payments:payment'),
            'verify_payment': reverse('payments:verify-payment'),
        }
    })


urlpatterns = [
    path('', home_view, name='home'),
    path('admin/', custom_admin_site.urls),

    path('api/v1/', include('sky_hostel.api_urls')),

    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'),
         name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'),
         name='redoc'),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL,
                          document_root=settings.STATIC_ROOT)

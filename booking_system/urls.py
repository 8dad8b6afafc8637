# booking_system/urls.py
#
# Purpose:
# - Project URL router.
# - Only the Django admin is exposed; the availability engine is a library
#   called by whatever API layer sits in front of it.
#
from django.contrib import admin
from django.urls import path
from django.conf import settings
from django.conf.urls.static import static


urlpatterns = [
    # Django admin (inspect businesses, staff schedules and bookings)
    path("admin/", admin.site.urls),
]

# Static files in DEBUG (dev only). In production, serve via web server / CDN.
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

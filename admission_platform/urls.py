from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenRefreshView

# Import Views
from users.views import CustomLoginView, UserProfileView
from cores.views import PlatformSettingView, AuditLogListView

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Authentication ---
    path('api/auth/login/', CustomLoginView.as_view(), name='login'),
    path('api/auth/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('api/auth/me/', UserProfileView.as_view(), name='profile'),

    # --- Platform Settings & Audit Trail ---
    path('api/admin/settings/', PlatformSettingView.as_view(), name='platform-settings'),
    path('api/admin/audit-logs/', AuditLogListView.as_view(), name='audit-logs'),

    # --- Admissions, Candidate Tests ---
    path('api/', include('admissions.urls')),
    path('api/', include('assessments.urls')),
]

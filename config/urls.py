"""
URL configuration for Sativar project.
"""
from django.contrib import admin
from django.urls import path
from django.conf import settings
from django.conf.urls.static import static
from ninja import NinjaAPI

api = NinjaAPI(
    title="Sativar API",
    version="1.0.0",
    description="Small-business management API: clients, plans, invoices, expenses, tasks and knowledge base",
    docs_url="/docs",
)

from apps.identity.api import router as identity_router
from apps.clients.api import router as clients_router
from apps.plans.api import router as plans_router
from apps.invoices.api import router as invoices_router
from apps.expenses.api import router as expenses_router
from apps.tasks.api import router as tasks_router
from apps.knowledge_base.api import router as knowledge_base_router
from apps.company.api import router as company_router
from apps.notifications.api import router as notifications_router
from apps.dashboard.api import router as dashboard_router
from apps.system.api import router as system_router

api.add_router("/auth", identity_router)
api.add_router("/clients", clients_router)
api.add_router("/plans", plans_router)
api.add_router("/invoices", invoices_router)
api.add_router("/expenses", expenses_router)
api.add_router("/tasks", tasks_router)
api.add_router("/knowledge-base", knowledge_base_router)
api.add_router("/settings", company_router)
api.add_router("/notifications", notifications_router)
api.add_router("/dashboard", dashboard_router)
api.add_router("/system", system_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]

# Serve uploaded logos in development
if settings.DEBUG:
    urlpatterns += static(
        getattr(settings, 'MEDIA_URL', '/media/'),
        document_root=getattr(settings, 'MEDIA_ROOT', settings.BASE_DIR / 'media')
    )

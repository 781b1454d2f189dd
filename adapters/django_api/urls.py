"""
Sheet Ledger Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("stock/customers", views.customers_list_view),
    path("stock/customers/<str:customer>/items", views.customer_items_view),
    path("stock/customers/<str:customer>/history", views.customer_history_view),
    path("stock/customers/<str:customer>/delete", views.customer_delete_view),
    path("stock/movements", views.movements_view),
    path("stock/events", views.stock_events_create_view),
    path("stock/events/<str:event_id>/update", views.stock_event_update_view),
    path("stock/events/<str:event_id>/delete", views.stock_event_delete_view),
]

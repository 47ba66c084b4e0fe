"""
PMS Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("rooms", views.rooms_view),
    path("rooms/available", views.available_rooms_view),
    path("rooms/<uuid:room_id>", views.room_detail_view),
    path("rooms/<uuid:room_id>/status", views.room_status_view),
    path("rooms/<uuid:room_id>/cleaning-status", views.room_cleaning_status_view),
    path("reservations", views.reservations_view),
    path("reservations/<uuid:reservation_id>/cancel", views.reservation_cancel_view),
    path("reservations/<uuid:reservation_id>/status", views.reservation_status_view),
    path("reservations/<uuid:reservation_id>/addons", views.reservation_addons_view),
    path("front-desk", views.front_desk_view),
    path("calendar", views.calendar_view),
    path("calendar/move", views.calendar_move_view),
    path("inventory/items", views.inventory_items_view),
    path("inventory/suppliers", views.inventory_suppliers_view),
    path("purchase-orders", views.purchase_orders_view),
    path("purchase-orders/stats", views.purchase_order_stats_view),
    path("purchase-orders/<uuid:order_id>/status", views.purchase_order_status_view),
    path("reports/summary", views.reports_summary_view),
]

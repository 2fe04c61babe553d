from django.contrib import admin

from boxoffice.models import Booking, BookingSeat, Event, PaymentIntent, Seat


class SeatInline(admin.TabularInline):
    model = Seat
    extra = 0
    fields = ["row", "column", "tier", "available", "price"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class BookingSeatInline(admin.TabularInline):
    model = BookingSeat
    extra = 0
    readonly_fields = ["row", "column", "active"]
    exclude = ["event_id"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "starts_at", "capacity", "booking_count"]
    search_fields = ["name", "location"]
    readonly_fields = ["booking_count", "layout_rows", "layout_columns", "pricing"]
    inlines = [SeatInline]

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.booking_count > 0:
            return False
        return super().has_delete_permission(request, obj)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["purchaser_name", "purchaser_email", "event_name", "status", "total_amount"]
    list_filter = ["status"]
    search_fields = ["purchaser_name", "purchaser_email", "event_name"]
    readonly_fields = [f.name for f in Booking._meta.fields]
    inlines = [BookingSeatInline]

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PaymentIntent)
class PaymentIntentAdmin(admin.ModelAdmin):
    list_display = ["id", "purchaser_email", "amount", "status", "created_at"]
    list_filter = ["status"]
    readonly_fields = [f.name for f in PaymentIntent._meta.fields]

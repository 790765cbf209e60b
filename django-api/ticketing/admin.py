from django.contrib import admin

from ticketing.models import Account, Event, Order


class OrderInline(admin.TabularInline):
    model = Order
    fk_name = "event"
    extra = 0
    fields = ["buyer", "total_amount", "used", "created_at"]
    readonly_fields = ["used", "created_at"]


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ["email", "first_name", "last_name", "created_at"]
    search_fields = ["email", "first_name", "last_name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "organizer", "starts_at", "ends_at"]
    search_fields = ["title", "location"]
    inlines = [OrderInline]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "event", "buyer", "total_amount", "used", "created_at"]
    list_filter = ["used", "event"]
    # Redemption goes through the API so the used flag only moves forward.
    readonly_fields = ["used"]

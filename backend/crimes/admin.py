from django.contrib import admin

from .models import Crime, CrimeLog, Location


class LocationInline(admin.StackedInline):
    model = Location
    can_delete = False
    extra = 0


class CrimeLogInline(admin.TabularInline):
    model = CrimeLog
    extra = 0
    can_delete = False
    readonly_fields = ("author", "message", "created_at")

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Crime)
class CrimeAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "crime_type", "status", "date_occurred",
                    "reported_by", "administrative")
    list_filter = ("status", "crime_type")
    search_fields = ("title", "description", "crime_type")
    raw_id_fields = ("reported_by", "administrative")
    filter_horizontal = ("accused", "victims")
    inlines = [LocationInline, CrimeLogInline]


@admin.register(CrimeLog)
class CrimeLogAdmin(admin.ModelAdmin):
    list_display = ("crime", "author", "message", "created_at")
    search_fields = ("message",)
    readonly_fields = ("crime", "author", "message", "created_at", "updated_at")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

from django.contrib import admin

from .models import AdministrativeProfile, AdminProfile, User


class AdminProfileInline(admin.StackedInline):
    model = AdminProfile
    can_delete = False
    extra = 0


class AdministrativeProfileInline(admin.StackedInline):
    model = AdministrativeProfile
    can_delete = False
    extra = 0


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "first_name", "last_name", "phone_number",
                    "role", "is_active")
    search_fields = ("email", "first_name", "last_name", "phone_number")
    list_filter = ("role", "is_active", "is_staff")
    ordering = ("email",)
    readonly_fields = ("password", "last_login", "date_joined")
    filter_horizontal = ("groups", "user_permissions")
    inlines = [AdminProfileInline, AdministrativeProfileInline]
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal info", {"fields": ("first_name", "last_name", "phone_number",
                                      "dob", "location")}),
        ("Role", {"fields": ("role",)}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser",
                                    "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )


@admin.register(AdministrativeProfile)
class AdministrativeProfileAdmin(admin.ModelAdmin):
    list_display = ("badge_number", "user", "designation", "department")
    search_fields = ("user__email", "user__first_name", "user__last_name")
    list_filter = ("designation", "department")
    ordering = ("badge_number",)

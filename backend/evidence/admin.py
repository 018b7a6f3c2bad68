from django.contrib import admin

from .models import Evidence


@admin.register(Evidence)
class EvidenceAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "crime", "mime", "filename", "submitted_by", "created_at")
    search_fields = ("title", "description", "filename")
    list_filter = ("mime",)
    raw_id_fields = ("crime", "submitted_by")
    exclude = ("image",)

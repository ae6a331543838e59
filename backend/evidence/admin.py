from django.contrib import admin

from .models import Evidence, EvidenceRemark


class EvidenceRemarkInline(admin.TabularInline):
    model = EvidenceRemark
    extra = 0
    readonly_fields = ("staff", "text", "timestamp")


@admin.register(Evidence)
class EvidenceAdmin(admin.ModelAdmin):
    list_display = ("id", "item", "case", "uploaded_by", "created_at")
    list_filter = ("case__status",)
    search_fields = ("item", "description", "case__case_id")
    inlines = [EvidenceRemarkInline]


@admin.register(EvidenceRemark)
class EvidenceRemarkAdmin(admin.ModelAdmin):
    list_display = ("evidence", "staff", "timestamp")
    search_fields = ("text",)

from django.contrib import admin
from django.contrib import messages
from django.utils.html import format_html_join

from onboarding.models import APPLICATION_FIELDS, Submission
from onboarding.risk_engine.engine import RiskScorer
from onboarding.services import reassess_submission


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = (
        'company_name',
        'entity_type',
        'email',
        'risk_score',
        'risk_level',
        'status',
        'status_overridden',
        'created_at',
    )
    list_filter = ('status', 'risk_level', 'entity_type', 'status_overridden')
    search_fields = ('company_name', 'contact_name', 'email', 'tax_id')
    readonly_fields = (
        'id',
        'risk_score',
        'risk_level',
        'status_overridden',
        'score_breakdown',
        'risk_factors',
        'duplicate_warnings',
        'assessed_at',
        'created_at',
        'updated_at',
    )
    actions = ['reassess_selected']

    @admin.display(description='Score breakdown')
    def score_breakdown(self, obj):
        result = RiskScorer().run(obj.to_application_record())
        return format_html_join(
            '\n',
            '<div>{}: {}</div>',
            ((output.rule_name, f'{output.points:g}') for output in result.rules),
        )

    def save_model(self, request, obj, form, change):
        application_changed = not change or any(name in form.changed_data for name in APPLICATION_FIELDS)
        status_changed = change and 'status' in form.changed_data

        if application_changed:
            chosen_status = obj.status
            reassess_submission(obj, save=False)
            if status_changed:
                obj.status = chosen_status
                obj.status_overridden = True
        elif status_changed:
            obj.status_overridden = True

        super().save_model(request, obj, form, change)

    @admin.action(description='Re-run risk assessment')
    def reassess_selected(self, request, queryset):
        reassessed = 0
        for submission in queryset:
            reassess_submission(submission)
            reassessed += 1

        self.message_user(
            request,
            f'Re-assessed {reassessed} submission(s).',
            level=messages.SUCCESS,
        )

"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Reports views: the report catalogue and each report with
             its date range, shown as HTML or downloaded as PDF, CSV or
             Excel.
-------------------------------------------------------------------------
"""
from typing import Any, Dict

from django.contrib import messages
from django.http import Http404, HttpResponse
from django.template.loader import render_to_string
from django.utils import timezone
from django.views.generic import TemplateView

from apps.core.logging import ConsoleLogger
from apps.reports.forms import ReportFilterForm
from apps.reports.services import (
    REPORT_TYPES, build_report, build_report_workbook, get_report_type, write_report_csv
)


class ReportIndexView(TemplateView):
    template_name = 'reports/report_index.html'

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['report_types'] = REPORT_TYPES
        return context


class ReportView(TemplateView):
    """
    One report for the selected range.

    Query parameters: date_range, date_from, date_to, format (html, pdf,
    csv or excel).
    """
    template_name = 'reports/report_detail.html'

    def dispatch(self, request, *args, **kwargs):
        self.report_type = get_report_type(kwargs['report_id'])
        if self.report_type is None:
            raise Http404(f"Unknown report '{kwargs['report_id']}'")
        return super().dispatch(request, *args, **kwargs)

    def get(self, request, *args, **kwargs):
        form = ReportFilterForm(request.GET)
        if not form.is_valid():
            ConsoleLogger.log_validation_error(
                'report_filter', form.errors.get_json_data(), {'report_id': self.report_type['id']}
            )
            return self.render_to_response(self.get_context_data(form=form, report=None))

        first, last = form.cleaned_data['period']
        report = build_report(self.report_type['id'], first, last)
        output = form.cleaned_data['format']
        if output == 'csv':
            return self.csv_response(report)
        if output == 'excel':
            return self.excel_response(report)
        if output == 'pdf':
            return self.pdf_response(report)
        return self.render_to_response(self.get_context_data(form=form, report=report))

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context['report_type'] = self.report_type
        context['generated_at'] = timezone.now()
        return context

    def filename(self, report, extension: str) -> str:
        return f"{report.report_id}_report_{timezone.localdate().isoformat()}.{extension}"

    def csv_response(self, report) -> HttpResponse:
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{self.filename(report, "csv")}"'
        # Add UTF-8 BOM for Excel compatibility
        response.write('\ufeff')
        write_report_csv(response, report)
        return response

    def excel_response(self, report) -> HttpResponse:
        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="{self.filename(report, "xlsx")}"'
        build_report_workbook(report).save(response)
        return response

    def pdf_response(self, report) -> HttpResponse:
        context = self.get_context_data(report=report, pdf=True)
        html_string = render_to_string('reports/report_pdf.html', context, request=self.request)

        try:
            from weasyprint import HTML
            pdf_file = HTML(string=html_string, base_url=self.request.build_absolute_uri('/')).write_pdf()
        except (ImportError, OSError) as e:
            # WeasyPrint missing or its native libraries unavailable
            ConsoleLogger.log_error('report_pdf', e, {'report_id': report.report_id})
            messages.warning(self.request, 'PDF generation is unavailable. Displaying printable version.')
            return HttpResponse(html_string)

        response = HttpResponse(pdf_file, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{self.filename(report, "pdf")}"'
        return response

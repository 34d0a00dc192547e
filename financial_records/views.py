"""
Financial Records Views

GET /financial-records/report/?period=monthly|yearly|all - Income statement
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from records.views import RecordPageMixin

from .serializers import ReportQuerySerializer
from .services import FINANCIAL_PAGE, build_report, format_rupees


class FinancialReportView(RecordPageMixin, APIView):
    page = FINANCIAL_PAGE

    def get(self, request):
        query = ReportQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({
                'success': False,
                'error': 'Invalid report period',
                'fields': query.errors,
            }, status=status.HTTP_400_BAD_REQUEST)

        records = self.load_records(self.get_store(request))
        report = build_report(records, query.validated_data['period'])
        report['display'] = {
            'totalIncome': format_rupees(report['totalIncome']),
            'totalExpenses': format_rupees(report['totalExpenses']),
            'netProfit': format_rupees(report['netProfit']),
        }
        return Response(report)

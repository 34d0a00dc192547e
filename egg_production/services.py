"""
Egg Production Service

Derived fields, the production page definition and the home summary:
- Usable eggs and production rate per record
- Batch-numbered create form
- Production totals, optionally combined with sales for stock figures
"""

from typing import Any, Dict, List, Optional

from django.utils import timezone

from records.modal import ModalController
from records.numbering import next_batch_number
from records.pages import RecordPage
from records.pipeline import DATE, NUMBER, TEXT, SortKey, to_number

from .serializers import ProductionRecordSerializer


def usable_eggs(record: Dict[str, Any]) -> float:
    """Collected minus damaged. Not clamped at zero."""
    return to_number(record.get('eggsCollected')) - to_number(record.get('damagedEggs'))


def production_rate(record: Dict[str, Any]) -> float:
    """
    Backend-supplied ``eggProductionRate`` when present, otherwise
    eggs collected per bird as a percentage.
    """
    supplied = record.get('eggProductionRate')
    if supplied not in (None, ''):
        return round(to_number(supplied), 2)
    birds = to_number(record.get('birds'))
    if not birds:
        return 0
    return round(to_number(record.get('eggsCollected')) / birds * 100, 2)


def project_record(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **record,
        'usableEggs': usable_eggs(record),
        'productionRate': production_rate(record),
    }


def _today_input() -> str:
    return timezone.localdate().isoformat()


class ProductionModal(ModalController):
    default_fields = {
        'date': _today_input,
        'batchNumber': '',
        'birds': '',
        'eggsCollected': '',
        'damagedEggs': '0',
        'notes': '',
    }
    auto_numbered_fields = ('batchNumber',)
    display_date_fields = ('date',)
    create_title = 'Add Production Record'
    edit_title = 'Edit Production Record'

    def auto_fields(self, records):
        return {'batchNumber': next_batch_number(records)}


def summarize_records(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Production-only totals."""
    total_birds = sum(to_number(r.get('birds')) for r in records)
    total_eggs = sum(to_number(r.get('eggsCollected')) for r in records)
    total_damaged = sum(to_number(r.get('damagedEggs')) for r in records)
    rates = [production_rate(r) for r in records]

    return {
        'totalRecords': len(records),
        'totalBirds': total_birds,
        'totalEggs': total_eggs,
        'totalDamagedEggs': total_damaged,
        'usableEggs': total_eggs - total_damaged,
        'averageProduction': round(sum(rates) / len(rates), 2) if rates else 0,
        'mortalityRate': round(total_damaged / total_birds * 100, 1) if total_birds else 0,
    }


def summarize_production(primary: Optional[List[Dict[str, Any]]],
                         secondary: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
    """
    Home summary.

    Args:
        primary: production records, or None when their fetch failed
        secondary: sales orders, or None when their fetch failed

    When sales are unavailable, eggs sold is 0 and stock falls back to
    ``totalEggs - totalDamagedEggs`` (which, unlike the primary path, is
    not clamped at zero). When production is unavailable every metric is 0.
    """
    summary = summarize_records(primary or [])

    if primary is None:
        summary.update(eggsSold=0, eggsInStock=0, degraded=True)
        return summary

    if secondary is None:
        summary['eggsSold'] = 0
        summary['eggsInStock'] = summary['totalEggs'] - summary['totalDamagedEggs']
        summary['degraded'] = True
        return summary

    eggs_sold = sum(to_number(order.get('quantity')) for order in secondary)
    summary['eggsSold'] = eggs_sold
    summary['eggsInStock'] = max(0, summary['usableEggs'] - eggs_sold)
    summary['degraded'] = False
    return summary


def summarize_page(records, store=None) -> Dict[str, Any]:
    return summarize_records(records)


SORT_KEYS = {
    'date': SortKey('date', DATE),
    'batchNumber': SortKey('batchNumber', TEXT),
    'birds': SortKey('birds', NUMBER),
    'eggsCollected': SortKey('eggsCollected', NUMBER),
    'damagedEggs': SortKey('damagedEggs', NUMBER),
    'usableEggs': SortKey('usableEggs', NUMBER, accessor=usable_eggs),
    'productionRate': SortKey('productionRate', NUMBER, accessor=production_rate),
}

PRODUCTION_PAGE = RecordPage(
    collection='egg-production',
    title='Egg Production',
    serializer_class=ProductionRecordSerializer,
    modal_class=ProductionModal,
    sort_keys=SORT_KEYS,
    filter_fields=('batchNumber', 'date'),
    project=project_record,
    summarize=summarize_page,
    record_label='production record',
)

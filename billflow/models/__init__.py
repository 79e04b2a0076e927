from .client import ClientRecord
from .bill import BillRecord
from .payment import PaymentRecord
from .quotation import QuotationRecord
from .service import ServiceRecord
from .settings import SettingsRecord

__all__ = [
    'ClientRecord',
    'BillRecord',
    'PaymentRecord',
    'QuotationRecord',
    'ServiceRecord',
    'SettingsRecord',
]

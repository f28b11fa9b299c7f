from .ledger import DUST_THRESHOLD, Ledger
from .models import Holding, LedgerSnapshot

__all__ = [
    "DUST_THRESHOLD",
    "Holding",
    "Ledger",
    "LedgerSnapshot",
]

from cashflow.models.manual_entry import EntryType, ManualCashEntry, ManualEntryDocReference

__all__ = [
    "EntryType",
    "ManualCashEntry",
    "ManualEntryDocReference",
]

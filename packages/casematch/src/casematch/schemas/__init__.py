from .filters import CaseFilters, TimeFrame, SortOrder

__all__ = ["CaseFilters", "TimeFrame", "SortOrder"]

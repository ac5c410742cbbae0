"""CaseMatch HTTP backend."""

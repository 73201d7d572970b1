"""Personal finance ledger API."""

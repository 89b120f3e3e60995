"""College ERP - enrollment, fee ledger and roster administration core."""

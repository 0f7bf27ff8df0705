# Affirm checkout reconciliation service

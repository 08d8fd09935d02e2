"""
Canteen REST API.

Provides DRF ViewSets for:
- Ingredient (list, create, retrieve)
- Supplier (full CRUD)
- Menu (save/upsert, submit, delete, stats)
- PurchaseOrder (create, confirm, delete drafts)
- Procurement (aggregate, assigned, pending)
"""

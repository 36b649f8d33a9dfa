# Services package init
"""
Repairs API — Services Layer
=============================

What:  Business logic sitting between routes (HTTP) and the in-memory store.

Service Inventory:
    - RepairService: list/get/create/update/delete, the assignee filter and
      the partial-update merge
"""

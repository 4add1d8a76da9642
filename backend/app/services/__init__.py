# Services package init
"""
Notekeeper Backend — Services Layer
=====================================

Service Inventory:
    - NoteService: list/create/update/delete handlers over a NoteRepository
    - collation:   case/accent folding used by duplicate detection
"""

# Models package init
"""
Notekeeper Backend — ORM Models
=================================

    - note.py: Note (`notes` table)
    - user.py: User (`users` table, read-only for this service)
"""

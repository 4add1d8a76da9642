# Routes package init
"""
Notekeeper Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET    /notes   (list notes with owner usernames)
                  POST   /notes   (create)
                  PATCH  /notes   (update)
                  DELETE /notes   (delete)
    - health.py:  GET    /health  (service health check)

Routes are THIN: extract the body, call NoteService, return the result.
"""

# Routes package init
"""
MenuRelay Backend — API Routes Package
========================================

Route Inventory:
    - faces.py:   POST /detectFaces      (image → sorted face rectangles)
    - menu.py:    POST /uploadPdfDirect  (overwrite the menu PDF)
                  POST /getUploadUrl     (signed PUT URL for the menu PDF)
                  GET  /menu_current     (serve the menu PDF)
    - health.py:  GET  /                 (plaintext liveness)
                  GET  /health           (dependency status)

Routes are THIN: extract the body, call the service, return its result.
Errors are raised as application exceptions and formatted by the global
handlers in main.py.
"""

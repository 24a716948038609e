# Services package init
"""
MenuRelay Backend — Services Layer
====================================

What:  Relay logic sitting between routes (HTTP) and the Google Cloud SDKs.

Service Inventory:
    - FaceDetector (abstract): Interface for face-detection providers
    - GoogleVisionService: Concrete implementation on Cloud Vision
    - face_boxes: Polygon → rectangle normalizer
    - FaceService: validate → detect → normalize workflow
    - MenuStore (abstract): Single overwrite-only document slot
    - GcsMenuStore: Concrete implementation on Cloud Storage
    - MenuService: upload / fetch / signed-URL workflows
"""

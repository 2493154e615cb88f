# src/prescription_ocr/processors/__init__.py
"""
Document Processors Module

- Prescriptions (MedicineRefiner): dedup + DetectedMedicine construction
"""

from .prescription import MedicineRefiner

__all__ = [
    "MedicineRefiner",
]

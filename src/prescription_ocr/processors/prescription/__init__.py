from .refiner import MedicineRefiner

__all__ = ["MedicineRefiner"]

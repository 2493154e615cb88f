from .line_classifier import LineClassifier

__all__ = ["LineClassifier"]

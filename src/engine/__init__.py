from src.engine.charges import ChargeTracker
from src.engine.classifier import GcdClassifier
from src.engine.comparator import OpaqueComparator

__all__ = ["ChargeTracker", "GcdClassifier", "OpaqueComparator"]

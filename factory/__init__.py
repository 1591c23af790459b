from factory.muhle_factory import MuhleFactory

__all__ = ["MuhleFactory"]

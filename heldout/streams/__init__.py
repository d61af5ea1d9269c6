from .cached import CachedExampleStream
from .frame import DataFrameStream, FileStream
from .hyperplane import HyperplaneGenerator

__all__ = [
    "CachedExampleStream",
    "DataFrameStream",
    "FileStream",
    "HyperplaneGenerator",
]

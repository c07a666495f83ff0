
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

@dataclass(frozen=True)
class Variant(Generic[T]):
    name: T
    weight: Union[int, float]  # unvalidated; may be negative, zero or fractional


from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from rollout_bucket.config import BucketerConfig
from rollout_bucket.hashing.adapter import Murmur3Hasher
from rollout_bucket.hashing.api import get_hasher
from rollout_bucket.hashing.base import Hasher
from rollout_bucket.observability.logging import log_decision
from rollout_bucket.variant import Variant

T = TypeVar("T")

NUM_BUCKETS = 100
KEY_DELIMITER = ":"

VariantLike = Union[Variant[T], Mapping[str, Any]]

def _unpack_variant(variant: VariantLike) -> Tuple[Any, Union[int, float]]:
    # JSON等から読んだdictもそのまま受け付ける
    if isinstance(variant, Mapping):
        return variant["name"], variant["weight"]
    return variant.name, variant.weight

@dataclass(frozen=True)
class Bucketer:
    """
    feature と identifier の組から、決定的かつ一様な 0-99 のバケットを割り当てる。
    状態は seed (と hasher) のみで、全ての操作は純粋関数。

    Note:
        key は "feature:identifier" の単純な連結のため、
        ("a:b", "c") と ("a", "b:c") は同じバケットになる。
        既存の割当てとの互換性のため、あえてエスケープしていない。
    """
    seed: int = 0
    hasher: Hasher = field(default_factory=Murmur3Hasher)

    @classmethod
    def from_config(cls, config: BucketerConfig) -> "Bucketer":
        return cls(seed=config.seed, hasher=get_hasher(config.hash_algorithm))

    def bucket(self, feature: str, identifier: str) -> int:
        """
        Returns the bucket (0-99) for the given feature and identifier.

        The hash may be signed, so its absolute value is reduced modulo 100.
        """
        key = f"{feature}{KEY_DELIMITER}{identifier}".encode("utf-8", "surrogatepass")
        hash_value = self.hasher.hash32(key, self.seed)
        result = abs(hash_value) % NUM_BUCKETS

        log_decision("bucket_computed", feature, identifier, self.seed, result)
        return result

    def enabled(self, feature: str, identifier: str, percentage: float) -> bool:
        """
        Percentage rollout:
        percentage <= 0 は常にFalse、>= 100 は常にTrue。
        それ以外は bucket < percentage で判定するため、
        percentage を上げても一度有効になったidentifierが無効に戻ることはない。
        """
        if percentage <= 0:
            return False
        if percentage >= 100:
            return True

        bucket = self.bucket(feature, identifier)
        result = bucket < percentage

        log_decision("rollout_evaluated", feature, identifier, self.seed, bucket,
                     percentage=percentage, enabled=result)
        return result

    def variant(self, feature: str, identifier: str, variants: Sequence[VariantLike[T]]) -> Optional[T]:
        """
        Weighted variant selection:
        Walks the variants in order, accumulating weights, and returns the
        first name whose cumulative range contains the bucket.

        Args:
            variants: Ordered Variant (or {"name", "weight"} mapping) list.
                Weights are not validated.

        Returns:
            The selected name, or None only when variants is empty.
            If the weights leave high buckets uncovered, the last variant wins.
        """
        if not variants:
            return None

        bucket = self.bucket(feature, identifier)

        cumulative: Union[int, float] = 0
        selected = None
        for variant in variants:
            name, weight = _unpack_variant(variant)
            cumulative += weight
            if bucket < cumulative:
                selected = name
                break
        else:
            # Fallback to last variant if weights don't cover this bucket
            selected, _ = _unpack_variant(variants[-1])

        log_decision("variant_selected", feature, identifier, self.seed, bucket,
                     variant=selected)
        return selected
